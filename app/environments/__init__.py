"""
Environments Module - External Service Integrations

environments/
├── __init__.py           # Module exports
├── base.py               # Base classes and exception taxonomy
└── google/               # Google OAuth + Calendar

Design Principles:
==================
1. Provider isolation: everything Google-specific lives under google/
2. Typed failures: callers branch on exception classes, not status codes
3. No persistence here: clients receive tokens, they never read the database
"""

from app.environments.base import (
    EnvironmentProvider,
    EnvironmentError,
    AuthenticationError,
    TokenExpiredError,
    CalendarCredentialsError,
    UserNotFoundError,
    MissingCredentialsError,
    DecryptionFailedError,
    APIError,
    EventNotFoundError,
)

__all__ = [
    "EnvironmentProvider",
    "EnvironmentError",
    "AuthenticationError",
    "TokenExpiredError",
    "CalendarCredentialsError",
    "UserNotFoundError",
    "MissingCredentialsError",
    "DecryptionFailedError",
    "APIError",
    "EventNotFoundError",
]
