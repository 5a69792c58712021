"""
Main application entry point - FastAPI app instance and configuration.
Run with: uvicorn app.main:app --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logging import setup_logging
from app.routers import auth, users, google_auth
from app.routers import tasks, projects, study_subjects, study_topics, annual_goals, quizzes

# ---------------------------------------------------------------------------
# LOGGING
# ---------------------------------------------------------------------------
# One handler on the "chronos" logger; every module logs under chronos.*
setup_logging(settings.LOG_LEVEL)

# ---------------------------------------------------------------------------
# CREATE FASTAPI APPLICATION
# ---------------------------------------------------------------------------
# Swagger UI at /docs, ReDoc at /redoc
app = FastAPI(
    title=settings.APP_NAME,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ---------------------------------------------------------------------------
# CORS MIDDLEWARE
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# REGISTER ROUTERS
# ---------------------------------------------------------------------------
# auth.router: /auth/register, /auth/login, /auth/logout
# users.router: /users/me
# google_auth.router: /auth/google (calendar connect flow)
# tasks.router: /tasks CRUD + /tasks/dashboard
# projects.router: /projects CRUD + /projects/{id}/tasks
# study_subjects.router: /study-subjects CRUD + /study-subjects/{id}/topics
# study_topics.router: /study-topics CRUD + /study-topics/{id}/tasks
# annual_goals.router: /annual-goals CRUD
# quizzes.router: /quizzes + /quizzes/{id}/questions
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(google_auth.router)
app.include_router(tasks.router)
app.include_router(projects.router)
app.include_router(study_subjects.router)
app.include_router(study_topics.router)
app.include_router(annual_goals.router)
app.include_router(quizzes.router)


# ---------------------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ---------------------------------------------------------------------------
@app.get("/health", tags=["health"])
def health_check():
    """
    Liveness check. Does NOT check database or Google connectivity.

    Returns:
        {"status": "ok"}
    """
    return {"status": "ok"}
