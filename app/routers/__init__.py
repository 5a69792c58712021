"""
Routers module - API endpoint handlers organized by feature.

- auth: User registration and login
- users: User profile
- google_auth: Google Calendar connect flow
- tasks: Task CRUD + dashboard (calendar mirroring happens here)
- projects: Project CRUD + tasks per project
- study_topics: Study topic CRUD + tasks per topic
- annual_goals: Annual goal CRUD
"""
