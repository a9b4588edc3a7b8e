# File: app/api/v1/api.py
from fastapi import APIRouter
from app.api.v1.endpoints import auth, events, event_feedback, feedback, dashboard

# Create main API router
api_router = APIRouter()

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["authentication"]
)

api_router.include_router(
    events.router,
    prefix="/events",
    tags=["events"]
)

api_router.include_router(
    event_feedback.router,
    prefix="/events",
    tags=["event-feedback"]
)

api_router.include_router(
    feedback.router,
    prefix="/feedback",
    tags=["feedback"]
)

api_router.include_router(
    dashboard.router,
    prefix="/dashboard",
    tags=["dashboard"]
)
