"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from question_bank.api.v1.dependencies.
"""

from fastapi import APIRouter

from question_bank.api.v1.endpoints import (
    admin,
    auth,
    contact,
    dashboard,
    downloads,
    health,
    profile,
    questions,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(questions.router, prefix="/questions", tags=["questions"])
api_router.include_router(admin.router, prefix="/admin/questions", tags=["admin"])
api_router.include_router(downloads.router, prefix="/downloads", tags=["downloads"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(contact.router, prefix="/contact", tags=["contact"])
