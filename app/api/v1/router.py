"""Main API router aggregating all module routers."""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    analytics,
    exams,
    exports,
    grades,
    students,
)

api_router = APIRouter()

# Students
api_router.include_router(
    students.router,
    prefix="/students",
    tags=["Students"],
)

# Exams
api_router.include_router(
    exams.router,
    prefix="/exams",
    tags=["Exams"],
)

# Grades
api_router.include_router(
    grades.router,
    prefix="/grades",
    tags=["Grades"],
)

# Analytics (read-only, computed from the current snapshot)
api_router.include_router(
    analytics.router,
    prefix="/analytics",
    tags=["Analytics"],
)

# Exports
api_router.include_router(
    exports.router,
    prefix="/exports",
    tags=["Exports"],
)
