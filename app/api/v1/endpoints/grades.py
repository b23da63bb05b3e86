"""Grade management endpoints."""

from uuid import uuid4

from fastapi import APIRouter

from app.core.dependencies import AppSettings, Store
from app.schemas.common import MessageResponse
from app.schemas.grade import GradeCreate, GradeResponse, GradeUpdate

router = APIRouter()


@router.post("", response_model=GradeResponse)
def create_grade(request: GradeCreate, store: Store, settings: AppSettings):
    """Record a grade for an existing student."""
    data = request.model_dump()
    data["id"] = request.id or uuid4().hex
    snapshot = store.add_grade(data)
    return GradeResponse.from_grade(snapshot.find_grade(data["id"]), settings.SCORE_DECIMALS)


@router.get("", response_model=list[GradeResponse])
def list_grades(store: Store, settings: AppSettings):
    """List grades in insertion order."""
    return [GradeResponse.from_grade(g, settings.SCORE_DECIMALS) for g in store.grades]


@router.get("/{grade_id}", response_model=GradeResponse)
def get_grade(grade_id: str, store: Store, settings: AppSettings):
    """Get a grade by ID."""
    return GradeResponse.from_grade(store.get_grade(grade_id), settings.SCORE_DECIMALS)


@router.patch("/{grade_id}", response_model=GradeResponse)
def update_grade(grade_id: str, request: GradeUpdate, store: Store, settings: AppSettings):
    """Update a grade."""
    snapshot = store.update_grade(grade_id, request)
    return GradeResponse.from_grade(snapshot.find_grade(grade_id), settings.SCORE_DECIMALS)


@router.delete("/{grade_id}", response_model=MessageResponse)
def delete_grade(grade_id: str, store: Store):
    """Delete a grade."""
    store.delete_grade(grade_id)
    return MessageResponse(message="Grade deleted successfully")
