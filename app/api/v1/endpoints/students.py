"""Student management endpoints."""

from uuid import uuid4

from fastapi import APIRouter

from app.core.dependencies import AppSettings, Store
from app.schemas.common import MessageResponse
from app.schemas.grade import GradeResponse
from app.schemas.student import StudentCreate, StudentResponse, StudentUpdate

router = APIRouter()


@router.post("", response_model=StudentResponse)
def create_student(request: StudentCreate, store: Store):
    """Create a new student."""
    data = request.model_dump()
    data["id"] = request.id or uuid4().hex
    snapshot = store.add_student(data)
    return StudentResponse.model_validate(snapshot.find_student(data["id"]))


@router.get("", response_model=list[StudentResponse])
def list_students(store: Store):
    """List students in insertion order."""
    return [StudentResponse.model_validate(s) for s in store.students]


@router.get("/{student_id}", response_model=StudentResponse)
def get_student(student_id: str, store: Store):
    """Get a student by ID."""
    return StudentResponse.model_validate(store.get_student(student_id))


@router.get("/{student_id}/grades", response_model=list[GradeResponse])
def list_student_grades(student_id: str, store: Store, settings: AppSettings):
    """List every grade recorded for a student."""
    return [
        GradeResponse.from_grade(g, settings.SCORE_DECIMALS)
        for g in store.grades_for_student(student_id)
    ]


@router.patch("/{student_id}", response_model=StudentResponse)
def update_student(student_id: str, request: StudentUpdate, store: Store):
    """Update a student."""
    snapshot = store.update_student(student_id, request)
    return StudentResponse.model_validate(snapshot.find_student(student_id))


@router.delete("/{student_id}", response_model=MessageResponse)
def delete_student(student_id: str, store: Store):
    """Delete a student and all of their grades."""
    store.delete_student(student_id)
    return MessageResponse(message="Student deleted successfully")
