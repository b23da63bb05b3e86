"""Exam management endpoints."""

from uuid import uuid4

from fastapi import APIRouter

from app.core.dependencies import Store
from app.schemas.common import MessageResponse
from app.schemas.exam import ExamCreate, ExamResponse, ExamUpdate

router = APIRouter()


@router.post("", response_model=ExamResponse)
def create_exam(request: ExamCreate, store: Store):
    """Create a new exam."""
    data = request.model_dump()
    data["id"] = request.id or uuid4().hex
    snapshot = store.add_exam(data)
    return ExamResponse.model_validate(snapshot.find_exam(data["id"]))


@router.get("", response_model=list[ExamResponse])
def list_exams(store: Store):
    """List exams in insertion order."""
    return [ExamResponse.model_validate(e) for e in store.exams]


@router.get("/{exam_id}", response_model=ExamResponse)
def get_exam(exam_id: str, store: Store):
    """Get an exam by ID."""
    return ExamResponse.model_validate(store.get_exam(exam_id))


@router.patch("/{exam_id}", response_model=ExamResponse)
def update_exam(exam_id: str, request: ExamUpdate, store: Store):
    """
    Update an exam.

    Grades already recorded keep their own exam name and subject.
    """
    snapshot = store.update_exam(exam_id, request)
    return ExamResponse.model_validate(snapshot.find_exam(exam_id))


@router.delete("/{exam_id}", response_model=MessageResponse)
def delete_exam(exam_id: str, store: Store):
    """Delete an exam. Recorded grades are not removed."""
    store.delete_exam(exam_id)
    return MessageResponse(message="Exam deleted successfully")
