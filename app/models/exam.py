"""Exam model."""

import datetime

from pydantic import Field

from app.models.base import EntityModel, IDMixin


class Exam(EntityModel, IDMixin):
    """Scheduled exam.

    Grades copy the exam name and subject instead of pointing at the exam id,
    so editing or deleting an exam never touches recorded grades.
    """

    name: str = Field(..., min_length=1, max_length=255)
    subject: str = Field(..., min_length=1, max_length=100)
    max_score: float = Field(..., gt=0)
    date: datetime.date
    duration_minutes: int = Field(..., ge=0)

    def __repr__(self) -> str:
        return f"<Exam(id={self.id}, name={self.name}, subject={self.subject})>"
