"""Grade model."""

import datetime

from pydantic import Field

from app.models.base import EntityModel, IDMixin


class Grade(EntityModel, IDMixin):
    """Score a student obtained in one exam."""

    student_id: str = Field(..., min_length=1, max_length=64)
    exam_name: str = Field(..., min_length=1, max_length=255)
    subject: str = Field(..., min_length=1, max_length=100)
    score: float = Field(..., ge=0)
    # score <= max_score is expected but not enforced
    max_score: float = Field(..., gt=0)
    date: datetime.date

    def __repr__(self) -> str:
        return f"<Grade(id={self.id}, student_id={self.student_id}, exam={self.exam_name})>"
