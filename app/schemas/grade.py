"""Grade schemas."""

import datetime

from pydantic import Field

from app.models import Grade
from app.schemas.common import BaseSchema, PatchSchema
from app.services.analytics import band_letter, grade_percentage


class GradeBase(BaseSchema):
    """Base grade schema."""

    student_id: str = Field(..., min_length=1, max_length=64)
    exam_name: str = Field(..., min_length=1, max_length=255)
    subject: str = Field(..., min_length=1, max_length=100)
    score: float = Field(..., ge=0)
    max_score: float = Field(..., gt=0)
    date: datetime.date


class GradeCreate(GradeBase):
    """Grade creation schema. The id is generated when omitted."""

    id: str | None = Field(None, min_length=1, max_length=64)


class GradeUpdate(PatchSchema):
    """Grade update schema."""

    student_id: str | None = Field(None, min_length=1, max_length=64)
    exam_name: str | None = Field(None, min_length=1, max_length=255)
    subject: str | None = Field(None, min_length=1, max_length=100)
    score: float | None = Field(None, ge=0)
    max_score: float | None = Field(None, gt=0)
    date: datetime.date | None = None


class GradeResponse(GradeBase):
    """Grade response schema with the derived percentage and band letter."""

    id: str
    percentage: float | None
    letter: str | None

    @classmethod
    def from_grade(cls, grade: Grade, decimals: int = 1) -> "GradeResponse":
        percentage = grade_percentage(grade)
        return cls(
            **grade.model_dump(),
            percentage=round(percentage, decimals) if percentage is not None else None,
            letter=band_letter(percentage) if percentage is not None else None,
        )
