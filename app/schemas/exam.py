"""Exam schemas."""

import datetime

from pydantic import Field

from app.schemas.common import BaseSchema, PatchSchema


class ExamBase(BaseSchema):
    """Base exam schema."""

    name: str = Field(..., min_length=1, max_length=255)
    subject: str = Field(..., min_length=1, max_length=100)
    max_score: float = Field(..., gt=0)
    date: datetime.date
    duration_minutes: int = Field(..., ge=0)


class ExamCreate(ExamBase):
    """Exam creation schema. The id is generated when omitted."""

    id: str | None = Field(None, min_length=1, max_length=64)


class ExamUpdate(PatchSchema):
    """Exam update schema."""

    name: str | None = Field(None, min_length=1, max_length=255)
    subject: str | None = Field(None, min_length=1, max_length=100)
    max_score: float | None = Field(None, gt=0)
    date: datetime.date | None = None
    duration_minutes: int | None = Field(None, ge=0)


class ExamResponse(ExamBase):
    """Exam response schema."""

    id: str
