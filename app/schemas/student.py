"""Student schemas."""

from datetime import date

from pydantic import Field

from app.schemas.common import BaseSchema, PatchSchema


class StudentBase(BaseSchema):
    """Base student schema."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255)
    enrollment_date: date


class StudentCreate(StudentBase):
    """Student creation schema. The id is generated when omitted."""

    id: str | None = Field(None, min_length=1, max_length=64)


class StudentUpdate(PatchSchema):
    """Student update schema."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = Field(None, max_length=255)
    enrollment_date: date | None = None


class StudentResponse(StudentBase):
    """Student response schema."""

    id: str
