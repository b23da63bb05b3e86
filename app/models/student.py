"""Student model."""

from datetime import date

from pydantic import Field

from app.models.base import EntityModel, IDMixin


class Student(EntityModel, IDMixin):
    """Student enrolled in the gradebook."""

    name: str = Field(..., min_length=1, max_length=255)
    # Expected to be unique, not enforced.
    email: str = Field(..., max_length=255)
    enrollment_date: date

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, name={self.name})>"
