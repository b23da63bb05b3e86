"""Gradebook record models package."""

from app.models.exam import Exam
from app.models.grade import Grade
from app.models.snapshot import Snapshot
from app.models.student import Student

__all__ = [
    # Student
    "Student",
    # Exam
    "Exam",
    # Grade
    "Grade",
    # Snapshot
    "Snapshot",
]
