"""Shared fixtures for the gradebook test suite."""

from datetime import date

import pytest

from app.models import Exam, Grade, Student
from app.services.seed import seed_store
from app.services.store import GradebookStore


# ---------------------------------------------------------------------------
# Record builders
# ---------------------------------------------------------------------------

def _make_student(student_id: str = "s1", **overrides) -> Student:
    data = {
        "id": student_id,
        "name": f"Student {student_id}",
        "email": f"{student_id}@example.com",
        "enrollment_date": date(2024, 1, 15),
    }
    data.update(overrides)
    return Student(**data)


def _make_exam(exam_id: str = "e1", **overrides) -> Exam:
    data = {
        "id": exam_id,
        "name": "Midterm Exam",
        "subject": "Mathematics",
        "max_score": 100,
        "date": date(2024, 3, 15),
        "duration_minutes": 120,
    }
    data.update(overrides)
    return Exam(**data)


def _make_grade(
    grade_id: str = "g1",
    student_id: str = "s1",
    score: float = 80,
    max_score: float = 100,
    **overrides,
) -> Grade:
    data = {
        "id": grade_id,
        "student_id": student_id,
        "exam_name": "Midterm Exam",
        "subject": "Mathematics",
        "score": score,
        "max_score": max_score,
        "date": date(2024, 3, 15),
    }
    data.update(overrides)
    return Grade(**data)


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------

@pytest.fixture
def store() -> GradebookStore:
    """Return an empty store."""
    return GradebookStore()


@pytest.fixture
def demo_store() -> GradebookStore:
    """Return a store loaded with the demo dataset."""
    store = GradebookStore()
    seed_store(store)
    return store


@pytest.fixture
def graded_store() -> GradebookStore:
    """Two students, one exam, three grades (two for s1, one for s2)."""
    store = GradebookStore()
    store.add_student(_make_student("s1"))
    store.add_student(_make_student("s2"))
    store.add_exam(_make_exam("e1"))
    store.add_grade(_make_grade("g1", "s1", 80))
    store.add_grade(_make_grade("g2", "s2", 70))
    store.add_grade(_make_grade("g3", "s1", 45, 50, subject="Physics", exam_name="Quiz 1"))
    return store


@pytest.fixture
def make_student():
    """Return a Student builder."""
    return _make_student


@pytest.fixture
def make_exam():
    """Return an Exam builder."""
    return _make_exam


@pytest.fixture
def make_grade():
    """Return a Grade builder."""
    return _make_grade
