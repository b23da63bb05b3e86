"""Immutable view of the gradebook collections."""

from pydantic import BaseModel, ConfigDict, Field

from app.models.exam import Exam
from app.models.grade import Grade
from app.models.student import Student


class Snapshot(BaseModel):
    """The three collections at one point in time.

    Collections are tuples kept in insertion order. A snapshot is never
    modified; the store publishes a new one for every successful mutation.
    """

    model_config = ConfigDict(frozen=True)

    version: int = Field(default=0, ge=0)
    students: tuple[Student, ...] = ()
    exams: tuple[Exam, ...] = ()
    grades: tuple[Grade, ...] = ()

    def find_student(self, student_id: str) -> Student | None:
        return next((s for s in self.students if s.id == student_id), None)

    def find_exam(self, exam_id: str) -> Exam | None:
        return next((e for e in self.exams if e.id == exam_id), None)

    def find_grade(self, grade_id: str) -> Grade | None:
        return next((g for g in self.grades if g.id == grade_id), None)

    def grades_for_student(self, student_id: str) -> tuple[Grade, ...]:
        """Grades recorded for a student, in insertion order."""
        return tuple(g for g in self.grades if g.student_id == student_id)

    def __repr__(self) -> str:
        return (
            f"<Snapshot(version={self.version}, students={len(self.students)}, "
            f"exams={len(self.exams)}, grades={len(self.grades)})>"
        )
