"""Gradebook store: owns the student, exam and grade collections."""

import logging
import threading
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import (
    DuplicateIdError,
    ImmutableFieldError,
    InvalidReferenceError,
    NotFoundError,
    ValidationError,
)
from app.models import Exam, Grade, Snapshot, Student
from app.models.base import EntityModel

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=EntityModel)


class GradebookStore:
    """Single source of truth for students, exams and grades.

    Every mutation builds the next ``Snapshot`` from the current one and
    publishes it only once it is complete, so a failed operation leaves the
    store untouched. Readers keep whatever snapshot they were handed; it never
    changes underneath them. Writers are serialized by a lock, readers never
    wait on it.
    """

    def __init__(self, snapshot: Snapshot | None = None):
        self._snapshot = snapshot if snapshot is not None else Snapshot()
        self._write_lock = threading.Lock()

    # ==========================================
    # Read access
    # ==========================================

    @property
    def snapshot(self) -> Snapshot:
        """Current published snapshot."""
        return self._snapshot

    @property
    def version(self) -> int:
        return self._snapshot.version

    @property
    def students(self) -> tuple[Student, ...]:
        return self._snapshot.students

    @property
    def exams(self) -> tuple[Exam, ...]:
        return self._snapshot.exams

    @property
    def grades(self) -> tuple[Grade, ...]:
        return self._snapshot.grades

    def get_student(self, student_id: str) -> Student:
        """Get student by ID."""
        student = self._snapshot.find_student(student_id)
        if student is None:
            raise NotFoundError("Student", student_id)
        return student

    def get_exam(self, exam_id: str) -> Exam:
        """Get exam by ID."""
        exam = self._snapshot.find_exam(exam_id)
        if exam is None:
            raise NotFoundError("Exam", exam_id)
        return exam

    def get_grade(self, grade_id: str) -> Grade:
        """Get grade by ID."""
        grade = self._snapshot.find_grade(grade_id)
        if grade is None:
            raise NotFoundError("Grade", grade_id)
        return grade

    def grades_for_student(self, student_id: str) -> tuple[Grade, ...]:
        """Get a student's grades, failing if the student is unknown."""
        snapshot = self._snapshot
        if snapshot.find_student(student_id) is None:
            raise NotFoundError("Student", student_id)
        return snapshot.grades_for_student(student_id)

    # ==========================================
    # Students
    # ==========================================

    def add_student(self, record: Student | Mapping[str, Any]) -> Snapshot:
        """Insert a student."""
        student = _validate(Student, record)
        with self._write_lock:
            current = self._snapshot
            if current.find_student(student.id) is not None:
                logger.warning(f"[STORE] Rejected student {student.id}: duplicate id")
                raise DuplicateIdError("Student", student.id)
            return self._publish(current, students=current.students + (student,))

    def update_student(
        self,
        student_id: str,
        fields: BaseModel | Mapping[str, Any],
    ) -> Snapshot:
        """Merge a partial patch into an existing student."""
        patch = _patch_fields(fields)
        with self._write_lock:
            current = self._snapshot
            existing = current.find_student(student_id)
            if existing is None:
                raise NotFoundError("Student", student_id)
            updated = _merge(existing, patch)
            return self._publish(current, students=_replace(current.students, updated))

    def delete_student(self, student_id: str) -> Snapshot:
        """Delete a student together with every grade recorded for them."""
        with self._write_lock:
            current = self._snapshot
            if current.find_student(student_id) is None:
                raise NotFoundError("Student", student_id)
            remaining = tuple(g for g in current.grades if g.student_id != student_id)
            logger.info(
                f"[STORE] Deleting student {student_id} and "
                f"{len(current.grades) - len(remaining)} grade(s)"
            )
            return self._publish(
                current,
                students=tuple(s for s in current.students if s.id != student_id),
                grades=remaining,
            )

    # ==========================================
    # Exams
    # ==========================================

    def add_exam(self, record: Exam | Mapping[str, Any]) -> Snapshot:
        """Insert an exam."""
        exam = _validate(Exam, record)
        with self._write_lock:
            current = self._snapshot
            if current.find_exam(exam.id) is not None:
                logger.warning(f"[STORE] Rejected exam {exam.id}: duplicate id")
                raise DuplicateIdError("Exam", exam.id)
            return self._publish(current, exams=current.exams + (exam,))

    def update_exam(
        self,
        exam_id: str,
        fields: BaseModel | Mapping[str, Any],
    ) -> Snapshot:
        """Merge a partial patch into an existing exam.

        Grades keep their own copy of the exam name and subject, so renaming
        an exam here does not rewrite them.
        """
        patch = _patch_fields(fields)
        with self._write_lock:
            current = self._snapshot
            existing = current.find_exam(exam_id)
            if existing is None:
                raise NotFoundError("Exam", exam_id)
            updated = _merge(existing, patch)
            return self._publish(current, exams=_replace(current.exams, updated))

    def delete_exam(self, exam_id: str) -> Snapshot:
        """Delete an exam. Grades recorded against it are kept."""
        with self._write_lock:
            current = self._snapshot
            if current.find_exam(exam_id) is None:
                raise NotFoundError("Exam", exam_id)
            return self._publish(
                current,
                exams=tuple(e for e in current.exams if e.id != exam_id),
            )

    # ==========================================
    # Grades
    # ==========================================

    def add_grade(self, record: Grade | Mapping[str, Any]) -> Snapshot:
        """Insert a grade for an existing student."""
        grade = _validate(Grade, record)
        with self._write_lock:
            current = self._snapshot
            if current.find_grade(grade.id) is not None:
                logger.warning(f"[STORE] Rejected grade {grade.id}: duplicate id")
                raise DuplicateIdError("Grade", grade.id)
            if current.find_student(grade.student_id) is None:
                logger.warning(
                    f"[STORE] Rejected grade {grade.id}: unknown student {grade.student_id}"
                )
                raise InvalidReferenceError("Student", "student_id", grade.student_id)
            return self._publish(current, grades=current.grades + (grade,))

    def update_grade(
        self,
        grade_id: str,
        fields: BaseModel | Mapping[str, Any],
    ) -> Snapshot:
        """Merge a partial patch into an existing grade."""
        patch = _patch_fields(fields)
        with self._write_lock:
            current = self._snapshot
            existing = current.find_grade(grade_id)
            if existing is None:
                raise NotFoundError("Grade", grade_id)
            updated = _merge(existing, patch)
            if (
                updated.student_id != existing.student_id
                and current.find_student(updated.student_id) is None
            ):
                raise InvalidReferenceError("Student", "student_id", updated.student_id)
            return self._publish(current, grades=_replace(current.grades, updated))

    def delete_grade(self, grade_id: str) -> Snapshot:
        """Delete a grade."""
        with self._write_lock:
            current = self._snapshot
            if current.find_grade(grade_id) is None:
                raise NotFoundError("Grade", grade_id)
            return self._publish(
                current,
                grades=tuple(g for g in current.grades if g.id != grade_id),
            )

    # ==========================================
    # Internals
    # ==========================================

    def _publish(self, current: Snapshot, **collections: tuple) -> Snapshot:
        """Swap in the next snapshot. Caller must hold the write lock."""
        next_snapshot = current.model_copy(
            update={**collections, "version": current.version + 1}
        )
        self._snapshot = next_snapshot
        logger.debug(f"[STORE] Published {next_snapshot!r}")
        return next_snapshot


def _validate(model: type[RecordT], data: RecordT | Mapping[str, Any]) -> RecordT:
    """Build a validated record, mapping pydantic failures to ValidationError."""
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Invalid {model.__name__.lower()} data",
            details={
                "errors": e.errors(
                    include_url=False,
                    include_context=False,
                    include_input=False,
                )
            },
        )


def _patch_fields(fields: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
    """Normalize a patch; only explicitly set fields are applied."""
    if isinstance(fields, BaseModel):
        patch = fields.model_dump(exclude_unset=True)
    else:
        patch = dict(fields)
    if "id" in patch:
        raise ImmutableFieldError("id")
    return patch


def _merge(existing: RecordT, patch: dict[str, Any]) -> RecordT:
    """Apply a patch to a record and revalidate the result."""
    data = existing.model_dump()
    data.update(patch)
    return _validate(type(existing), data)


def _replace(records: tuple[RecordT, ...], updated: RecordT) -> tuple[RecordT, ...]:
    """Swap one record in place, keeping insertion order."""
    return tuple(updated if r.id == updated.id else r for r in records)
