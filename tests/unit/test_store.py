"""Test GradebookStore mutations, cascades and failure atomicity."""

import threading
from datetime import date

import pytest
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import (
    AppException,
    DuplicateIdError,
    ImmutableFieldError,
    InvalidReferenceError,
    NotFoundError,
    ValidationError,
)
from app.schemas.student import StudentUpdate


class TestStudents:
    def test_add_student_returns_next_snapshot(self, store, make_student):
        before = store.snapshot
        after = store.add_student(make_student("s1"))
        assert after is store.snapshot
        assert after.version == before.version + 1
        assert [s.id for s in after.students] == ["s1"]
        # The earlier snapshot is untouched
        assert before.students == ()

    def test_add_student_accepts_mapping(self, store):
        store.add_student({
            "id": "s1",
            "name": "Alice Johnson",
            "email": "alice@example.com",
            "enrollment_date": date(2024, 1, 15),
        })
        assert store.get_student("s1").name == "Alice Johnson"

    def test_add_student_duplicate_id(self, store, make_student):
        store.add_student(make_student("s1"))
        version = store.version
        with pytest.raises(DuplicateIdError) as exc_info:
            store.add_student(make_student("s1", name="Someone Else"))
        assert exc_info.value.code == "DUPLICATE_ID"
        assert store.version == version
        assert store.get_student("s1").name == "Student s1"

    def test_add_student_rejects_blank_name(self, store):
        with pytest.raises(ValidationError):
            store.add_student({
                "id": "s1",
                "name": "   ",
                "email": "x@example.com",
                "enrollment_date": date(2024, 1, 15),
            })
        assert store.students == ()

    def test_update_student_merges_fields(self, store, make_student):
        store.add_student(make_student("s1"))
        store.add_student(make_student("s2"))
        snapshot = store.update_student("s1", {"name": "Renamed"})
        student = snapshot.find_student("s1")
        assert student.name == "Renamed"
        assert student.email == "s1@example.com"
        # Position in insertion order is kept
        assert [s.id for s in snapshot.students] == ["s1", "s2"]

    def test_update_student_with_schema_applies_only_set_fields(self, store, make_student):
        store.add_student(make_student("s1"))
        store.update_student("s1", StudentUpdate(email="new@example.com"))
        student = store.get_student("s1")
        assert student.email == "new@example.com"
        assert student.name == "Student s1"

    def test_update_student_rejects_id_in_patch(self, store, make_student):
        store.add_student(make_student("s1"))
        with pytest.raises(ImmutableFieldError):
            store.update_student("s1", {"id": "s9", "name": "X"})
        assert store.get_student("s1").name == "Student s1"

    def test_update_student_rejects_id_even_if_unchanged(self, store, make_student):
        store.add_student(make_student("s1"))
        with pytest.raises(ImmutableFieldError):
            store.update_student("s1", {"id": "s1"})

    def test_update_student_unknown_field(self, store, make_student):
        store.add_student(make_student("s1"))
        with pytest.raises(ValidationError):
            store.update_student("s1", {"nickname": "Al"})

    def test_update_missing_student(self, store):
        with pytest.raises(NotFoundError):
            store.update_student("nope", {"name": "X"})

    def test_delete_missing_student(self, store):
        with pytest.raises(NotFoundError):
            store.delete_student("nope")

    def test_get_missing_student(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            store.get_student("nope")
        assert exc_info.value.details == {"identifier": "nope"}


class TestStudentCascade:
    def test_delete_student_removes_only_their_grades(self, graded_store):
        before = graded_store.snapshot
        owned = len(before.grades_for_student("s1"))
        after = graded_store.delete_student("s1")

        assert after.find_student("s1") is None
        assert len(after.grades) == len(before.grades) - owned
        assert all(g.student_id != "s1" for g in after.grades)
        assert [g.id for g in after.grades] == ["g2"]

    def test_delete_student_is_single_version_step(self, graded_store):
        version = graded_store.version
        graded_store.delete_student("s1")
        assert graded_store.version == version + 1

    def test_old_snapshot_still_has_cascaded_grades(self, graded_store):
        before = graded_store.snapshot
        graded_store.delete_student("s1")
        assert len(before.grades) == 3
        assert before.find_student("s1") is not None

    def test_grades_for_student(self, graded_store):
        assert [g.id for g in graded_store.grades_for_student("s1")] == ["g1", "g3"]

    def test_grades_for_unknown_student(self, graded_store):
        with pytest.raises(NotFoundError):
            graded_store.grades_for_student("nope")

    def test_end_to_end_delete_clears_grade(self, store, make_student, make_grade):
        store.add_student(make_student("A"))
        store.add_grade(make_grade("gA", "A", 80, 100, subject="Math"))
        store.delete_student("A")
        assert store.snapshot.find_grade("gA") is None
        assert store.grades == ()


class TestGrades:
    def test_add_grade_requires_student(self, store, make_grade):
        with pytest.raises(InvalidReferenceError) as exc_info:
            store.add_grade(make_grade("g1", "ghost"))
        assert exc_info.value.code == "INVALID_REFERENCE"
        assert store.grades == ()

    def test_add_grade_duplicate_id(self, graded_store, make_grade):
        with pytest.raises(DuplicateIdError):
            graded_store.add_grade(make_grade("g1", "s2"))

    def test_add_grade_rejects_zero_max_score(self, graded_store):
        with pytest.raises(ValidationError):
            graded_store.add_grade({
                "id": "g9",
                "student_id": "s1",
                "exam_name": "Quiz",
                "subject": "Mathematics",
                "score": 0,
                "max_score": 0,
                "date": date(2024, 2, 1),
            })

    @pytest.mark.parametrize("field,value", [
        ("score", float("inf")),
        ("score", float("nan")),
        ("max_score", float("inf")),
        ("max_score", float("nan")),
    ])
    def test_add_grade_rejects_non_finite_numbers(self, graded_store, field, value):
        record = {
            "id": "g9",
            "student_id": "s1",
            "exam_name": "Quiz",
            "subject": "Mathematics",
            "score": 5,
            "max_score": 10,
            "date": date(2024, 2, 1),
        }
        record[field] = value
        with pytest.raises(ValidationError):
            graded_store.add_grade(record)
        assert graded_store.snapshot.find_grade("g9") is None

    def test_update_grade_rejects_infinite_score(self, graded_store):
        with pytest.raises(ValidationError):
            graded_store.update_grade("g1", {"score": float("inf")})
        assert graded_store.get_grade("g1").score == 80

    def test_add_grade_allows_score_above_max(self, graded_store, make_grade):
        graded_store.add_grade(make_grade("g9", "s1", 110, 100))
        assert graded_store.get_grade("g9").score == 110

    def test_update_grade(self, graded_store):
        snapshot = graded_store.update_grade("g1", {"score": 95})
        assert snapshot.find_grade("g1").score == 95
        assert [g.id for g in snapshot.grades] == ["g1", "g2", "g3"]

    def test_update_grade_to_unknown_student(self, graded_store):
        with pytest.raises(InvalidReferenceError):
            graded_store.update_grade("g1", {"student_id": "ghost"})
        assert graded_store.get_grade("g1").student_id == "s1"

    def test_update_grade_to_other_student(self, graded_store):
        graded_store.update_grade("g1", {"student_id": "s2"})
        assert [g.id for g in graded_store.grades_for_student("s2")] == ["g1", "g2"]

    def test_update_grade_rejects_zero_max_score(self, graded_store):
        with pytest.raises(ValidationError):
            graded_store.update_grade("g1", {"max_score": 0})

    def test_delete_grade(self, graded_store):
        graded_store.delete_grade("g2")
        assert [g.id for g in graded_store.grades] == ["g1", "g3"]
        assert len(graded_store.students) == 2

    def test_delete_missing_grade(self, graded_store):
        with pytest.raises(NotFoundError):
            graded_store.delete_grade("nope")


class TestExams:
    def test_add_and_get_exam(self, store, make_exam):
        store.add_exam(make_exam("e1"))
        assert store.get_exam("e1").duration_minutes == 120

    def test_add_exam_duplicate_id(self, store, make_exam):
        store.add_exam(make_exam("e1"))
        with pytest.raises(DuplicateIdError):
            store.add_exam(make_exam("e1"))

    def test_add_exam_rejects_negative_duration(self, store, make_exam):
        with pytest.raises(PydanticValidationError):
            make_exam("e1", duration_minutes=-5)
        with pytest.raises(ValidationError):
            store.add_exam({
                "id": "e1",
                "name": "Quiz",
                "subject": "Mathematics",
                "max_score": 10,
                "date": date(2024, 2, 1),
                "duration_minutes": -5,
            })

    def test_add_exam_rejects_infinite_max_score(self, store, make_exam):
        with pytest.raises(PydanticValidationError):
            make_exam("e1", max_score=float("inf"))
        with pytest.raises(ValidationError):
            store.add_exam({
                "id": "e1",
                "name": "Quiz",
                "subject": "Mathematics",
                "max_score": float("inf"),
                "date": date(2024, 2, 1),
                "duration_minutes": 30,
            })
        assert store.exams == ()

    def test_rename_exam_does_not_touch_grades(self, graded_store):
        graded_store.update_exam("e1", {"name": "Renamed Midterm"})
        assert graded_store.get_exam("e1").name == "Renamed Midterm"
        assert graded_store.get_grade("g1").exam_name == "Midterm Exam"

    def test_delete_exam_keeps_grades(self, graded_store):
        grades = graded_store.grades
        graded_store.delete_exam("e1")
        assert graded_store.exams == ()
        assert graded_store.grades == grades

    def test_update_exam_rejects_id(self, graded_store):
        with pytest.raises(ImmutableFieldError):
            graded_store.update_exam("e1", {"id": "e2"})

    def test_delete_missing_exam(self, store):
        with pytest.raises(NotFoundError):
            store.delete_exam("nope")


class TestSnapshotVersioning:
    def test_failed_operations_do_not_bump_version(self, graded_store, make_grade):
        version = graded_store.version
        for op in (
            lambda: graded_store.add_grade(make_grade("g1", "s1")),
            lambda: graded_store.add_grade(make_grade("g8", "ghost")),
            lambda: graded_store.delete_student("ghost"),
            lambda: graded_store.update_exam("ghost", {"name": "X"}),
        ):
            with pytest.raises(AppException):
                op()
        assert graded_store.version == version

    def test_every_successful_mutation_bumps_version(self, store, make_student, make_exam):
        store.add_student(make_student("s1"))
        store.add_exam(make_exam("e1"))
        store.update_student("s1", {"name": "X"})
        store.delete_exam("e1")
        assert store.version == 4


class TestConcurrentWriters:
    def test_no_lost_updates(self, store, make_student):
        threads_count, per_thread = 8, 200
        barrier = threading.Barrier(threads_count)
        errors = []

        def insert(worker: int):
            barrier.wait()
            try:
                for i in range(per_thread):
                    store.add_student(make_student(f"w{worker}-{i}"))
            except AppException as e:
                errors.append(e)

        workers = [threading.Thread(target=insert, args=(n,)) for n in range(threads_count)]
        for t in workers:
            t.start()
        for t in workers:
            t.join()

        assert errors == []
        assert len(store.students) == threads_count * per_thread
        assert store.version == threads_count * per_thread
        assert len({s.id for s in store.students}) == threads_count * per_thread

    def test_concurrent_duplicates_admit_one(self, store, make_student):
        threads_count = 8
        barrier = threading.Barrier(threads_count)
        rejected = []

        def insert():
            barrier.wait()
            try:
                store.add_student(make_student("same"))
            except DuplicateIdError as e:
                rejected.append(e)

        workers = [threading.Thread(target=insert) for _ in range(threads_count)]
        for t in workers:
            t.start()
        for t in workers:
            t.join()

        assert [s.id for s in store.students] == ["same"]
        assert len(rejected) == threads_count - 1
        assert store.version == 1
