"""Demo dataset for a freshly started gradebook."""

import logging
from datetime import date

from app.services.store import GradebookStore

logger = logging.getLogger(__name__)


DEMO_STUDENTS = [
    {"id": "1", "name": "Alice Johnson", "email": "alice@example.com", "enrollment_date": date(2024, 1, 15)},
    {"id": "2", "name": "Bob Smith", "email": "bob@example.com", "enrollment_date": date(2024, 1, 16)},
    {"id": "3", "name": "Charlie Brown", "email": "charlie@example.com", "enrollment_date": date(2024, 1, 17)},
    {"id": "4", "name": "Diana Prince", "email": "diana@example.com", "enrollment_date": date(2024, 1, 18)},
    {"id": "5", "name": "Ethan Hunt", "email": "ethan@example.com", "enrollment_date": date(2024, 1, 19)},
]

DEMO_EXAMS = [
    {"id": "1", "name": "Midterm Exam", "subject": "Mathematics", "max_score": 100, "date": date(2024, 3, 15), "duration_minutes": 120},
    {"id": "2", "name": "Quiz 1", "subject": "Mathematics", "max_score": 50, "date": date(2024, 2, 10), "duration_minutes": 45},
    {"id": "3", "name": "Final Exam", "subject": "Physics", "max_score": 100, "date": date(2024, 5, 20), "duration_minutes": 180},
    {"id": "4", "name": "Lab Test", "subject": "Chemistry", "max_score": 75, "date": date(2024, 4, 5), "duration_minutes": 90},
]

DEMO_GRADES = [
    {"id": "1", "student_id": "1", "exam_name": "Midterm Exam", "subject": "Mathematics", "score": 85, "max_score": 100, "date": date(2024, 3, 15)},
    {"id": "2", "student_id": "1", "exam_name": "Quiz 1", "subject": "Mathematics", "score": 45, "max_score": 50, "date": date(2024, 2, 10)},
    {"id": "3", "student_id": "2", "exam_name": "Midterm Exam", "subject": "Mathematics", "score": 78, "max_score": 100, "date": date(2024, 3, 15)},
    {"id": "4", "student_id": "2", "exam_name": "Final Exam", "subject": "Physics", "score": 88, "max_score": 100, "date": date(2024, 5, 20)},
    {"id": "5", "student_id": "3", "exam_name": "Quiz 1", "subject": "Mathematics", "score": 42, "max_score": 50, "date": date(2024, 2, 10)},
    {"id": "6", "student_id": "3", "exam_name": "Lab Test", "subject": "Chemistry", "score": 65, "max_score": 75, "date": date(2024, 4, 5)},
    {"id": "7", "student_id": "4", "exam_name": "Midterm Exam", "subject": "Mathematics", "score": 92, "max_score": 100, "date": date(2024, 3, 15)},
    {"id": "8", "student_id": "4", "exam_name": "Final Exam", "subject": "Physics", "score": 95, "max_score": 100, "date": date(2024, 5, 20)},
    {"id": "9", "student_id": "5", "exam_name": "Quiz 1", "subject": "Mathematics", "score": 38, "max_score": 50, "date": date(2024, 2, 10)},
    {"id": "10", "student_id": "5", "exam_name": "Lab Test", "subject": "Chemistry", "score": 70, "max_score": 75, "date": date(2024, 4, 5)},
]


def seed_store(store: GradebookStore) -> None:
    """Load the demo records through the store's normal mutation path."""
    for student in DEMO_STUDENTS:
        store.add_student(student)
    for exam in DEMO_EXAMS:
        store.add_exam(exam)
    for grade in DEMO_GRADES:
        store.add_grade(grade)
    logger.info(
        f"[SEED] Loaded {len(DEMO_STUDENTS)} students, {len(DEMO_EXAMS)} exams, "
        f"{len(DEMO_GRADES)} grades"
    )
