"""Aggregation functions deriving dashboard statistics from a snapshot.

Everything here is a pure function of its arguments: no store access, no
state, no I/O. Calling any of them twice on the same snapshot gives equal
results.

Percentages are ``score / max_score * 100``. A ``max_score`` of 0 cannot
enter the store, but snapshots assembled elsewhere may carry one; such a
grade has no percentage (``None``), is left out of every mean and is counted
as ``undefined`` in the band distribution.
"""

from collections.abc import Iterable

from app.models import Grade, Snapshot
from app.schemas.analytics import (
    DashboardResponse,
    GradeBandCount,
    GradeDistribution,
    OverallStats,
    StudentAverage,
    SubjectAverage,
)

# (letter, label, lower bound inclusive, upper bound exclusive)
# The top band also takes 100 and anything above it.
GRADE_BANDS: tuple[tuple[str, str, float, float], ...] = (
    ("A", "90-100", 90.0, 100.0),
    ("B", "80-89", 80.0, 90.0),
    ("C", "70-79", 70.0, 80.0),
    ("D", "60-69", 60.0, 70.0),
    ("F", "<60", 0.0, 60.0),
)


def grade_percentage(grade: Grade) -> float | None:
    """Unrounded percentage for a single grade, or None if undefined."""
    if grade.max_score == 0:
        return None
    return (grade.score / grade.max_score) * 100


def band_letter(percentage: float) -> str:
    """Letter of the band a percentage falls in."""
    for letter, _label, lower, _upper in GRADE_BANDS:
        if percentage >= lower:
            return letter
    return GRADE_BANDS[-1][0]


def _mean_percentage(grades: Iterable[Grade]) -> float | None:
    percentages = [p for p in map(grade_percentage, grades) if p is not None]
    if not percentages:
        return None
    return sum(percentages) / len(percentages)


def overall_stats(snapshot: Snapshot, decimals: int = 1) -> OverallStats:
    """Counts of every collection plus the mean grade percentage.

    With no grades the mean is reported as 0.
    """
    mean = _mean_percentage(snapshot.grades)
    return OverallStats(
        total_students=len(snapshot.students),
        total_exams=len(snapshot.exams),
        total_grades=len(snapshot.grades),
        average_score=round(mean, decimals) if mean is not None else 0.0,
    )


def subject_averages(snapshot: Snapshot, decimals: int = 1) -> list[SubjectAverage]:
    """Pooled average per subject, in order of first appearance.

    Uses the ratio of sums, so a 10-point quiz does not weigh as much as a
    100-point exam.
    """
    totals: dict[str, list[float]] = {}
    counts: dict[str, int] = {}
    for grade in snapshot.grades:
        subject_totals = totals.setdefault(grade.subject, [0.0, 0.0])
        subject_totals[0] += grade.score
        subject_totals[1] += grade.max_score
        counts[grade.subject] = counts.get(grade.subject, 0) + 1

    results = []
    for subject, (total_score, total_max) in totals.items():
        average = None
        if total_max != 0:
            average = round((total_score / total_max) * 100, decimals)
        results.append(
            SubjectAverage(
                subject=subject,
                grade_count=counts[subject],
                total_score=total_score,
                total_max_score=total_max,
                average=average,
            )
        )
    return results


def student_averages(snapshot: Snapshot, decimals: int = 1) -> list[StudentAverage]:
    """Mean percentage per student, in student insertion order.

    A student without grades gets ``average=None`` rather than 0, so "never
    graded" stays distinguishable from "scored zero".
    """
    by_student: dict[str, list[Grade]] = {}
    for grade in snapshot.grades:
        by_student.setdefault(grade.student_id, []).append(grade)

    results = []
    for student in snapshot.students:
        grades = by_student.get(student.id, [])
        mean = _mean_percentage(grades)
        results.append(
            StudentAverage(
                student_id=student.id,
                name=student.name,
                grade_count=len(grades),
                average=round(mean, decimals) if mean is not None else None,
            )
        )
    return results


def grade_distribution(snapshot: Snapshot) -> GradeDistribution:
    """Count grades per percentage band.

    Bands are mutually exclusive and cover every defined percentage, so the
    band counts plus ``undefined`` always equal the number of grades.
    """
    counts = {letter: 0 for letter, *_ in GRADE_BANDS}
    undefined = 0
    for grade in snapshot.grades:
        percentage = grade_percentage(grade)
        if percentage is None:
            undefined += 1
            continue
        counts[band_letter(percentage)] += 1

    return GradeDistribution(
        bands=[
            GradeBandCount(
                letter=letter,
                label=f"{letter} ({label})",
                lower=lower,
                upper=upper,
                count=counts[letter],
            )
            for letter, label, lower, upper in GRADE_BANDS
        ],
        total=len(snapshot.grades),
        undefined=undefined,
    )


def dashboard(snapshot: Snapshot, decimals: int = 1) -> DashboardResponse:
    """Every statistic for one snapshot, computed together."""
    return DashboardResponse(
        version=snapshot.version,
        overview=overall_stats(snapshot, decimals),
        subjects=subject_averages(snapshot, decimals),
        students=student_averages(snapshot, decimals),
        distribution=grade_distribution(snapshot),
    )
