"""Analytics schemas for dashboard statistics."""

from pydantic import Field

from app.schemas.common import BaseSchema


# ==========================================
# Overview
# ==========================================

class OverallStats(BaseSchema):
    """Headline counts and the mean grade percentage."""

    total_students: int = 0
    total_exams: int = 0
    total_grades: int = 0
    average_score: float = Field(
        default=0.0,
        description="Mean of per-grade percentages (0-100); 0 when there are no grades",
    )


# ==========================================
# Per-subject / per-student averages
# ==========================================

class SubjectAverage(BaseSchema):
    """Pooled average for one subject label."""

    subject: str
    grade_count: int
    total_score: float
    total_max_score: float
    average: float | None = Field(
        default=None,
        description="sum(score) / sum(max_score) * 100; null when the pooled max is 0",
    )


class StudentAverage(BaseSchema):
    """Mean percentage across one student's grades."""

    student_id: str
    name: str
    grade_count: int = 0
    average: float | None = Field(
        default=None,
        description="Mean of per-grade percentages; null when the student has no grades",
    )


# ==========================================
# Grade bands
# ==========================================

class GradeBandCount(BaseSchema):
    """Number of grades falling in one percentage band."""

    letter: str
    label: str
    lower: float
    upper: float
    count: int = 0


class GradeDistribution(BaseSchema):
    """Partition of all grades into the five percentage bands."""

    bands: list[GradeBandCount]
    total: int = 0
    undefined: int = Field(
        default=0,
        description="Grades whose percentage is undefined (max_score of 0)",
    )


# ==========================================
# Combined Dashboard Response
# ==========================================

class DashboardResponse(BaseSchema):
    """All dashboard statistics computed from one snapshot."""

    version: int
    overview: OverallStats
    subjects: list[SubjectAverage]
    students: list[StudentAverage]
    distribution: GradeDistribution
