"""Dashboard analytics endpoints."""

from fastapi import APIRouter

from app.core.dependencies import AppSettings, Store
from app.schemas.analytics import (
    DashboardResponse,
    GradeDistribution,
    OverallStats,
    StudentAverage,
    SubjectAverage,
)
from app.services import analytics

router = APIRouter()


@router.get("", response_model=DashboardResponse)
def get_dashboard(store: Store, settings: AppSettings):
    """
    Get every dashboard statistic computed from the same snapshot.

    Use this instead of the individual endpoints when the figures must agree
    with each other.
    """
    return analytics.dashboard(store.snapshot, settings.SCORE_DECIMALS)


@router.get("/overview", response_model=OverallStats)
def get_overview(store: Store, settings: AppSettings):
    """Get collection counts and the mean grade percentage."""
    return analytics.overall_stats(store.snapshot, settings.SCORE_DECIMALS)


@router.get("/subjects", response_model=list[SubjectAverage])
def get_subject_averages(store: Store, settings: AppSettings):
    """Get the pooled average per subject."""
    return analytics.subject_averages(store.snapshot, settings.SCORE_DECIMALS)


@router.get("/students", response_model=list[StudentAverage])
def get_student_averages(store: Store, settings: AppSettings):
    """Get each student's mean percentage; null for students without grades."""
    return analytics.student_averages(store.snapshot, settings.SCORE_DECIMALS)


@router.get("/distribution", response_model=GradeDistribution)
def get_grade_distribution(store: Store):
    """Get the count of grades per percentage band."""
    return analytics.grade_distribution(store.snapshot)
