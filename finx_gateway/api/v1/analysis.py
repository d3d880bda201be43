"""GET /v1/score, /v1/progress, /v1/projection - read-only views of the snapshot"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from finx_gateway.api.v1.schemas import (
    ProgressResponse,
    ProjectionPointSchema,
    ProjectionResponse,
    ScoreResponse,
)
from finx_gateway.config import settings
from finx_gateway.infrastructure.database.session import get_db
from finx_gateway.infrastructure.database.repositories import StateRepository
from finx_gateway.domain.scoring import score_breakdown
from finx_gateway.domain.progress import calculate_progress
from finx_gateway.domain.projection import debt_free_month, project

router = APIRouter()


@router.get("/score", response_model=ScoreResponse)
def get_score(db: Session = Depends(get_db)):
    """Health score with its five sub-scores and risk band"""
    snapshot = StateRepository(db).load_session().snapshot
    breakdown = score_breakdown(snapshot)

    return ScoreResponse(
        score=breakdown.total,
        risk_level=breakdown.risk_level,
        cash_flow_score=breakdown.cash_flow_score,
        debt_score=breakdown.debt_score,
        savings_rate_score=breakdown.savings_rate_score,
        emergency_cushion_score=breakdown.emergency_cushion_score,
        deposit_discipline_score=breakdown.deposit_discipline_score,
    )


@router.get("/progress", response_model=ProgressResponse)
def get_progress(db: Session = Depends(get_db)):
    session = StateRepository(db).load_session()
    metrics = calculate_progress(session.snapshot, session.achievements)

    return ProgressResponse(
        savings_rate_pct=metrics.savings_rate_pct,
        expense_rate_pct=metrics.expense_rate_pct,
        debt_rate_pct=metrics.debt_rate_pct,
        emergency_fund_target=metrics.emergency_fund_target,
        emergency_fund_progress_pct=metrics.emergency_fund_progress_pct,
        achievements_unlocked=metrics.achievements_unlocked,
        achievements_total=metrics.achievements_total,
        achievements_progress_pct=metrics.achievements_progress_pct,
    )


@router.get("/projection", response_model=ProjectionResponse)
def get_projection(
    months: int = Query(12, ge=0, le=settings.projection_max_months, description="Horizon in months"),
    start: Optional[date] = Query(None, description="Month of the first point (default: today)"),
    db: Session = Depends(get_db),
):
    """
    Project debt and savings month by month.

    Returns:
        One point per month, month_index 1..months
    """
    snapshot = StateRepository(db).load_session().snapshot
    points = project(snapshot, months, start_date=start)

    return ProjectionResponse(
        months=months,
        debt_free_month=debt_free_month(points),
        points=[
            ProjectionPointSchema(
                month_index=p.month_index,
                label=p.label,
                projected_debt=p.projected_debt,
                projected_savings=p.projected_savings,
                debt_reached_zero=p.debt_reached_zero,
            )
            for p in points
        ],
    )
