"""Achievements and progress metrics"""

import dataclasses
from datetime import datetime, timezone
from typing import List

from finx_gateway.domain.exceptions import AchievementNotFoundError
from finx_gateway.domain.models import Achievement, FinancialSnapshot, ProgressMetrics

# Months of expenses plus debt payments the emergency fund should cover
EMERGENCY_FUND_MONTHS = 3

ACHIEVEMENT_CATALOGUE = (
    ("first-budget", "First Budget Created", "Complete your first financial profile"),
    ("savings-started", "Savings Plan Started", "Set up a monthly savings goal"),
    ("three-month-streak", "3-Month Saving Streak", "Save consistently for 3 months"),
    ("debt-improved", "Debt Ratio Improved", "Lower your debt-to-income ratio"),
    ("expense-optimized", "Expense Optimization Applied", "Apply an expense reduction recommendation"),
    ("emergency-fund", "Emergency Fund Started", "Build savings equal to 1 month expenses"),
    ("smart-credit", "Smart Credit Avoided", "Avoid taking a risky loan"),
    ("risk-improved", "Risk Score Improved by 20+", "Improve your financial health score significantly"),
    ("savings-goal", "Savings Goal Reached", "Reach your target savings amount"),
)


def default_achievements() -> List[Achievement]:
    """Fresh, fully locked achievement list"""
    return [
        Achievement(id=achievement_id, name=name, description=description)
        for achievement_id, name, description in ACHIEVEMENT_CATALOGUE
    ]


def unlock_achievement(
    achievements: List[Achievement],
    achievement_id: str,
    now: datetime | None = None,
) -> List[Achievement]:
    """
    Return a new list with the achievement unlocked.

    Already-unlocked achievements keep their original timestamp.
    """
    if not any(a.id == achievement_id for a in achievements):
        raise AchievementNotFoundError(f"Unknown achievement: {achievement_id}")

    if now is None:
        now = datetime.now(timezone.utc)

    return [
        dataclasses.replace(a, unlocked=True, unlocked_at=now)
        if a.id == achievement_id and not a.unlocked
        else a
        for a in achievements
    ]


def onboarding_achievements(snapshot: FinancialSnapshot) -> List[str]:
    """Achievement ids earned by completing onboarding with this snapshot"""
    earned = ["first-budget"]
    if snapshot.monthly_deposit_contribution > 0:
        earned.append("savings-started")
    return earned


def calculate_progress(snapshot: FinancialSnapshot, achievements: List[Achievement]) -> ProgressMetrics:
    """Savings, expense and debt rates plus emergency fund and achievement progress"""
    income = snapshot.monthly_income
    savings_rate = snapshot.planned_monthly_savings / income * 100 if income > 0 else 0
    expense_rate = snapshot.total_expenses / income * 100 if income > 0 else 0

    emergency_target = (snapshot.total_expenses + snapshot.total_monthly_debt_payment) * EMERGENCY_FUND_MONTHS
    emergency_progress = (
        min(snapshot.current_savings / emergency_target * 100, 100) if emergency_target > 0 else 0
    )

    unlocked = sum(1 for a in achievements if a.unlocked)
    total = len(achievements)

    return ProgressMetrics(
        savings_rate_pct=savings_rate,
        expense_rate_pct=expense_rate,
        debt_rate_pct=snapshot.debt_to_income_ratio * 100,
        emergency_fund_target=emergency_target,
        emergency_fund_progress_pct=emergency_progress,
        achievements_unlocked=unlocked,
        achievements_total=total,
        achievements_progress_pct=unlocked / total * 100 if total else 0,
    )
