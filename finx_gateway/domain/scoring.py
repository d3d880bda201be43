"""Financial health scoring engine - composite 0-100 score from five sub-scores"""

from finx_gateway.domain.models import FinancialSnapshot, ScoreBreakdown

MAX_SCORE = 100


def score_free_cash_flow(ratio: float) -> int:
    """Share of income left after expenses and debt payments (0-30 points)"""
    if ratio >= 0.30:
        return 30
    elif ratio >= 0.20:
        return 24
    elif ratio >= 0.10:
        return 18
    elif ratio > 0:
        return 10
    return 0


def score_debt_to_income(monthly_debt_payment: float, income: float) -> int:
    """Debt payments share of income (0-25 points); no debt gets full points"""
    if monthly_debt_payment == 0:
        return 25

    dti = monthly_debt_payment / income
    if dti < 0.15:
        return 25
    elif dti < 0.25:
        return 20
    elif dti < 0.35:
        return 15
    elif dti < 0.45:
        return 8
    return 0


def score_savings_rate(ratio: float) -> int:
    """Monthly deposit contribution share of income (0-20 points)"""
    if ratio >= 0.20:
        return 20
    elif ratio >= 0.15:
        return 16
    elif ratio >= 0.10:
        return 12
    elif ratio >= 0.05:
        return 8
    elif ratio > 0:
        return 4
    return 0


def score_emergency_cushion(cash_savings: float, monthly_outflow: float) -> int:
    """Months of expenses plus debt payments covered by cash (0-15 points)"""
    if monthly_outflow <= 0:
        return 0

    months_covered = cash_savings / monthly_outflow
    if months_covered >= 6:
        return 15
    elif months_covered >= 3:
        return 12
    elif months_covered >= 1:
        return 8
    elif months_covered > 0:
        return 4
    return 0


def score_deposit_discipline(deposit_savings: float, monthly_contribution: float) -> int:
    """Holding a deposit and contributing to it (0-10 points)"""
    has_deposit = deposit_savings > 0
    contributes = monthly_contribution > 0
    if has_deposit and contributes:
        return 10
    elif has_deposit or contributes:
        return 5
    return 0


def determine_risk_level(score: int) -> str:
    """
    Map health score to a risk band.

    Bands:
    - 70-100: healthy
    - 40-69:  moderate_risk
    - 0-39:   high_risk
    """
    if score >= 70:
        return "healthy"
    elif score >= 40:
        return "moderate_risk"
    else:
        return "high_risk"


def score_breakdown(snapshot: FinancialSnapshot) -> ScoreBreakdown:
    """
    Compute every sub-score of the health score.

    Requires total_expenses and total_monthly_debt_payment to be derived
    already. Zero or negative income scores 0 across the board.
    """
    income = snapshot.monthly_income
    if income <= 0:
        return ScoreBreakdown(
            cash_flow_score=0,
            debt_score=0,
            savings_rate_score=0,
            emergency_cushion_score=0,
            deposit_discipline_score=0,
            total=0,
            risk_level=determine_risk_level(0),
        )

    debt_payment = snapshot.total_monthly_debt_payment
    contribution = snapshot.monthly_deposit_contribution

    # Cash left before saving; the contribution is rewarded separately below
    available_cash = income - snapshot.total_expenses - debt_payment

    cash_flow_score = score_free_cash_flow(available_cash / income)
    debt_score = score_debt_to_income(debt_payment, income)
    savings_rate_score = score_savings_rate(contribution / income)
    emergency_cushion_score = score_emergency_cushion(
        snapshot.cash_savings, snapshot.total_expenses + debt_payment
    )
    deposit_discipline_score = score_deposit_discipline(snapshot.deposit_savings, contribution)

    total = (
        cash_flow_score
        + debt_score
        + savings_rate_score
        + emergency_cushion_score
        + deposit_discipline_score
    )
    total = max(0, min(MAX_SCORE, round(total)))

    return ScoreBreakdown(
        cash_flow_score=cash_flow_score,
        debt_score=debt_score,
        savings_rate_score=savings_rate_score,
        emergency_cushion_score=emergency_cushion_score,
        deposit_discipline_score=deposit_discipline_score,
        total=total,
        risk_level=determine_risk_level(total),
    )


def calculate_health_score(snapshot: FinancialSnapshot) -> int:
    """Composite financial health score, integer in [0, 100]"""
    return score_breakdown(snapshot).total
