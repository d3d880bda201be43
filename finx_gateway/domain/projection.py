"""Projection engine - month-by-month debt and savings trajectories"""

from datetime import date
from typing import List

from finx_gateway.domain.models import DepositGrowth, DepositGrowthRow, FinancialSnapshot, ProjectionPoint
from finx_gateway.utils.date_utils import add_months
from finx_gateway.utils.money import round_currency

# Share of the monthly debt payment treated as principal repayment
PRINCIPAL_SHARE = 0.4


def compound_deposit(balance: float, annual_rate: float, contribution: float, months: int) -> float:
    """Deposit balance after `months` of monthly compounding plus end-of-month contributions"""
    monthly_rate = annual_rate / 100 / 12
    for _ in range(months):
        balance = balance * (1 + monthly_rate) + contribution
    return balance


def projected_debt_at(snapshot: FinancialSnapshot, month_index: int) -> float:
    """Remaining debt after month_index months, floored at zero"""
    reduction = snapshot.total_monthly_debt_payment * PRINCIPAL_SHARE
    return max(0, snapshot.total_debt - reduction * month_index)


def projected_savings_at(snapshot: FinancialSnapshot, month_index: int) -> float:
    """Cash savings (flat) plus the compounded deposit after month_index months"""
    deposit = compound_deposit(
        snapshot.deposit_savings,
        snapshot.deposit_interest_rate,
        snapshot.monthly_deposit_contribution,
        month_index,
    )
    return snapshot.cash_savings + deposit


def project(snapshot: FinancialSnapshot, months: int, start_date: date | None = None) -> List[ProjectionPoint]:
    """
    Project debt and savings for months 1..months.

    Requirements:
    - Debt falls by 0.4 x monthly debt payment each month, never below 0
    - debt_reached_zero marks only the first month debt hits 0, and only
      when there was debt to begin with
    - Savings: cash stays constant, deposit compounds monthly
    - start_date only drives the month labels (default: today)
    """
    if start_date is None:
        start_date = date.today()

    points: List[ProjectionPoint] = []
    had_debt = snapshot.total_debt > 0
    zero_reached = False
    deposit = snapshot.deposit_savings

    for month_index in range(1, months + 1):
        debt = projected_debt_at(snapshot, month_index)
        # Same operations, same order as projected_savings_at(snapshot, month_index)
        deposit = compound_deposit(
            deposit, snapshot.deposit_interest_rate, snapshot.monthly_deposit_contribution, 1
        )
        savings = snapshot.cash_savings + deposit

        first_zero = had_debt and debt == 0 and not zero_reached
        if first_zero:
            zero_reached = True

        points.append(
            ProjectionPoint(
                month_index=month_index,
                label=add_months(start_date, month_index - 1),
                projected_debt=round_currency(debt),
                projected_savings=round_currency(savings),
                debt_reached_zero=first_zero,
            )
        )

    return points


def debt_free_month(points: List[ProjectionPoint]) -> int | None:
    """Month index at which the projection first reaches zero debt"""
    for point in points:
        if point.debt_reached_zero:
            return point.month_index
    return None


def deposit_growth(
    initial_deposit: float,
    monthly_contribution: float,
    annual_rate: float,
    months: int,
) -> DepositGrowth:
    """
    Deposit growth calculator.

    Uses the same compounding rule as the savings projection; balances are
    rounded per row, interest earned is final balance minus money put in.
    """
    monthly_rate = annual_rate / 100 / 12
    balance = initial_deposit
    rows: List[DepositGrowthRow] = []

    for month in range(1, months + 1):
        balance = balance * (1 + monthly_rate) + monthly_contribution
        rows.append(
            DepositGrowthRow(
                month=month,
                balance=round_currency(balance),
                contributed=initial_deposit + monthly_contribution * month,
            )
        )

    total_contributed = initial_deposit + monthly_contribution * months
    return DepositGrowth(
        monthly=rows,
        final_amount=round_currency(balance),
        total_contributed=total_contributed,
        interest_earned=round_currency(balance - total_contributed),
    )
