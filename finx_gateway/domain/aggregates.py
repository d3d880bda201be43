"""Aggregate derivation - recompute every cached field of a snapshot from its raw inputs"""

import dataclasses

from finx_gateway.domain.models import FinancialSnapshot
from finx_gateway.domain.scoring import calculate_health_score


def sum_expenses(snapshot: FinancialSnapshot) -> float:
    """Fixed categories plus every custom expense line"""
    other_total = sum(expense.amount for expense in snapshot.other_expenses)
    return (
        snapshot.rent
        + snapshot.utilities
        + snapshot.subscriptions
        + snapshot.entertainment
        + snapshot.groceries
        + snapshot.mortgage
        + other_total
    )


def derive_cash_flow(snapshot: FinancialSnapshot) -> FinancialSnapshot:
    """
    Refresh the fields that depend on totals, leaving the totals untouched.

    Steps:
    - legacy mirrors (current_savings, planned_monthly_savings)
    - free cash flow, net of the deposit contribution
    - debt-to-income ratio (0 without income)
    - health score, always last

    Used directly by the simulator, whose scenarios edit totals in place.
    """
    derived = dataclasses.replace(snapshot)

    derived.current_savings = derived.cash_savings + derived.deposit_savings
    derived.planned_monthly_savings = derived.monthly_deposit_contribution

    derived.free_cash_flow = (
        derived.monthly_income
        - derived.total_expenses
        - derived.total_monthly_debt_payment
        - derived.monthly_deposit_contribution
    )

    derived.debt_to_income_ratio = (
        derived.total_monthly_debt_payment / derived.monthly_income
        if derived.monthly_income > 0
        else 0
    )

    derived.risk_score = calculate_health_score(derived)
    return derived


def derive(snapshot: FinancialSnapshot) -> FinancialSnapshot:
    """
    Full derivation pass; returns a new snapshot, the input is not modified.

    Loans must already carry their cached monthly_payment. Running it on an
    already-derived snapshot yields an identical snapshot.
    """
    derived = dataclasses.replace(snapshot)

    derived.total_expenses = sum_expenses(derived)
    derived.total_debt = sum(loan.amount for loan in derived.loans)
    derived.total_monthly_debt_payment = sum(loan.monthly_payment for loan in derived.loans)

    return derive_cash_flow(derived)
