"""Unit tests for aggregate derivation"""

import copy
from finx_gateway.domain.aggregates import derive, derive_cash_flow
from finx_gateway.domain.models import ExpenseCategory, FinancialSnapshot, Loan


def test_derive_totals_include_custom_expenses_and_loans():
    snapshot = FinancialSnapshot(
        monthly_income=500_000,
        rent=100_000,
        utilities=10_000,
        subscriptions=5_000,
        entertainment=15_000,
        groceries=40_000,
        mortgage=0,
        other_expenses=[
            ExpenseCategory(id="gym", name="Gym", amount=12_000),
            ExpenseCategory(id="pets", name="Pets", amount=8_000),
        ],
        loans=[
            Loan(id="a", name="Phone", amount=300_000, interest_rate=0, duration=12, monthly_payment=25_000),
            Loan(id="b", name="Car", amount=2_000_000, interest_rate=18, duration=36, monthly_payment=72_305),
        ],
        cash_savings=120_000,
        deposit_savings=80_000,
        monthly_deposit_contribution=30_000,
    )

    derived = derive(snapshot)

    assert derived.total_expenses == 190_000
    assert derived.total_debt == 2_300_000
    assert derived.total_monthly_debt_payment == 97_305
    assert derived.current_savings == 200_000
    assert derived.planned_monthly_savings == 30_000
    # Deposit contribution counts as an outflow
    assert derived.free_cash_flow == 500_000 - 190_000 - 97_305 - 30_000
    assert derived.debt_to_income_ratio == 97_305 / 500_000


def test_derive_does_not_modify_input():
    snapshot = FinancialSnapshot(monthly_income=100_000, rent=30_000)
    before = copy.deepcopy(snapshot)

    derived = derive(snapshot)

    assert snapshot == before
    assert derived is not snapshot
    assert derived.total_expenses == 30_000


def test_derive_is_idempotent(indebted_snapshot: FinancialSnapshot):
    once = derive(indebted_snapshot)
    twice = derive(once)
    assert once == twice


def test_zero_income_gives_zero_ratio_and_score():
    derived = derive(
        FinancialSnapshot(
            loans=[Loan(id="a", name="Loan", amount=100_000, interest_rate=10, duration=10, monthly_payment=10_464)]
        )
    )

    assert derived.debt_to_income_ratio == 0
    assert derived.risk_score == 0
    assert derived.free_cash_flow == -10_464


def test_derive_cash_flow_keeps_totals(healthy_snapshot: FinancialSnapshot):
    """Totals edited directly are respected, dependants refreshed"""
    edited = copy.copy(healthy_snapshot)
    edited.total_monthly_debt_payment = 100_000

    refreshed = derive_cash_flow(edited)

    assert refreshed.total_monthly_debt_payment == 100_000
    assert refreshed.total_expenses == healthy_snapshot.total_expenses
    assert refreshed.free_cash_flow == healthy_snapshot.free_cash_flow - 100_000
    assert refreshed.debt_to_income_ratio == 0.25
    assert refreshed.risk_score < healthy_snapshot.risk_score
