"""What-if scenario simulator - apply one hypothetical change to a copy of the snapshot"""

import dataclasses
from enum import Enum
from typing import Union

from finx_gateway.domain.aggregates import derive_cash_flow, sum_expenses
from finx_gateway.domain.amortization import (
    calculate_monthly_payment,
    calculate_total_interest,
    generate_payment_schedule,
)
from finx_gateway.domain.models import (
    CashReallocation,
    ExpenseAdjustment,
    FinancialSnapshot,
    HousingChange,
    IncomeChange,
    NewLoanScenario,
    ScenarioComparison,
)
from finx_gateway.utils.money import round_currency

# Schedule rows returned with a new-loan comparison
SCHEDULE_PREVIEW_MONTHS = 48


class ScenarioType(str, Enum):
    EXPENSE_ADJUSTMENT = "expense-adjustment"
    CASH_REALLOCATION = "cash-reallocation"
    NEW_LOAN = "new-loan"
    HOUSING_CHANGE = "housing-change"
    INCOME_CHANGE = "income-change"


ScenarioParams = Union[ExpenseAdjustment, CashReallocation, NewLoanScenario, HousingChange, IncomeChange]

_SCENARIO_TYPES = {
    ExpenseAdjustment: ScenarioType.EXPENSE_ADJUSTMENT,
    CashReallocation: ScenarioType.CASH_REALLOCATION,
    NewLoanScenario: ScenarioType.NEW_LOAN,
    HousingChange: ScenarioType.HOUSING_CHANGE,
    IncomeChange: ScenarioType.INCOME_CHANGE,
}


def scenario_type(params: ScenarioParams) -> ScenarioType:
    """Scenario tag for a parameter object"""
    try:
        return _SCENARIO_TYPES[type(params)]
    except KeyError:
        raise TypeError(f"Unsupported scenario parameters: {type(params).__name__}") from None


def _apply_expense_adjustment(simulated: FinancialSnapshot, params: ExpenseAdjustment) -> None:
    simulated.subscriptions = simulated.subscriptions * (1 - params.subscriptions_pct / 100)
    simulated.utilities = simulated.utilities * (1 - params.utilities_pct / 100)
    simulated.entertainment = simulated.entertainment * (1 - params.entertainment_pct / 100)
    simulated.groceries = simulated.groceries * (1 - params.groceries_pct / 100)
    simulated.total_expenses = sum_expenses(simulated)


def _apply_cash_reallocation(simulated: FinancialSnapshot, params: CashReallocation) -> None:
    simulated.monthly_deposit_contribution = simulated.monthly_deposit_contribution + params.add_to_deposit
    simulated.cash_savings = simulated.cash_savings + params.add_to_cash_savings

    # A year of extra payments applied at once
    if params.extra_loan_payment > 0 and simulated.total_debt > 0:
        simulated.total_debt = max(0, simulated.total_debt - params.extra_loan_payment * 12)


def _apply_new_loan(simulated: FinancialSnapshot, params: NewLoanScenario) -> None:
    payment = calculate_monthly_payment(params.amount, params.interest_rate, params.duration)
    simulated.total_debt = simulated.total_debt + params.amount
    simulated.total_monthly_debt_payment = simulated.total_monthly_debt_payment + round_currency(payment)


def _apply_housing_change(simulated: FinancialSnapshot, params: HousingChange) -> None:
    simulated.rent = params.rent
    simulated.total_expenses = sum_expenses(simulated)


def _apply_income_change(simulated: FinancialSnapshot, params: IncomeChange) -> None:
    simulated.monthly_income = params.monthly_income


_APPLIERS = {
    ScenarioType.EXPENSE_ADJUSTMENT: _apply_expense_adjustment,
    ScenarioType.CASH_REALLOCATION: _apply_cash_reallocation,
    ScenarioType.NEW_LOAN: _apply_new_loan,
    ScenarioType.HOUSING_CHANGE: _apply_housing_change,
    ScenarioType.INCOME_CHANGE: _apply_income_change,
}


def simulate(baseline: FinancialSnapshot, params: ScenarioParams) -> FinancialSnapshot:
    """
    Apply a single scenario to a shallow clone of baseline.

    The scenario edits raw fields and/or totals on the clone, then cash flow,
    DTI and health score are always recomputed. baseline is never modified;
    its expense and loan lists are shared with the clone but not touched.
    """
    simulated = dataclasses.replace(baseline)
    _APPLIERS[scenario_type(params)](simulated, params)
    return derive_cash_flow(simulated)


def compare_scenario(baseline: FinancialSnapshot, params: ScenarioParams) -> ScenarioComparison:
    """Run a scenario and report deltas (simulated - baseline) against the baseline"""
    kind = scenario_type(params)
    simulated = simulate(baseline, params)

    comparison = ScenarioComparison(
        scenario=kind.value,
        baseline=baseline,
        simulated=simulated,
        risk_score_delta=simulated.risk_score - baseline.risk_score,
        free_cash_flow_delta=simulated.free_cash_flow - baseline.free_cash_flow,
        total_debt_delta=simulated.total_debt - baseline.total_debt,
    )

    if kind is ScenarioType.EXPENSE_ADJUSTMENT:
        flexible_before = baseline.subscriptions + baseline.utilities + baseline.entertainment + baseline.groceries
        flexible_after = simulated.subscriptions + simulated.utilities + simulated.entertainment + simulated.groceries
        comparison.freed_up_cash = flexible_before - flexible_after

    elif kind is ScenarioType.NEW_LOAN:
        payment = calculate_monthly_payment(params.amount, params.interest_rate, params.duration)
        comparison.new_loan_monthly_payment = round_currency(payment)
        comparison.new_loan_total_interest = calculate_total_interest(
            params.amount, params.interest_rate, params.duration
        )
        comparison.new_loan_schedule = generate_payment_schedule(
            params.amount, params.interest_rate, params.duration, limit=SCHEDULE_PREVIEW_MONTHS
        )

    return comparison
