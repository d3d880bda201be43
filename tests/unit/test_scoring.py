"""Unit tests for health scoring logic"""

import dataclasses
from finx_gateway.domain.aggregates import derive
from finx_gateway.domain.models import FinancialSnapshot
from finx_gateway.domain.scoring import (
    calculate_health_score,
    determine_risk_level,
    score_breakdown,
    score_debt_to_income,
    score_deposit_discipline,
    score_emergency_cushion,
    score_free_cash_flow,
    score_savings_rate,
)


def test_health_score_worked_example(healthy_snapshot: FinancialSnapshot):
    """Income 400k, expenses 170k, no debt, 40k contribution, 200k cash, 100k deposit -> 85"""
    breakdown = score_breakdown(healthy_snapshot)

    assert breakdown.cash_flow_score == 30
    assert breakdown.debt_score == 25
    assert breakdown.savings_rate_score == 12  # 40k / 400k = 0.10
    assert breakdown.emergency_cushion_score == 8  # 200k / 170k = 1.18 months
    assert breakdown.deposit_discipline_score == 10
    assert breakdown.total == 85
    assert healthy_snapshot.risk_score == 85


def test_zero_income_scores_zero(healthy_snapshot: FinancialSnapshot):
    """No income means no meaningful ratios, whatever else is set"""
    snapshot = derive(dataclasses.replace(healthy_snapshot, monthly_income=0))
    assert calculate_health_score(snapshot) == 0
    assert score_breakdown(snapshot).risk_level == "high_risk"


def test_free_cash_flow_buckets():
    """Lower bounds inclusive, zero gets nothing"""
    assert score_free_cash_flow(0.30) == 30
    assert score_free_cash_flow(0.2999) == 24
    assert score_free_cash_flow(0.20) == 24
    assert score_free_cash_flow(0.10) == 18
    assert score_free_cash_flow(0.01) == 10
    assert score_free_cash_flow(0.0) == 0
    assert score_free_cash_flow(-0.5) == 0


def test_debt_to_income_buckets():
    """Upper bounds exclusive; no debt payment is full points"""
    assert score_debt_to_income(0, 100) == 25
    assert score_debt_to_income(14, 100) == 25
    assert score_debt_to_income(15, 100) == 20
    assert score_debt_to_income(25, 100) == 15
    assert score_debt_to_income(35, 100) == 8
    assert score_debt_to_income(45, 100) == 0


def test_savings_rate_buckets():
    assert score_savings_rate(0.20) == 20
    assert score_savings_rate(0.15) == 16
    assert score_savings_rate(0.10) == 12
    assert score_savings_rate(0.05) == 8
    assert score_savings_rate(0.01) == 4
    assert score_savings_rate(0) == 0


def test_emergency_cushion_buckets():
    assert score_emergency_cushion(600, 100) == 15
    assert score_emergency_cushion(300, 100) == 12
    assert score_emergency_cushion(100, 100) == 8
    assert score_emergency_cushion(1, 100) == 4
    assert score_emergency_cushion(0, 100) == 0
    # Nothing to cover: no points, no division error
    assert score_emergency_cushion(1_000, 0) == 0


def test_deposit_discipline():
    assert score_deposit_discipline(1, 1) == 10
    assert score_deposit_discipline(1, 0) == 5
    assert score_deposit_discipline(0, 1) == 5
    assert score_deposit_discipline(0, 0) == 0


def test_determine_risk_level_bands():
    assert determine_risk_level(100) == "healthy"
    assert determine_risk_level(70) == "healthy"
    assert determine_risk_level(69) == "moderate_risk"
    assert determine_risk_level(40) == "moderate_risk"
    assert determine_risk_level(39) == "high_risk"
    assert determine_risk_level(0) == "high_risk"


def test_score_is_bounded_integer(healthy_snapshot: FinancialSnapshot, indebted_snapshot: FinancialSnapshot):
    """Perfect and terrible profiles both stay in [0, 100]"""
    perfect = derive(
        FinancialSnapshot(
            monthly_income=1_000_000,
            rent=100_000,
            monthly_deposit_contribution=300_000,
            cash_savings=10_000_000,
            deposit_savings=1_000_000,
        )
    )
    broke = derive(FinancialSnapshot(monthly_income=100, rent=10_000))

    for snapshot in (perfect, broke, healthy_snapshot, indebted_snapshot):
        score = calculate_health_score(snapshot)
        assert isinstance(score, int)
        assert 0 <= score <= 100

    assert calculate_health_score(perfect) == 100
    assert calculate_health_score(broke) == 25  # only the no-debt points


def test_more_contribution_never_lowers_score(healthy_snapshot: FinancialSnapshot):
    """Contribution sweep across every savings-rate threshold"""
    previous = -1
    for contribution in range(0, 200_001, 2_500):
        snapshot = derive(dataclasses.replace(healthy_snapshot, monthly_deposit_contribution=contribution))
        assert snapshot.risk_score >= previous
        previous = snapshot.risk_score


def test_more_debt_payment_never_raises_score(healthy_snapshot: FinancialSnapshot):
    """Debt payment sweep across every DTI and cash-flow threshold"""
    previous = 101
    for payment in range(0, 300_001, 2_500):
        snapshot = dataclasses.replace(healthy_snapshot, total_monthly_debt_payment=payment)
        score = calculate_health_score(snapshot)
        assert score <= previous
        previous = score


def test_score_is_deterministic(indebted_snapshot: FinancialSnapshot):
    scores = {calculate_health_score(indebted_snapshot) for _ in range(20)}
    assert len(scores) == 1
