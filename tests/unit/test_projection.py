"""Unit tests for the projection engine and deposit calculator"""

from datetime import date
from finx_gateway.domain.models import FinancialSnapshot
from finx_gateway.domain.projection import (
    compound_deposit,
    debt_free_month,
    deposit_growth,
    project,
    projected_savings_at,
)

START = date(2026, 1, 15)


def test_zero_horizon_is_empty(healthy_snapshot: FinancialSnapshot):
    assert project(healthy_snapshot, 0, START) == []


def test_points_are_numbered_from_one(healthy_snapshot: FinancialSnapshot):
    points = project(healthy_snapshot, 24, START)

    assert len(points) == 24
    assert [p.month_index for p in points] == list(range(1, 25))


def test_labels_are_calendar_months_from_start(healthy_snapshot: FinancialSnapshot):
    points = project(healthy_snapshot, 13, START)

    assert points[0].label == date(2026, 1, 1)
    assert points[11].label == date(2026, 12, 1)
    assert points[12].label == date(2027, 1, 1)


def test_debt_declines_and_flags_first_zero_month(indebted_snapshot: FinancialSnapshot):
    """1,000,000 debt at 250,000/month -> 100,000 principal a month -> zero at month 10"""
    points = project(indebted_snapshot, 15, START)

    assert points[0].projected_debt == 900_000
    assert points[8].projected_debt == 100_000
    assert points[9].projected_debt == 0
    assert all(p.projected_debt == 0 for p in points[9:])

    flagged = [p.month_index for p in points if p.debt_reached_zero]
    assert flagged == [10]
    assert debt_free_month(points) == 10


def test_debt_never_increases(indebted_snapshot: FinancialSnapshot):
    points = project(indebted_snapshot, 36, START)
    debts = [p.projected_debt for p in points]
    assert debts == sorted(debts, reverse=True)


def test_no_debt_never_flags(healthy_snapshot: FinancialSnapshot):
    points = project(healthy_snapshot, 12, START)

    assert all(p.projected_debt == 0 for p in points)
    assert not any(p.debt_reached_zero for p in points)
    assert debt_free_month(points) is None


def test_savings_compound_on_deposit_only(healthy_snapshot: FinancialSnapshot):
    """200,000 cash flat, 100,000 deposit at 14% with 40,000 a month"""
    points = project(healthy_snapshot, 12, START)

    assert points[11].projected_savings == 826_964
    assert points[11].projected_savings == round(projected_savings_at(healthy_snapshot, 12))


def test_savings_without_deposit_stay_flat(indebted_snapshot: FinancialSnapshot):
    points = project(indebted_snapshot, 6, START)
    assert {p.projected_savings for p in points} == {50_000}


def test_compound_deposit_zero_rate_is_plain_sum():
    assert compound_deposit(10_000, 0, 5_000, 4) == 30_000
    assert compound_deposit(10_000, 12, 0, 0) == 10_000


def test_deposit_growth_schedule():
    growth = deposit_growth(100_000, 40_000, 14, 12)

    assert len(growth.monthly) == 12
    assert growth.monthly[0].balance == 141_167
    assert growth.monthly[0].contributed == 140_000
    assert growth.final_amount == 626_964
    assert growth.total_contributed == 580_000
    assert growth.interest_earned == 46_964


def test_deposit_growth_without_interest():
    growth = deposit_growth(0, 10_000, 0, 6)

    assert growth.final_amount == 60_000
    assert growth.interest_earned == 0
    assert [row.balance for row in growth.monthly] == [10_000, 20_000, 30_000, 40_000, 50_000, 60_000]
