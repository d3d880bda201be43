"""Fixed-payment loan amortization"""

import uuid
from typing import List

from finx_gateway.domain.models import Loan, LoanPayment
from finx_gateway.utils.money import round_currency


def calculate_monthly_payment(principal: float, annual_rate: float, months: int) -> float:
    """
    Fixed monthly payment for an amortizing loan.

    Formula:
    - i = annual_rate / 100 / 12
    - i == 0: principal / months
    - otherwise: P * i * (1+i)^n / ((1+i)^n - 1)

    months must be positive; a zero term raises ZeroDivisionError.
    Result is unrounded, callers round before storing.
    """
    monthly_rate = annual_rate / 100 / 12
    if monthly_rate == 0:
        return principal / months

    growth = (1 + monthly_rate) ** months
    return principal * monthly_rate * growth / (growth - 1)


def create_loan(
    name: str,
    amount: float,
    interest_rate: float,
    duration: int,
    loan_id: str | None = None,
) -> Loan:
    """Build a Loan with its monthly payment computed once and rounded"""
    payment = calculate_monthly_payment(amount, interest_rate, duration)
    return Loan(
        id=loan_id or uuid.uuid4().hex,
        name=name,
        amount=amount,
        interest_rate=interest_rate,
        duration=duration,
        monthly_payment=round_currency(payment),
    )


def calculate_total_interest(principal: float, annual_rate: float, months: int) -> int:
    """Total interest paid over the life of the loan"""
    payment = calculate_monthly_payment(principal, annual_rate, months)
    return round_currency(payment * months - principal)


def generate_payment_schedule(
    principal: float,
    annual_rate: float,
    months: int,
    limit: int | None = None,
) -> List[LoanPayment]:
    """
    Month-by-month payment rows for months 1..min(months, limit).

    Every row carries the same rounded fixed payment.
    """
    payment = round_currency(calculate_monthly_payment(principal, annual_rate, months))
    horizon = months if limit is None else min(months, limit)
    return [LoanPayment(month=i + 1, payment=payment) for i in range(horizon)]
