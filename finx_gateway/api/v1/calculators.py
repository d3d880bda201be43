"""POST /v1/calculators/* - stateless loan and deposit calculators"""

from fastapi import APIRouter

from finx_gateway.api.v1.schemas import (
    DepositCalculatorRequest,
    DepositCalculatorResponse,
    DepositGrowthRowSchema,
    LoanCalculatorRequest,
    LoanCalculatorResponse,
    LoanPaymentSchema,
)
from finx_gateway.domain.amortization import (
    calculate_monthly_payment,
    calculate_total_interest,
    generate_payment_schedule,
)
from finx_gateway.domain.projection import deposit_growth
from finx_gateway.utils.money import round_currency

router = APIRouter()


@router.post("/calculators/loan", response_model=LoanCalculatorResponse)
def loan_calculator(request_body: LoanCalculatorRequest):
    """Fixed monthly payment, total interest, and payment schedule for a loan"""
    payment = round_currency(
        calculate_monthly_payment(request_body.amount, request_body.interest_rate, request_body.duration)
    )
    total_interest = calculate_total_interest(request_body.amount, request_body.interest_rate, request_body.duration)
    schedule = generate_payment_schedule(
        request_body.amount,
        request_body.interest_rate,
        request_body.duration,
        limit=request_body.schedule_limit,
    )

    return LoanCalculatorResponse(
        monthly_payment=payment,
        total_interest=total_interest,
        total_paid=round_currency(request_body.amount + total_interest),
        schedule=[LoanPaymentSchema(month=row.month, payment=row.payment) for row in schedule],
    )


@router.post("/calculators/deposit", response_model=DepositCalculatorResponse)
def deposit_calculator(request_body: DepositCalculatorRequest):
    """Month-by-month deposit growth with compound interest"""
    growth = deposit_growth(
        request_body.initial_deposit,
        request_body.monthly_contribution,
        request_body.interest_rate,
        request_body.months,
    )

    return DepositCalculatorResponse(
        monthly=[
            DepositGrowthRowSchema(month=row.month, balance=row.balance, contributed=row.contributed)
            for row in growth.monthly
        ],
        final_amount=growth.final_amount,
        total_contributed=growth.total_contributed,
        interest_earned=growth.interest_earned,
    )
