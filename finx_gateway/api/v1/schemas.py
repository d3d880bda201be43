"""Pydantic schemas for API request/response validation"""

import dataclasses
from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from finx_gateway.domain.models import FinancialSnapshot, ScenarioComparison


class ExpenseSchema(BaseModel):
    """Custom expense line"""

    id: str
    name: str
    amount: float
    icon: str = ""


class LoanSchema(BaseModel):
    """Loan with its fixed monthly payment"""

    id: str
    name: str
    amount: float
    interest_rate: float
    duration: int
    monthly_payment: int


class SnapshotResponse(BaseModel):
    """Full financial snapshot, raw inputs and derived fields"""

    monthly_income: float
    rent: float
    utilities: float
    subscriptions: float
    entertainment: float
    groceries: float
    mortgage: float
    other_expenses: List[ExpenseSchema]
    loans: List[LoanSchema]
    cash_savings: float
    deposit_savings: float
    deposit_interest_rate: float
    monthly_deposit_contribution: float
    onboarding_completed: bool
    current_savings: float
    planned_monthly_savings: float
    total_expenses: float
    total_debt: float
    total_monthly_debt_payment: float
    free_cash_flow: float
    debt_to_income_ratio: float
    risk_score: int

    @classmethod
    def from_domain(cls, snapshot: FinancialSnapshot) -> "SnapshotResponse":
        return cls(**dataclasses.asdict(snapshot))


class SnapshotUpdate(BaseModel):
    """Request body for PUT /v1/snapshot - only raw inputs, all optional"""

    monthly_income: Optional[float] = Field(None, ge=0)
    rent: Optional[float] = Field(None, ge=0)
    utilities: Optional[float] = Field(None, ge=0)
    subscriptions: Optional[float] = Field(None, ge=0)
    entertainment: Optional[float] = Field(None, ge=0)
    groceries: Optional[float] = Field(None, ge=0)
    mortgage: Optional[float] = Field(None, ge=0)
    cash_savings: Optional[float] = Field(None, ge=0)
    deposit_savings: Optional[float] = Field(None, ge=0)
    deposit_interest_rate: Optional[float] = Field(None, ge=0)
    monthly_deposit_contribution: Optional[float] = Field(None, ge=0)
    onboarding_completed: Optional[bool] = None


class LoanCreate(BaseModel):
    """Request body for POST /v1/snapshot/loans"""

    name: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0, description="Principal")
    interest_rate: float = Field(..., ge=0, description="Annual rate in percent")
    duration: int = Field(..., gt=0, description="Term in months")


class ExpenseCreate(BaseModel):
    """Request body for POST /v1/snapshot/expenses"""

    name: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    icon: str = ""


class OnboardingResponse(BaseModel):
    """Response for POST /v1/onboarding/complete"""

    unlocked: List[str]
    snapshot: SnapshotResponse


class ScoreResponse(BaseModel):
    """Response for GET /v1/score"""

    score: int
    risk_level: str
    cash_flow_score: int
    debt_score: int
    savings_rate_score: int
    emergency_cushion_score: int
    deposit_discipline_score: int


class ProgressResponse(BaseModel):
    """Response for GET /v1/progress"""

    savings_rate_pct: float
    expense_rate_pct: float
    debt_rate_pct: float
    emergency_fund_target: float
    emergency_fund_progress_pct: float
    achievements_unlocked: int
    achievements_total: int
    achievements_progress_pct: float


class ProjectionPointSchema(BaseModel):
    """Single month of a projection"""

    month_index: int
    label: date
    projected_debt: int
    projected_savings: int
    debt_reached_zero: bool


class ProjectionResponse(BaseModel):
    """Response for GET /v1/projection"""

    months: int
    debt_free_month: Optional[int] = None
    points: List[ProjectionPointSchema]


# What-if scenarios, discriminated by the "scenario" tag


class ExpenseAdjustmentRequest(BaseModel):
    scenario: Literal["expense-adjustment"]
    subscriptions_pct: float = Field(0, ge=0, le=100)
    utilities_pct: float = Field(0, ge=0, le=100)
    entertainment_pct: float = Field(0, ge=0, le=100)
    groceries_pct: float = Field(0, ge=0, le=100)


class CashReallocationRequest(BaseModel):
    scenario: Literal["cash-reallocation"]
    add_to_deposit: float = Field(0, ge=0)
    add_to_cash_savings: float = Field(0, ge=0)
    extra_loan_payment: float = Field(0, ge=0)


class NewLoanRequest(BaseModel):
    scenario: Literal["new-loan"]
    amount: float = Field(500_000, gt=0)
    interest_rate: float = Field(22, ge=0)
    duration: int = Field(24, gt=0)


class HousingChangeRequest(BaseModel):
    scenario: Literal["housing-change"]
    rent: float = Field(..., ge=0)


class IncomeChangeRequest(BaseModel):
    scenario: Literal["income-change"]
    monthly_income: float = Field(..., ge=0)


ScenarioRequest = Annotated[
    Union[
        ExpenseAdjustmentRequest,
        CashReallocationRequest,
        NewLoanRequest,
        HousingChangeRequest,
        IncomeChangeRequest,
    ],
    Field(discriminator="scenario"),
]


class LoanPaymentSchema(BaseModel):
    month: int
    payment: int


class ScenarioResponse(BaseModel):
    """Response for POST /v1/simulate"""

    scenario: str
    baseline: SnapshotResponse
    simulated: SnapshotResponse
    risk_score_delta: int
    free_cash_flow_delta: float
    total_debt_delta: float
    freed_up_cash: float = 0
    new_loan_monthly_payment: Optional[int] = None
    new_loan_total_interest: Optional[int] = None
    new_loan_schedule: List[LoanPaymentSchema] = []

    @classmethod
    def from_domain(cls, comparison: ScenarioComparison) -> "ScenarioResponse":
        return cls(
            scenario=comparison.scenario,
            baseline=SnapshotResponse.from_domain(comparison.baseline),
            simulated=SnapshotResponse.from_domain(comparison.simulated),
            risk_score_delta=comparison.risk_score_delta,
            free_cash_flow_delta=comparison.free_cash_flow_delta,
            total_debt_delta=comparison.total_debt_delta,
            freed_up_cash=comparison.freed_up_cash,
            new_loan_monthly_payment=comparison.new_loan_monthly_payment,
            new_loan_total_interest=comparison.new_loan_total_interest,
            new_loan_schedule=[
                LoanPaymentSchema(month=row.month, payment=row.payment) for row in comparison.new_loan_schedule
            ],
        )


# Calculators


class LoanCalculatorRequest(BaseModel):
    """Request body for POST /v1/calculators/loan"""

    amount: float = Field(..., gt=0)
    interest_rate: float = Field(..., ge=0)
    duration: int = Field(..., gt=0)
    schedule_limit: Optional[int] = Field(None, ge=1)


class LoanCalculatorResponse(BaseModel):
    monthly_payment: int
    total_interest: int
    total_paid: int
    schedule: List[LoanPaymentSchema]


class DepositCalculatorRequest(BaseModel):
    """Request body for POST /v1/calculators/deposit"""

    initial_deposit: float = Field(..., ge=0)
    monthly_contribution: float = Field(0, ge=0)
    interest_rate: float = Field(..., ge=0)
    months: int = Field(..., ge=0, le=600)


class DepositGrowthRowSchema(BaseModel):
    month: int
    balance: int
    contributed: float


class DepositCalculatorResponse(BaseModel):
    monthly: List[DepositGrowthRowSchema]
    final_amount: int
    total_contributed: float
    interest_earned: int


# Achievements and advisor


class AchievementSchema(BaseModel):
    id: str
    name: str
    description: str
    unlocked: bool
    unlocked_at: Optional[datetime] = None


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(..., min_length=1)


class ChatRequest(BaseModel):
    """Request body for POST /v1/advisor/chat"""

    messages: List[ChatMessage] = Field(..., min_length=1)


class ChatResponse(BaseModel):
    reply: str


class AdvisorContextResponse(BaseModel):
    """Response for GET /v1/advisor/context"""

    context: Dict[str, Any]
    system_prompt: str
