"""Domain models - pure Python dataclasses representing the financial snapshot"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

DEFAULT_DEPOSIT_INTEREST_RATE = 14.0


@dataclass
class ExpenseCategory:
    """User-defined expense line on top of the fixed categories"""

    id: str
    name: str
    amount: float
    icon: str = ""


@dataclass
class Loan:
    """Active loan; monthly_payment is fixed at creation time"""

    id: str
    name: str
    amount: float
    interest_rate: float  # annual %
    duration: int  # months
    monthly_payment: int


@dataclass
class FinancialSnapshot:
    """Complete financial state: raw inputs plus cached derived fields"""

    # Raw inputs
    monthly_income: float = 0
    rent: float = 0
    utilities: float = 0
    subscriptions: float = 0
    entertainment: float = 0
    groceries: float = 0
    mortgage: float = 0
    other_expenses: List[ExpenseCategory] = field(default_factory=list)
    loans: List[Loan] = field(default_factory=list)
    cash_savings: float = 0
    deposit_savings: float = 0
    deposit_interest_rate: float = DEFAULT_DEPOSIT_INTEREST_RATE
    monthly_deposit_contribution: float = 0
    onboarding_completed: bool = False

    # Legacy mirrors
    current_savings: float = 0
    planned_monthly_savings: float = 0

    # Derived
    total_expenses: float = 0
    total_debt: float = 0
    total_monthly_debt_payment: float = 0
    free_cash_flow: float = 0
    debt_to_income_ratio: float = 0
    risk_score: int = 0


RAW_FIELDS = (
    "monthly_income",
    "rent",
    "utilities",
    "subscriptions",
    "entertainment",
    "groceries",
    "mortgage",
    "other_expenses",
    "loans",
    "cash_savings",
    "deposit_savings",
    "deposit_interest_rate",
    "monthly_deposit_contribution",
    "onboarding_completed",
)


@dataclass
class Achievement:
    """Gamification flag; unlocked only ever goes from False to True"""

    id: str
    name: str
    description: str
    unlocked: bool = False
    unlocked_at: Optional[datetime] = None


@dataclass
class ScoreBreakdown:
    """Sub-scores of the financial health score"""

    cash_flow_score: int
    debt_score: int
    savings_rate_score: int
    emergency_cushion_score: int
    deposit_discipline_score: int
    total: int
    risk_level: str


@dataclass
class ProjectionPoint:
    """Projected balances at the end of a given month"""

    month_index: int
    label: date
    projected_debt: int
    projected_savings: int
    debt_reached_zero: bool


@dataclass
class LoanPayment:
    """Single row in a loan payment schedule"""

    month: int
    payment: int


@dataclass
class DepositGrowthRow:
    """Deposit balance after a given month"""

    month: int
    balance: int
    contributed: float


@dataclass
class DepositGrowth:
    """Outcome of the deposit growth calculator"""

    monthly: List[DepositGrowthRow]
    final_amount: int
    total_contributed: float
    interest_earned: int


@dataclass
class ProgressMetrics:
    """Headline ratios shown alongside achievements"""

    savings_rate_pct: float
    expense_rate_pct: float
    debt_rate_pct: float
    emergency_fund_target: float
    emergency_fund_progress_pct: float
    achievements_unlocked: int
    achievements_total: int
    achievements_progress_pct: float


# Scenario parameters


@dataclass(frozen=True)
class ExpenseAdjustment:
    """Percentage cuts per flexible expense category (0..100)"""

    subscriptions_pct: float = 0
    utilities_pct: float = 0
    entertainment_pct: float = 0
    groceries_pct: float = 0


@dataclass(frozen=True)
class CashReallocation:
    """Extra monthly money routed to deposit, cash or loan paydown"""

    add_to_deposit: float = 0
    add_to_cash_savings: float = 0
    extra_loan_payment: float = 0


@dataclass(frozen=True)
class NewLoanScenario:
    """Terms of a hypothetical additional loan"""

    amount: float = 500_000
    interest_rate: float = 22
    duration: int = 24


@dataclass(frozen=True)
class HousingChange:
    """New monthly rent"""

    rent: float


@dataclass(frozen=True)
class IncomeChange:
    """New monthly income"""

    monthly_income: float


@dataclass
class ScenarioComparison:
    """Baseline vs simulated snapshot for one what-if scenario"""

    scenario: str
    baseline: FinancialSnapshot
    simulated: FinancialSnapshot
    risk_score_delta: int
    free_cash_flow_delta: float
    total_debt_delta: float
    freed_up_cash: float = 0
    new_loan_monthly_payment: Optional[int] = None
    new_loan_total_interest: Optional[int] = None
    new_loan_schedule: List[LoanPayment] = field(default_factory=list)
