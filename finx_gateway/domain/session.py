"""Finance session - owns the current snapshot and achievements for one user session"""

import dataclasses
import uuid
from typing import Any, List

from finx_gateway.domain.aggregates import derive
from finx_gateway.domain.amortization import create_loan
from finx_gateway.domain.exceptions import ExpenseNotFoundError, LoanNotFoundError
from finx_gateway.domain.models import RAW_FIELDS, Achievement, ExpenseCategory, FinancialSnapshot, Loan
from finx_gateway.domain.progress import default_achievements, onboarding_achievements, unlock_achievement


class FinanceSession:
    """
    Mutable holder for the snapshot.

    Every change goes through a raw-field update followed by a full derive,
    so cached totals and the score never drift from the inputs. Lists are
    replaced, never edited in place, so snapshots handed out earlier stay
    unchanged.
    """

    def __init__(
        self,
        snapshot: FinancialSnapshot | None = None,
        achievements: List[Achievement] | None = None,
    ):
        self.snapshot = derive(snapshot or FinancialSnapshot())
        self.achievements = achievements if achievements is not None else default_achievements()

    def update(self, **changes: Any) -> FinancialSnapshot:
        """Set raw input fields and re-derive"""
        derived_fields = set(changes) - set(RAW_FIELDS)
        if derived_fields:
            raise ValueError(f"Not a raw input field: {', '.join(sorted(derived_fields))}")

        self.snapshot = derive(dataclasses.replace(self.snapshot, **changes))
        return self.snapshot

    def add_loan(self, name: str, amount: float, interest_rate: float, duration: int) -> Loan:
        loan = create_loan(name, amount, interest_rate, duration)
        self.update(loans=[*self.snapshot.loans, loan])
        return loan

    def remove_loan(self, loan_id: str) -> None:
        remaining = [loan for loan in self.snapshot.loans if loan.id != loan_id]
        if len(remaining) == len(self.snapshot.loans):
            raise LoanNotFoundError(f"Loan not found: {loan_id}")
        self.update(loans=remaining)

    def add_expense(self, name: str, amount: float, icon: str = "") -> ExpenseCategory:
        expense = ExpenseCategory(id=uuid.uuid4().hex, name=name, amount=amount, icon=icon)
        self.update(other_expenses=[*self.snapshot.other_expenses, expense])
        return expense

    def remove_expense(self, expense_id: str) -> None:
        remaining = [e for e in self.snapshot.other_expenses if e.id != expense_id]
        if len(remaining) == len(self.snapshot.other_expenses):
            raise ExpenseNotFoundError(f"Expense not found: {expense_id}")
        self.update(other_expenses=remaining)

    def unlock(self, achievement_id: str) -> Achievement:
        self.achievements = unlock_achievement(self.achievements, achievement_id)
        return next(a for a in self.achievements if a.id == achievement_id)

    def complete_onboarding(self) -> List[str]:
        """Mark onboarding done and unlock the achievements it earns"""
        self.update(onboarding_completed=True)
        earned = onboarding_achievements(self.snapshot)
        for achievement_id in earned:
            self.achievements = unlock_achievement(self.achievements, achievement_id)
        return earned

    def reset(self) -> None:
        self.snapshot = derive(FinancialSnapshot())
        self.achievements = default_achievements()
