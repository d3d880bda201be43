"""Chat advisor context - the financial snapshot as seen by the language model"""

from typing import Any, Dict

from finx_gateway.domain.models import FinancialSnapshot
from finx_gateway.utils.money import round_currency


def build_financial_context(snapshot: FinancialSnapshot) -> Dict[str, Any]:
    """Flat dict of the snapshot's headline fields, safe to serialize as JSON"""
    return {
        "monthly_income": snapshot.monthly_income,
        "total_expenses": snapshot.total_expenses,
        "rent": snapshot.rent,
        "utilities": snapshot.utilities,
        "subscriptions": snapshot.subscriptions,
        "entertainment": snapshot.entertainment,
        "groceries": snapshot.groceries,
        "mortgage": snapshot.mortgage,
        "free_cash_flow": snapshot.free_cash_flow,
        "risk_score": snapshot.risk_score,
        "cash_savings": snapshot.cash_savings,
        "deposit_savings": snapshot.deposit_savings,
        "deposit_interest_rate": snapshot.deposit_interest_rate,
        "monthly_deposit_contribution": snapshot.monthly_deposit_contribution,
        "total_debt": snapshot.total_debt,
        "total_monthly_debt_payment": snapshot.total_monthly_debt_payment,
        "debt_to_income_ratio": snapshot.debt_to_income_ratio,
        "loans": [
            {
                "name": loan.name,
                "amount": loan.amount,
                "interest_rate": loan.interest_rate,
                "monthly_payment": loan.monthly_payment,
            }
            for loan in snapshot.loans
        ],
    }


def _tenge(amount: float) -> str:
    return f"{round_currency(amount):,} ₸"


def build_system_prompt(context: Dict[str, Any]) -> str:
    """Advisor instructions with the user's financial profile embedded"""
    total_savings = context["cash_savings"] + context["deposit_savings"]

    if context["loans"]:
        loan_lines = "\n".join(
            f"  • {loan['name']}: {_tenge(loan['amount'])} at {loan['interest_rate']}%, "
            f"monthly payment {_tenge(loan['monthly_payment'])}"
            for loan in context["loans"]
        )
        loans_section = f"- Active Loans:\n{loan_lines}"
    else:
        loans_section = "- No active loans"

    return f"""You are FinX AI Advisor, a friendly, knowledgeable financial assistant for users in Kazakhstan.
You provide personalized financial advice based on the user's real financial data shown below.
Always be helpful, concise, and actionable. Use Tenge (₸) as the currency.
Never recommend specific financial products or institutions unless asked.
If the user asks something unrelated to finance, gently redirect them.

USER'S FINANCIAL PROFILE:
- Monthly Income: {_tenge(context['monthly_income'])}
- Total Fixed Expenses: {_tenge(context['total_expenses'])}
  - Rent: {_tenge(context['rent'])}
  - Utilities: {_tenge(context['utilities'])}
  - Subscriptions: {_tenge(context['subscriptions'])}
  - Entertainment: {_tenge(context['entertainment'])}
  - Groceries: {_tenge(context['groceries'])}
  - Mortgage: {_tenge(context['mortgage'])}
- Free Cash Flow: {_tenge(context['free_cash_flow'])}
- Financial Health Score: {context['risk_score']}/100
- Cash Savings: {_tenge(context['cash_savings'])}
- Deposit Savings: {_tenge(context['deposit_savings'])} (at {context['deposit_interest_rate']}% annual rate)
- Monthly Deposit Contribution: {_tenge(context['monthly_deposit_contribution'])}
- Total Savings: {_tenge(total_savings)}
- Total Debt: {_tenge(context['total_debt'])}
- Monthly Debt Payments: {_tenge(context['total_monthly_debt_payment'])}
- Debt-to-Income Ratio: {context['debt_to_income_ratio'] * 100:.1f}%
{loans_section}

GUIDELINES:
- Reference specific numbers from the user's profile when giving advice.
- If asked about budgeting, base advice on the actual expense categories above.
- Risk score interpretation: 0-39 = High Risk, 40-69 = Moderate, 70-100 = Healthy.
- Keep responses focused and under 300 words unless the user asks for detail.
- Use bullet points and clear formatting for readability.
- If the user has negative free cash flow, flag it as urgent."""
