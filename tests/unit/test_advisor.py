"""Unit tests for the advisor context and system prompt"""

import json
from finx_gateway.domain.advisor import build_financial_context, build_system_prompt
from finx_gateway.domain.models import FinancialSnapshot


def test_context_is_json_serializable(indebted_snapshot: FinancialSnapshot):
    context = build_financial_context(indebted_snapshot)

    assert json.loads(json.dumps(context)) == context
    assert context["risk_score"] == indebted_snapshot.risk_score
    assert context["loans"] == [
        {"name": "Car loan", "amount": 1_000_000, "interest_rate": 20, "monthly_payment": 250_000}
    ]


def test_prompt_embeds_profile(indebted_snapshot: FinancialSnapshot):
    prompt = build_system_prompt(build_financial_context(indebted_snapshot))

    assert "FinX AI Advisor" in prompt
    assert "Monthly Income: 600,000 ₸" in prompt
    assert "Total Fixed Expenses: 235,000 ₸" in prompt
    assert f"Financial Health Score: {indebted_snapshot.risk_score}/100" in prompt
    assert "Debt-to-Income Ratio: 41.7%" in prompt
    assert "- Active Loans:" in prompt
    assert "Car loan: 1,000,000 ₸ at 20%" in prompt
    assert "No active loans" not in prompt


def test_prompt_without_loans(healthy_snapshot: FinancialSnapshot):
    prompt = build_system_prompt(build_financial_context(healthy_snapshot))

    assert "- No active loans" in prompt
    assert "Total Savings: 300,000 ₸" in prompt
    assert "Free Cash Flow: 190,000 ₸" in prompt
