"""JSON encoding of the stored snapshot and achievements, with forward migration"""

import dataclasses
import json
import logging
import math
from datetime import datetime
from typing import Any, Dict, List

from finx_gateway.domain.aggregates import derive
from finx_gateway.domain.models import (
    DEFAULT_DEPOSIT_INTEREST_RATE,
    RAW_FIELDS,
    Achievement,
    ExpenseCategory,
    FinancialSnapshot,
    Loan,
)
from finx_gateway.domain.progress import default_achievements

logger = logging.getLogger(__name__)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _amount(value: Any) -> float:
    """Stored number that must be finite and non-negative"""
    amount = float(value)
    if not math.isfinite(amount) or amount < 0:
        raise ValueError(f"invalid stored amount: {value!r}")
    return amount


def _expense_from_dict(item: Dict[str, Any]) -> ExpenseCategory:
    return ExpenseCategory(
        id=str(item["id"]),
        name=str(item["name"]),
        amount=_amount(item["amount"]),
        icon=str(item.get("icon", "")),
    )


def _loan_from_dict(item: Dict[str, Any]) -> Loan:
    return Loan(
        id=str(item["id"]),
        name=str(item["name"]),
        amount=_amount(item["amount"]),
        interest_rate=_amount(item["interestRate"]),
        duration=int(_amount(item["duration"])),
        monthly_payment=int(_amount(item["monthlyPayment"])),
    )


def encode_snapshot(snapshot: FinancialSnapshot) -> str:
    """Serialize every snapshot field under its camelCase name"""
    payload = {_camel(key): value for key, value in dataclasses.asdict(snapshot).items()}
    payload["otherExpenses"] = [
        {_camel(k): v for k, v in dataclasses.asdict(e).items()} for e in snapshot.other_expenses
    ]
    payload["loans"] = [{_camel(k): v for k, v in dataclasses.asdict(loan).items()} for loan in snapshot.loans]
    return json.dumps(payload)


def migrate_snapshot_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Bring an older stored payload up to the current layout.

    - Combined savings fields (currentSavings / plannedMonthlySavings) are
      split into cash and deposit savings when the split is missing
    - entertainment and groceries default to 0
    """
    migrated = dict(payload)
    if "currentSavings" in migrated and "cashSavings" not in migrated:
        migrated["cashSavings"] = migrated["currentSavings"]
        migrated["depositSavings"] = 0
        migrated["depositInterestRate"] = DEFAULT_DEPOSIT_INTEREST_RATE
        migrated["monthlyDepositContribution"] = migrated.get("plannedMonthlySavings") or 0
    migrated.setdefault("entertainment", 0)
    migrated.setdefault("groceries", 0)
    return migrated


def decode_snapshot(raw: str | None) -> FinancialSnapshot:
    """
    Parse a stored snapshot; malformed data falls back to defaults.

    Only raw inputs are read, cached fields are re-derived.
    """
    if raw is None:
        return derive(FinancialSnapshot())

    try:
        payload = json.loads(raw)
        if not isinstance(payload, dict):
            raise ValueError(f"expected an object, got {type(payload).__name__}")
        payload = migrate_snapshot_payload(payload)

        changes: Dict[str, Any] = {}
        for name in RAW_FIELDS:
            key = _camel(name)
            if key not in payload or payload[key] is None:
                continue
            if name == "other_expenses":
                changes[name] = [_expense_from_dict(item) for item in payload[key]]
            elif name == "loans":
                changes[name] = [_loan_from_dict(item) for item in payload[key]]
            elif name == "onboarding_completed":
                changes[name] = bool(payload[key])
            else:
                changes[name] = _amount(payload[key])

        return derive(FinancialSnapshot(**changes))

    except (ValueError, KeyError, TypeError) as e:
        # json.JSONDecodeError is a ValueError
        logger.warning(f"Discarding malformed stored snapshot: {e}")
        return derive(FinancialSnapshot())


def encode_achievements(achievements: List[Achievement]) -> str:
    return json.dumps(
        [
            {
                "id": a.id,
                "name": a.name,
                "description": a.description,
                "unlocked": a.unlocked,
                "unlockedAt": a.unlocked_at.isoformat() if a.unlocked_at else None,
            }
            for a in achievements
        ]
    )


def decode_achievements(raw: str | None) -> List[Achievement]:
    """
    Parse the stored achievement list onto the current catalogue.

    Stored unlock state is kept for ids still in the catalogue; unknown ids
    are dropped and catalogue entries missing from storage arrive locked.
    Malformed data falls back to the locked catalogue.
    """
    if raw is None:
        return default_achievements()

    try:
        items = json.loads(raw)
        if not isinstance(items, list):
            raise ValueError(f"expected a list, got {type(items).__name__}")

        stored = {}
        for item in items:
            stored[str(item["id"])] = (
                bool(item.get("unlocked", False)),
                datetime.fromisoformat(item["unlockedAt"]) if item.get("unlockedAt") else None,
            )

    except (ValueError, KeyError, TypeError) as e:
        logger.warning(f"Discarding malformed stored achievements: {e}")
        return default_achievements()

    achievements = []
    for achievement in default_achievements():
        if achievement.id in stored:
            unlocked, unlocked_at = stored[achievement.id]
            achievement = dataclasses.replace(achievement, unlocked=unlocked, unlocked_at=unlocked_at)
        achievements.append(achievement)
    return achievements
