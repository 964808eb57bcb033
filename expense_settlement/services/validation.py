from __future__ import annotations

import math
from collections.abc import Collection, Iterable, Mapping

from expense_settlement.domain.errors import ComputationWarning, ValidationError
from expense_settlement.domain.models import EvenSplit, Expense


def validate_participants(participants: Iterable[str]) -> tuple[str, ...]:
    roster = tuple(participants)
    seen: set[str] = set()
    for pid in roster:
        if not isinstance(pid, str) or not pid:
            raise ValueError(f"Participant identifiers must be non-empty strings, got {pid!r}.")
        if pid in seen:
            raise ValueError(f"Participant {pid!r} is listed more than once.")
        seen.add(pid)
    return roster


def validate_expense(
    expense: Expense,
    participants: Collection[str],
    *,
    enforce_contribution_total: bool = True,
    tolerance: float = 1e-6,
) -> None:
    if not expense.id:
        raise ValidationError(expense.id, "expense id must not be empty")
    if not math.isfinite(expense.amount) or expense.amount <= 0:
        raise ValidationError(expense.id, f"amount must be a positive number, got {expense.amount!r}")
    if expense.payer not in participants:
        raise ValidationError(expense.id, f"payer {expense.payer!r} is not a participant")

    unknown = [pid for pid in expense.involved if pid not in participants]
    if unknown:
        raise ValidationError(expense.id, f"unknown involved participants: {', '.join(unknown)}")

    split = expense.split
    if isinstance(split, EvenSplit):
        if not split.involved:
            raise ValidationError(expense.id, "even split needs at least one involved participant")
        return

    if not split.contributions:
        raise ValidationError(expense.id, "manual split needs at least one contribution")
    for pid, contribution in split.contributions.items():
        if pid not in participants:
            raise ValidationError(expense.id, f"contribution from unknown participant {pid!r}")
        if not math.isfinite(contribution) or contribution < 0:
            raise ValidationError(expense.id, f"contribution of {pid!r} must be non-negative, got {contribution!r}")

    total = math.fsum(split.contributions.values())
    if enforce_contribution_total and abs(total - expense.amount) > tolerance:
        raise ValidationError(expense.id, f"contributions sum to {total:g}, expected {expense.amount:g}")


def check_local_balance(expense: Expense, balances: Mapping[str, float], *, tolerance: float = 1e-6) -> None:
    drift = math.fsum(balances.values())
    if abs(drift) > tolerance:
        raise ComputationWarning(
            expense.id,
            f"local balances are off by {drift:g}; settlement skipped",
        )
