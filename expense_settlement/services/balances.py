from __future__ import annotations

import logging
from collections.abc import Iterable, MutableMapping, Sequence

from expense_settlement.domain.errors import ValidationError
from expense_settlement.domain.models import EvenSplit, Expense

logger = logging.getLogger(__name__)


def apply_expense(balances: MutableMapping[str, float], expense: Expense) -> None:
    """
    Balance sign:
      positive -> is owed
      negative -> owes

    The payer is credited the full amount; each share is debited
    separately, so a payer among the involved nets amount * (n-1)/n.
    """

    split = expense.split
    if isinstance(split, EvenSplit):
        if not split.involved:
            raise ValidationError(expense.id, "even split needs at least one involved participant")
        share = expense.amount / len(split.involved)
        for pid in split.involved:
            balances[pid] = balances.get(pid, 0.0) - share
    else:
        for pid, contribution in split.contributions.items():
            balances[pid] = balances.get(pid, 0.0) - contribution
    balances[expense.payer] = balances.get(expense.payer, 0.0) + expense.amount


def local_balances(expense: Expense) -> dict[str, float]:
    # Scoped to one expense: every involved participant starts at zero.
    balances: dict[str, float] = {pid: 0.0 for pid in expense.involved}
    apply_expense(balances, expense)
    return balances


def compute_balances(participants: Sequence[str], expenses: Iterable[Expense]) -> dict[str, float]:
    balances: dict[str, float] = {pid: 0.0 for pid in participants}
    count = 0
    for expense in expenses:
        apply_expense(balances, expense)
        count += 1
    logger.debug("Computed balances for %s participants over %s expenses", len(balances), count)
    return balances
