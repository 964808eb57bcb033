from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from expense_settlement.config import settings
from expense_settlement.domain.models import Expense
from expense_settlement.services.balances import local_balances

# debtor -> creditor -> amount
SettlementMap = dict[str, dict[str, float]]


@dataclass(frozen=True)
class Transfer:
    debtor: str
    creditor: str
    amount: float

    def to_dict(self) -> dict[str, object]:
        return {"debtor": self.debtor, "creditor": self.creditor, "amount": self.amount}


def _largest(remaining: dict[str, float]) -> str:
    # Largest amount first, ties by identifier.
    return min(remaining, key=lambda pid: (-remaining[pid], pid))


def settle_balances(balances: Mapping[str, float], *, epsilon: Optional[float] = None) -> SettlementMap:
    """
    Greedy matching: repeatedly pair the largest remaining creditor with the
    largest remaining debtor and move min(owed, owing) between them.

    Every step clears at least one side, so there are at most
    len(creditors) + len(debtors) - 1 steps. Remainders at or below
    epsilon count as cleared.
    """

    eps = settings.settlement_epsilon if epsilon is None else epsilon

    creditors: dict[str, float] = {}  # participant -> to receive
    debtors: dict[str, float] = {}  # participant -> to pay
    for pid, bal in balances.items():
        if bal > eps:
            creditors[pid] = bal
        elif bal < -eps:
            debtors[pid] = -bal

    out: SettlementMap = {}
    while creditors and debtors:
        c_id = _largest(creditors)
        d_id = _largest(debtors)
        amt = min(creditors[c_id], debtors[d_id])

        row = out.setdefault(d_id, {})
        row[c_id] = row.get(c_id, 0.0) + amt

        creditors[c_id] -= amt
        debtors[d_id] -= amt
        if creditors[c_id] <= eps:
            del creditors[c_id]
        if debtors[d_id] <= eps:
            del debtors[d_id]
    return out


def settle_expense(expense: Expense, *, epsilon: Optional[float] = None) -> SettlementMap:
    return settle_balances(local_balances(expense), epsilon=epsilon)


def flatten_settlement(settlement: Mapping[str, Mapping[str, float]]) -> list[Transfer]:
    out = [
        Transfer(debtor=debtor, creditor=creditor, amount=amount)
        for debtor, row in settlement.items()
        for creditor, amount in row.items()
    ]
    out.sort(key=lambda t: (-t.amount, t.debtor, t.creditor))
    return out


def net_transfers(balances: Mapping[str, float], *, epsilon: Optional[float] = None) -> list[Transfer]:
    # Same matching over global balances: at most one transfer fewer than the
    # number of participants with a non-zero balance.
    return flatten_settlement(settle_balances(balances, epsilon=epsilon))
