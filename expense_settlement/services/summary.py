from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping

from expense_settlement.services.settlement import SettlementMap


def aggregate_settlements(by_expense: Mapping[str, Mapping[str, Mapping[str, float]]]) -> SettlementMap:
    # summary[debtor][creditor] = sum over expenses; purely additive.
    summary: dict[str, dict[str, float]] = defaultdict(lambda: defaultdict(float))
    for settlement in by_expense.values():
        for debtor, row in settlement.items():
            for creditor, amount in row.items():
                summary[debtor][creditor] += amount
    return {debtor: dict(row) for debtor, row in summary.items()}


def settlement_total(settlement: Mapping[str, Mapping[str, float]]) -> float:
    return sum(amount for row in settlement.values() for amount in row.values())
