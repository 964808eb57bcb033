from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from expense_settlement.config import Settings, settings
from expense_settlement.domain.errors import ComputationWarning, SettlementIssue, ValidationError
from expense_settlement.domain.models import Expense
from expense_settlement.services.balances import compute_balances, local_balances
from expense_settlement.services.settlement import SettlementMap, Transfer, net_transfers, settle_balances
from expense_settlement.services.summary import aggregate_settlements, settlement_total
from expense_settlement.services.validation import check_local_balance, validate_expense, validate_participants

logger = logging.getLogger(__name__)

ExpenseInput = Union[Expense, Mapping[str, Any]]


@dataclass(frozen=True)
class TransactionBreakdown:
    by_expense: dict[str, SettlementMap]
    summary: SettlementMap

    def to_dict(self) -> dict[str, Any]:
        return {"byExpense": self.by_expense, "summary": self.summary}


@dataclass(frozen=True)
class CalculationResults:
    balances: dict[str, float]
    transactions: TransactionBreakdown
    netted: list[Transfer]
    issues: list[SettlementIssue] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "balances": self.balances,
            "transactions": self.transactions.to_dict(),
            "netted": [t.to_dict() for t in self.netted],
            "issues": [i.to_dict() for i in self.issues],
        }


def _as_expense(item: ExpenseInput) -> Expense:
    if isinstance(item, Expense):
        return item
    return Expense.from_record(item)


def accept_expenses(
    participants: tuple[str, ...],
    expenses: Iterable[ExpenseInput],
    *,
    config: Settings,
) -> tuple[list[Expense], list[SettlementIssue]]:
    roster = frozenset(participants)
    accepted: list[Expense] = []
    issues: list[SettlementIssue] = []
    seen_ids: set[str] = set()

    for item in expenses:
        try:
            expense = _as_expense(item)
            validate_expense(
                expense,
                roster,
                enforce_contribution_total=config.enforce_contribution_total,
                tolerance=config.balance_tolerance,
            )
            if expense.id in seen_ids:
                raise ValidationError(expense.id, "expense id is used more than once")
        except ValidationError as e:
            logger.warning("Skipping %s", e)
            issues.append(e)
            continue
        seen_ids.add(expense.id)
        accepted.append(expense)
    return accepted, issues


def compute_results(
    participants: Iterable[str],
    expenses: Iterable[ExpenseInput],
    *,
    config: Optional[Settings] = None,
) -> CalculationResults:
    """
    Full recomputation from scratch: validate, derive balances, settle
    each expense on its own, then sum the per-expense settlements.

    Invalid expenses are skipped and reported in `issues`; they never
    block the rest.
    """

    config = config or settings
    roster = validate_participants(participants)
    accepted, issues = accept_expenses(roster, expenses, config=config)

    balances = compute_balances(roster, accepted)

    by_expense: dict[str, SettlementMap] = {}
    for expense in accepted:
        local = local_balances(expense)
        try:
            check_local_balance(expense, local, tolerance=config.balance_tolerance)
        except ComputationWarning as w:
            logger.warning("%s", w)
            issues.append(w)
            continue
        by_expense[expense.id] = settle_balances(local, epsilon=config.settlement_epsilon)

    summary = aggregate_settlements(by_expense)
    netted = net_transfers(balances, epsilon=config.settlement_epsilon)

    logger.info(
        "Settled %s of %s expenses: %.2f moved per expense, %s netted transfers, %s issues",
        len(by_expense),
        len(accepted),
        settlement_total(summary),
        len(netted),
        len(issues),
    )
    return CalculationResults(
        balances=balances,
        transactions=TransactionBreakdown(by_expense=by_expense, summary=summary),
        netted=netted,
        issues=issues,
    )
