from __future__ import annotations

from typing import Any


class SettlementIssue(Exception):
    """A problem tied to a single expense.

    Issues are collected per expense instead of aborting the whole
    computation, so one bad record never blocks the rest.
    """

    kind = "error"

    def __init__(self, expense_id: str, message: str) -> None:
        super().__init__(message)
        self.expense_id = expense_id
        self.message = message

    def __str__(self) -> str:
        return f"expense {self.expense_id!r}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {"expenseId": self.expense_id, "kind": self.kind, "message": self.message}


class ValidationError(SettlementIssue, ValueError):
    """The expense is malformed and is left out of every result."""


class ComputationWarning(SettlementIssue, Warning):
    """The expense counts toward balances, but its settlement was skipped."""

    kind = "warning"
