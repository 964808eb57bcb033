from __future__ import annotations

from expense_settlement.domain.models import EvenSplit, Expense, ManualSplit
from expense_settlement.services.balances import compute_balances
from expense_settlement.services.settlement import Transfer, net_transfers, settle_expense


def example_even_split() -> None:
    """
    Even split of 90 over A, B, C paid by A:
      share = 30
      A: -30 + 90 = +60 (is owed)
      B, C: -30 (owe)
    """

    expense = Expense(id="dinner", payer="A", amount=90, split=EvenSplit(involved=("A", "B", "C")))

    assert compute_balances(["A", "B", "C"], [expense]) == {"A": 60.0, "B": -30.0, "C": -30.0}
    assert settle_expense(expense) == {"B": {"A": 30.0}, "C": {"A": 30.0}}


def example_manual_split() -> None:
    """
    Manual contributions {A: 20, B: 50, C: 30} of 100 paid by A:
      A: -20 + 100 = +80
    """

    expense = Expense(
        id="groceries",
        payer="A",
        amount=100,
        split=ManualSplit(contributions={"A": 20, "B": 50, "C": 30}),
    )

    assert compute_balances(["A", "B", "C"], [expense]) == {"A": 80.0, "B": -50.0, "C": -30.0}
    assert settle_expense(expense) == {"B": {"A": 50.0}, "C": {"A": 30.0}}


def example_netting() -> None:
    """
    Equal debtors are matched in identifier order.
    """

    transfers = net_transfers({"A": 100.0, "C": -50.0, "B": -50.0})
    assert transfers == [
        Transfer(debtor="B", creditor="A", amount=50.0),
        Transfer(debtor="C", creditor="A", amount=50.0),
    ]
