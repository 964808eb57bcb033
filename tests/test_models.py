from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from expense_settlement.domain.errors import ValidationError
from expense_settlement.domain.models import EvenSplit, Expense, ManualSplit


def test_from_record_even():
    expense = Expense.from_record(
        {
            "id": 7,
            "name": "Dinner",
            "payer": "A",
            "amount": 90,
            "involvedParticipants": ["A", "B", "C"],
            "splitEvenly": True,
        }
    )

    assert expense.id == "7"
    assert expense.name == "Dinner"
    assert isinstance(expense.split, EvenSplit)
    assert expense.involved == ("A", "B", "C")


def test_from_record_manual_defaults_involved_to_contributors():
    expense = Expense.from_record(
        {
            "id": "e1",
            "payer": "A",
            "amount": 100,
            "splitEvenly": False,
            "manualContributions": {"A": 20, "B": 50, "C": 30},
        }
    )

    assert isinstance(expense.split, ManualSplit)
    assert expense.split.contributions == {"A": 20.0, "B": 50.0, "C": 30.0}
    assert expense.involved == ("A", "B", "C")


def test_split_evenly_wins_over_contributions():
    expense = Expense.from_record(
        {
            "id": "e1",
            "payer": "A",
            "amount": 10,
            "involvedParticipants": ["A", "B"],
            "splitEvenly": True,
            "manualContributions": {"B": 10},
        }
    )

    assert isinstance(expense.split, EvenSplit)


def test_record_without_split_mode_is_rejected():
    with pytest.raises(ValidationError) as exc:
        Expense.from_record({"id": "e1", "payer": "A", "amount": 10, "splitEvenly": False})

    assert exc.value.expense_id == "e1"
    assert "neither" in exc.value.message


def test_missing_amount_is_reported_as_validation_error():
    with pytest.raises(ValidationError) as exc:
        Expense.from_record({"id": "e1", "payer": "A", "involvedParticipants": ["A"], "splitEvenly": True})

    assert "amount" in exc.value.message
    assert isinstance(exc.value.__cause__, PydanticValidationError)


def test_non_mapping_record_is_rejected():
    with pytest.raises(ValidationError):
        Expense.from_record(["not", "a", "record"])


def test_involved_is_deduplicated_in_order():
    split = EvenSplit(involved=("B", "A", "B"))

    assert split.involved == ("B", "A")


def test_split_is_a_tagged_variant():
    expense = Expense(id="e1", payer="A", amount=5, split={"mode": "manual", "contributions": {"A": 5}})

    assert isinstance(expense.split, ManualSplit)

    with pytest.raises(PydanticValidationError):
        Expense(id="e1", payer="A", amount=5, split={"mode": "percent", "involved": ["A"]})


def test_expense_is_frozen():
    expense = Expense(id="e1", payer="A", amount=5, split=EvenSplit(involved=("A",)))

    with pytest.raises(PydanticValidationError):
        expense.amount = 6
