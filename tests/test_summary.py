from __future__ import annotations

from expense_settlement.services.summary import aggregate_settlements, settlement_total


def test_aggregate_sums_element_wise():
    by_expense = {
        "e1": {"B": {"A": 30.0}, "C": {"A": 30.0}},
        "e2": {"B": {"A": 5.0, "C": 10.0}},
        "e3": {"A": {"B": 12.0}},
    }

    summary = aggregate_settlements(by_expense)

    assert summary == {
        "B": {"A": 35.0, "C": 10.0},
        "C": {"A": 30.0},
        "A": {"B": 12.0},
    }


def test_aggregate_is_idempotent_and_returns_plain_dicts():
    by_expense = {"e1": {"B": {"A": 1.5}}}

    first = aggregate_settlements(by_expense)
    second = aggregate_settlements(by_expense)

    assert first == second
    assert type(first) is dict
    assert type(first["B"]) is dict


def test_aggregate_empty():
    assert aggregate_settlements({}) == {}
    assert aggregate_settlements({"e1": {}}) == {}


def test_settlement_total():
    assert settlement_total({"B": {"A": 35.0, "C": 10.0}, "C": {"A": 30.0}}) == 75.0
