"""Tests for the batch ledger."""

import math

import pytest

from scentvalue.services.ledger_service import LedgerService
from scentvalue.storage import InMemoryLedgerStore


def test_add_entry_prices_and_stores(ledger):
    entry = ledger.add_entry(636, "Sauvage Dior")

    assert entry is not None
    assert entry.label == "Sauvage Dior"
    assert entry.gross_weight == 636
    assert entry.net_weight == 500
    assert entry.price == 115000
    assert entry.id.startswith("le_")
    assert ledger.count() == 1


@pytest.mark.parametrize("weight", [0, -10, None, math.nan, math.inf])
def test_add_entry_rejects_invalid_weight(ledger, weight):
    assert ledger.add_entry(weight, "X") is None
    assert ledger.count() == 0


def test_weight_below_tare_is_added_with_zero_price(ledger):
    entry = ledger.add_entry(100)

    assert entry is not None
    assert entry.net_weight == 0
    assert entry.price == 0


def test_newest_entry_comes_first(ledger):
    first = ledger.add_entry(500, "A")
    second = ledger.add_entry(600, "B")

    entries = ledger.list_entries()
    assert entries[0].id == second.id
    assert entries[1].id == first.id


def test_blank_label_gets_auto_numbered(ledger):
    ledger.add_entry(500)
    ledger.add_entry(500, "  ")
    ledger.add_entry(500, "Named")
    ledger.add_entry(500, "")

    labels = [e.label for e in ledger.list_entries()]
    assert labels == ["Item 4", "Named", "Item 2", "Item 1"]


def test_ids_are_unique(ledger):
    ids = {ledger.add_entry(500).id for _ in range(20)}
    assert len(ids) == 20


def test_total(ledger):
    # (136 + n/230) gross gives a price of exactly n
    for price in (100, 200, 300):
        ledger.add_entry(136 + price / 230)

    assert ledger.total() == pytest.approx(600)


def test_total_empty_ledger(ledger):
    assert ledger.total() == 0
    assert ledger.count() == 0


def test_clear_resets_everything(ledger):
    for weight in (500, 700, 900):
        ledger.add_entry(weight)

    ledger.clear()

    assert ledger.count() == 0
    assert ledger.total() == 0
    assert ledger.list_entries() == []


def test_add_expression(ledger):
    entry = ledger.add_expression("1kg236", "Blue de Chanel")

    assert entry.gross_weight == 1236
    assert entry.price == pytest.approx(253000)


@pytest.mark.parametrize("expression", ["", "abc", "100-200", "1;DROP"])
def test_add_expression_rejects(ledger, expression):
    assert ledger.add_expression(expression) is None
    assert ledger.count() == 0


def test_entries_are_immutable(ledger):
    entry = ledger.add_entry(500)

    with pytest.raises(Exception):
        entry.price = 1


def test_get_entry(ledger):
    entry = ledger.add_entry(500)

    assert ledger.get_entry(entry.id) == entry
    assert ledger.get_entry("le_missing") is None


def test_summary(ledger):
    ledger.add_entry(636, "X")
    summary = ledger.summary()

    assert summary.count == 1
    assert summary.total_value == 115000
    assert summary.currency == "TSh"
    assert summary.tare_grams == 136
    assert summary.rate_per_gram == 230


def test_default_construction_uses_memory_store():
    service = LedgerService()

    assert isinstance(service.store, InMemoryLedgerStore)
    assert service.pricing.config.tare_grams == 136
