from __future__ import annotations

import pytest

from milktrack.application.stores.undo import UndoBuffer


def test_single_slot_overwrites_previous_entry():
    buffer: UndoBuffer[str] = UndoBuffer()
    buffer.remember("A")
    buffer.remember("B")
    assert len(buffer) == 1
    assert buffer.peek().record == "B"


def test_bounded_history_keeps_latest_entries():
    buffer: UndoBuffer[str] = UndoBuffer(capacity=2)
    for record in ("A", "B", "C"):
        buffer.remember(record)
    assert buffer.capacity == 2
    assert buffer.peek().record == "C"
    buffer.discard(buffer.peek())
    assert buffer.peek().record == "B"


def test_discard_of_unknown_entry_is_ignored():
    buffer: UndoBuffer[str] = UndoBuffer()
    entry = buffer.remember("A", dependents=["child"])
    buffer.discard(entry)
    buffer.discard(entry)
    assert not buffer.can_undo
    assert buffer.peek() is None


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        UndoBuffer(capacity=0)
