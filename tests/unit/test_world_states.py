from __future__ import annotations

import pytest

from common.memory_state import InMemoryWorldState
from common.transaction import BufferedWorldState


def test_memory_state_put_get_delete():
    state = InMemoryWorldState()
    state.put_state("b", b"2")
    state.put_state("a", bytearray(b"1"))

    assert state.get_state("a") == b"1"
    assert list(state.keys()) == ["a", "b"]

    state.del_state("a")
    state.del_state("a")  # missing key is a no-op
    assert state.get_state("a") is None
    assert len(state) == 1


@pytest.mark.parametrize("key,value", [("", b"x"), ("k", "text")])
def test_memory_state_rejects_bad_input(key, value):
    with pytest.raises(ValueError):
        InMemoryWorldState().put_state(key, value)


def test_buffered_reads_see_own_writes_before_commit():
    inner = InMemoryWorldState({"a": b"old"})
    tx = BufferedWorldState(inner)

    tx.put_state("a", b"new")
    tx.put_state("b", b"1")
    tx.del_state("c")

    assert tx.get_state("a") == b"new"
    assert tx.get_state("c") is None
    assert inner.get_state("a") == b"old"
    assert "b" not in inner
    assert tx.pending == 3


def test_buffered_commit_applies_in_order():
    inner = InMemoryWorldState({"a": b"1"})
    tx = BufferedWorldState(inner)
    tx.put_state("b", b"2")
    tx.del_state("a")
    tx.put_state("a", b"3")

    assert tx.commit() == 3
    assert inner.get_state("a") == b"3"
    assert inner.get_state("b") == b"2"
    assert tx.pending == 0


def test_buffered_rollback_discards_everything():
    inner = InMemoryWorldState({"a": b"1"})
    tx = BufferedWorldState(inner)
    tx.put_state("b", b"2")
    tx.del_state("a")

    tx.rollback()

    assert tx.pending == 0
    assert tx.get_state("a") == b"1"
    assert "b" not in inner
