import pytest

from lazycogs.core.cell import CellPayload, SharedCell
from lazycogs.core.counter import AtomicRefCounter, RefCounter
from lazycogs.core.errors import Error, NotExclusive
from lazycogs.core.state import MutState


class Payload(CellPayload):
    __slots__ = ("disposed", "copied")

    def __init__(self):
        self.disposed = 0
        self.copied = 0

    def duplicate(self):
        self.copied += 1
        return Payload()

    def dispose(self):
        self.disposed += 1


def test_new_cell_is_exclusive():
    c = SharedCell.new([1, 2])
    assert c.count() == 1, "New cell has wrong count"
    assert c.state() == MutState.EXCLUSIVE
    assert c.get_exclusive() == [1, 2]
    assert not c.is_atomic()


def test_share_and_release():
    c = SharedCell([1])
    assert c.share() is c, "share() must return the same cell"
    assert c.count() == 2
    assert c.state() == MutState.SHARED

    with pytest.raises(NotExclusive) as e:
        c.get_exclusive()
    assert e.value.count == 2
    assert e.value.is_not_exclusive()
    assert isinstance(e.value, Error)

    assert c.release() is False, "Cell destroyed while shared"
    assert c.count() == 1
    assert c.get_exclusive() == [1]
    assert c.release() is True, "Last release did not destroy the cell"
    assert not c.is_alive()


def test_release_disposes_payload_once():
    p = Payload()
    c = SharedCell(p)
    c.share()
    c.release()
    assert p.disposed == 0, "Disposed a payload of a live cell"
    c.release()
    assert p.disposed == 1

    with pytest.raises(AssertionError):
        c.release()


def test_duplicate():
    c = SharedCell({"a": [1]})
    c.share()
    d = c.duplicate()
    assert d is not c
    assert d.count() == 1, "Duplicated cell is shared"
    assert c.count() == 2, "Duplication touched the count of the original"
    assert d.get() == c.get()
    assert d.get()["a"] is not c.get()["a"], "Plain payload not deep-copied"

    p = Payload()
    e = SharedCell(p).duplicate()
    assert p.copied == 1
    assert isinstance(e.get(), Payload)


def test_into_inner():
    p = Payload()
    c = SharedCell(p)
    assert c.into_inner() is p
    assert p.disposed == 0, "into_inner() must not dispose the value"
    assert not c.is_alive()

    c = SharedCell(1)
    c.share()
    with pytest.raises(NotExclusive):
        c.into_inner()


def test_atomic_discipline():
    c = SharedCell("x", AtomicRefCounter)
    assert c.is_atomic()
    c.share()
    d = c.duplicate()
    assert d.is_atomic(), "Duplicate changed the counting discipline"
    assert c.count() == 2


def test_counters():
    for cls in (RefCounter, AtomicRefCounter):
        cnt = cls()
        assert cnt.value() == 1
        assert cnt.increment() == 2
        assert cnt.decrement() == 1
        assert cnt.decrement() == 0
        with pytest.raises(AssertionError):
            cnt.decrement()


def test_mut_state():
    assert MutState.of(1) == MutState.EXCLUSIVE
    assert MutState.of(3) == MutState.SHARED
    assert MutState.name(MutState.SHARED) == "shared"
    with pytest.raises(RuntimeError):
        MutState.name(7)
