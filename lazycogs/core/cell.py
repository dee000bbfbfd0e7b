from copy import deepcopy
from typing import Any, Type

from lazycogs.core.counter import RefCounter
from lazycogs.core.errors import NotExclusive
from lazycogs.core.state import MutState
from lazycogs.options import get_options
from lazycogs.stats import stats
from lazycogs.util.debugging import ldbgv


class CellPayload:
    """
    Payload of a shared cell that holds handles to other cells
    (e.g., a buffer of element handles or a node of a list).
    Such a payload knows how to duplicate itself structurally
    and how to release the handles it holds.
    """

    __slots__ = ()

    def duplicate(self) -> "CellPayload":
        """
        Return a copy of this payload whose inner handles are lazy clones
        of our inner handles
        """
        raise NotImplementedError("Must be overridden")

    def dispose(self) -> None:
        """Release inner handles, called when the owning cell dies"""
        pass


def duplicate_payload(value: Any) -> Any:
    if isinstance(value, CellPayload):
        return value.duplicate()
    return deepcopy(value)


class SharedCell:
    """
    Reference counted storage for a value. Multiple handles may point
    to a single cell, the count must be equal to the number of live
    handles. The counting discipline (plain or atomic) is given by the
    class of the counter.
    """

    __slots__ = "_value", "_counter", "_alive"

    def __init__(
        self, value: Any, counter: Type[RefCounter] = RefCounter, duplicated=False
    ) -> None:
        self._value = value
        self._counter = counter()
        self._alive = True

        if get_options().collect_stats:
            if duplicated:
                stats.duplications += 1
            else:
                stats.cells_created += 1

    @staticmethod
    def new(value: Any, counter: Type[RefCounter] = RefCounter) -> "SharedCell":
        return SharedCell(value, counter)

    def share(self) -> "SharedCell":
        """Take another reference to this cell"""
        assert self._alive, "Sharing a destroyed cell (COW bug)"
        self._counter.increment()
        if get_options().collect_stats:
            stats.shares += 1
        return self

    def release(self) -> bool:
        """
        Drop one reference to this cell. Return True if it was the last
        reference and the cell has been destroyed.
        """
        assert self._alive, "Releasing a destroyed cell (COW bug)"
        if self._counter.decrement() > 0:
            return False

        self._alive = False
        value = self._value
        self._value = None
        if isinstance(value, CellPayload):
            value.dispose()

        if get_options().collect_stats:
            stats.destroyed += 1
        ldbgv("destroyed cell {0}", (hex(id(self)),))
        return True

    def count(self) -> int:
        return self._counter.value()

    def state(self) -> int:
        return MutState.of(self.count())

    def is_alive(self) -> bool:
        return self._alive

    def is_atomic(self) -> bool:
        return self._counter.ATOMIC

    def get(self) -> Any:
        assert self._alive, "Reading a destroyed cell (COW bug)"
        return self._value

    def get_exclusive(self) -> Any:
        assert self._alive, "Writing to a destroyed cell (COW bug)"
        cnt = self._counter.value()
        if cnt != 1:
            raise NotExclusive(cnt)
        return self._value

    def into_inner(self) -> Any:
        """
        Destroy the cell without disposing its value and return the value.
        Works only if the cell is not shared.
        """
        value = self.get_exclusive()
        self._counter.decrement()
        self._alive = False
        self._value = None
        if get_options().collect_stats:
            stats.destroyed += 1
        return value

    def duplicate(self) -> "SharedCell":
        """
        Create a new cell with a copy of our value. The count of this cell
        is not touched, the caller is responsible for releasing it.
        """
        assert self._alive, "Duplicating a destroyed cell (COW bug)"
        ldbgv(
            "duplicating cell {0} shared by {1} handles",
            (hex(id(self)), self.count()),
        )
        return SharedCell(
            duplicate_payload(self._value), type(self._counter), duplicated=True
        )

    def __repr__(self) -> str:
        if not self._alive:
            return "SharedCell(<destroyed>)"
        return f"SharedCell({self._value!r}, count={self.count()})"
