from typing import Any

from lazycogs.core.cell import SharedCell, duplicate_payload
from lazycogs.core.counter import AtomicRefCounter, RefCounter
from lazycogs.core.errors import NotExclusive
from lazycogs.core.lazy import LazyClone


class Lc(LazyClone):
    """
    Lc is a lazy clone wrapper that provides lazy cloning for any data
    that does not implement the LazyClone interface itself.

    The wrapped value lives in a single shared cell, so there is no
    sharing of its parts: the first mutation of a shared Lc copies
    the whole value.

    The handle releases its reference to the cell when it is dropped
    (explicitly, by leaving a `with` block, or when the handle object
    is garbage collected).
    """

    __slots__ = ("_cell",)

    counter = RefCounter

    def __init__(self, value: Any) -> None:
        self._cell = SharedCell(value, self.counter)

    @classmethod
    def _from_cell(cls, cell: SharedCell) -> "Lc":
        """Create a handle that takes over an already counted reference"""
        new = cls.__new__(cls)
        new._cell = cell
        return new

    def _get_cell(self) -> SharedCell:
        cell = self._cell
        if cell is None:
            raise RuntimeError(f"Using a dropped {type(self).__name__}")
        return cell

    def read(self) -> Any:
        """Return the value for reading, mutating it is a misuse"""
        return self._get_cell().get()

    def read_mut(self) -> Any:
        """Make sure our value is not shared and return it"""
        cell = self._get_cell()
        if cell.count() != 1:
            self._cell = cell.duplicate()
            cell.release()
            assert self._cell.count() == 1, "Duplicated cell is shared (COW bug)"
        return self._cell.get_exclusive()

    def write(self, value: Any) -> None:
        """
        Replace the value. Values lazily cloned from this handle are
        not affected.
        """
        old = self._get_cell()
        self._cell = SharedCell(value, type(self).counter)
        old.release()

    def take(self) -> Any:
        """Return an actual (possibly expensive) copy of the value"""
        return duplicate_payload(self._get_cell().get())

    def ptr_eq(self, other: "Lc") -> bool:
        """Check whether the two handles point to the same cell"""
        return self._get_cell() is other._get_cell()

    def destroy(self) -> Any:
        """
        Drop the handle and return the value in O(1). Works only if
        the value is not shared, otherwise raises NotExclusive.
        """
        cell = self._get_cell()
        if cell.count() != 1:
            raise NotExclusive(
                cell.count(), "Destroyed a lazy clone that was being shared"
            )
        value = cell.into_inner()
        self._cell = None
        return value

    def unwrap(self) -> Any:
        """
        Drop the handle and return the value. This is O(1) if the value
        is not shared, otherwise the value is copied.
        """
        if self.is_mutable():
            return self.destroy()
        value = self.take()
        self.drop()
        return value

    def ref_count(self) -> int:
        return self._get_cell().count()

    def state(self) -> int:
        return self._get_cell().state()

    def lazy(self) -> "Lc":
        return self._from_cell(self._get_cell().share())

    def eager(self) -> "Lc":
        return self._from_cell(self._get_cell().duplicate())

    def is_mutable(self) -> bool:
        return self._get_cell().count() == 1

    def drop(self) -> None:
        cell = self._cell
        if cell is None:
            return
        self._cell = None
        cell.release()

    def is_dropped(self) -> bool:
        return self._cell is None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.drop()

    def __del__(self):
        if getattr(self, "_cell", None) is not None:
            self.drop()

    def __eq__(self, rhs: object):
        if not isinstance(rhs, Lc):
            return NotImplemented
        return self.ptr_eq(rhs) or self.read() == rhs.read()

    __hash__ = None

    def __repr__(self) -> str:
        if self._cell is None:
            return f"{type(self).__name__}(<dropped>)"
        return f"{type(self).__name__}({self._cell.get()!r})"


class Alc(Lc):
    """
    Thread-safe variant of Lc. Handles to one value can be cloned,
    read and dropped from multiple threads. Mutating a single handle
    from multiple threads must be synchronized by the caller.
    """

    __slots__ = ()

    counter = AtomicRefCounter


def lazy_handle(h: Lc, cls: type) -> Lc:
    """
    Return a lazy clone of the handle h. The handle must be an instance
    of cls so that a collection never mixes counting disciplines
    it was not built for.
    """
    if not isinstance(h, cls):
        raise TypeError(f"Expected {cls.__name__}, got {type(h).__name__}")
    return h.lazy()
