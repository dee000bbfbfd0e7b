from operator import index as as_index
from typing import Any, Iterable, Iterator, List, Optional

from lazycogs.core.cell import CellPayload
from lazycogs.core.errors import IndexOutOfBounds
from lazycogs.core.lazy import LazyClone
from lazycogs.lc import Alc, Lc, lazy_handle
from lazycogs.util.debugging import ldbgv


class Buffer(CellPayload):
    """Contiguous storage of a vector: a list of handles to the elements"""

    __slots__ = ("items",)

    def __init__(self, items: List[Lc]) -> None:
        self.items = items

    def duplicate(self) -> "Buffer":
        # elements are shared lazily, they get copied
        # when somebody writes to them
        return Buffer([h.lazy() for h in self.items])

    def dispose(self) -> None:
        items = self.items
        self.items = []
        for h in items:
            h.drop()

    def __repr__(self) -> str:
        return f"Buffer({self.items!r})"


def _check_index(idx, length: int) -> int:
    idx = as_index(idx)
    if idx < 0 or idx >= length:
        raise IndexOutOfBounds(idx, length)
    return idx


def _move_out(items: List[Lc], idx: int) -> Any:
    """
    Remove the handle on the position idx and return its value.
    A shared value is copied before the handle is removed,
    so a failed copy leaves the items untouched.
    """
    h = items[idx]
    if h.is_mutable():
        value = h.destroy()
    else:
        value = h.take()
        h.drop()
    del items[idx]
    return value


class LazyVec(LazyClone):
    """
    A vector meant to be used when you need to work with individual
    elements.

    Cloning a LazyVec is always O(1), reading elements is O(1) too.
    The first modification of a vector that shares its buffer with
    other clones copies the whole buffer (O(n)), further modifications
    work in place until the vector is cloned again. The elements
    themselves are lazily cloned too, so copying the buffer does not
    copy the elements.
    """

    __slots__ = ("_vec",)

    # the class of handles used for the buffer and for the elements,
    # determines the reference counting discipline
    handle = Lc

    def __init__(self, iterable: Iterable[Any] = ()) -> None:
        H = self.handle
        self._vec = H(Buffer([H(v) for v in iterable]))

    @classmethod
    def _from_handle(cls, vec: Lc) -> "LazyVec":
        new = cls.__new__(cls)
        new._vec = vec
        return new

    @classmethod
    def from_handles(cls, handles: Iterable[Lc]) -> "LazyVec":
        """
        Create a vector from handles to the elements. The vector takes
        lazy clones of the handles, the elements stay shared with
        the given handles until one side modifies them.
        """
        H = cls.handle
        return cls._from_handle(H(Buffer([lazy_handle(h, H) for h in handles])))

    def _items(self) -> List[Lc]:
        return self._vec.read().items

    def _items_mut(self) -> List[Lc]:
        vec = self._vec
        if not vec.is_mutable():
            ldbgv(
                "vector: copying buffer of {0} elements shared by {1} handles",
                (len(vec.read().items), vec.ref_count()),
            )
        return vec.read_mut().items

    def make_mutable(self) -> None:
        """Make sure that the buffer is not shared with any other vector"""
        self._items_mut()

    def len(self) -> int:
        return len(self._items())

    def get(self, idx: int) -> Any:
        """
        Get the element on the given position. Raises IndexOutOfBounds
        if the index is out of range. Always O(1).
        """
        items = self._items()
        return items[_check_index(idx, len(items))].read()

    def get_mut(self, idx: int) -> Any:
        """
        Get the element on the given position for an in-place
        modification. Other clones are not affected by the modification.
        """
        idx = _check_index(idx, self.len())
        return self._items_mut()[idx].read_mut()

    def get_lazy(self, idx: int) -> Lc:
        """Get a lazy clone of the handle of the element on the given position"""
        items = self._items()
        return items[_check_index(idx, len(items))].lazy()

    def set(self, idx: int, value: Any) -> None:
        """
        Update the element on the given position. The cost is O(1)
        if the buffer is not shared, otherwise it is O(n).
        """
        idx = _check_index(idx, self.len())
        self._items_mut()[idx].write(value)

    def push(self, value: Any) -> None:
        """Push a new element to the end of the vector"""
        self._items_mut().append(self.handle(value))

    def pop(self) -> Optional[Any]:
        """
        Pop the last element of the vector. Return None if the vector
        is empty.
        """
        if self.len() == 0:
            return None
        items = self._items_mut()
        return _move_out(items, len(items) - 1)

    def insert(self, idx: int, value: Any) -> None:
        """Insert an element before the given position (or at the end)"""
        length = self.len()
        idx = as_index(idx)
        if idx < 0 or idx > length:
            raise IndexOutOfBounds(idx, length)
        self._items_mut().insert(idx, self.handle(value))

    def remove(self, idx: int) -> Any:
        """Remove the element on the given position and return it"""
        idx = _check_index(idx, self.len())
        return _move_out(self._items_mut(), idx)

    def remove_lazy(self, idx: int) -> Lc:
        """
        Remove the element on the given position and return the handle
        of the element (no copy of the element is made)
        """
        idx = _check_index(idx, self.len())
        return self._items_mut().pop(idx)

    def iter(self) -> Iterator[Any]:
        return (h.read() for h in self._items())

    def iter_mut(self) -> Iterator[Any]:
        """Iterate over elements that can be modified in place"""
        items = self._items_mut()
        return (h.read_mut() for h in items)

    def to_list(self) -> List[Any]:
        return [h.read() for h in self._items()]

    def into_list(self) -> List[Any]:
        """
        Move the elements out into a list, the vector becomes empty.
        Elements that are shared with other vectors are copied.
        """
        buf = self._vec.unwrap()
        self._vec = self.handle(Buffer([]))
        return [h.unwrap() for h in buf.items]

    def ref_count(self) -> int:
        """The number of vectors sharing our buffer"""
        return self._vec.ref_count()

    def lazy(self) -> "LazyVec":
        return self._from_handle(self._vec.lazy())

    def eager(self) -> "LazyVec":
        return self._from_handle(self._vec.eager())

    def is_mutable(self) -> bool:
        return self._vec.is_mutable()

    def drop(self) -> None:
        """Release the buffer, the vector is empty afterwards"""
        vec = self._vec
        self._vec = self.handle(Buffer([]))
        vec.drop()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.drop()

    def __len__(self) -> int:
        return self.len()

    def __getitem__(self, idx: int) -> Any:
        return self.get(idx)

    def __setitem__(self, idx: int, value: Any) -> None:
        self.set(idx, value)

    def __iter__(self) -> Iterator[Any]:
        return self.iter()

    def __eq__(self, rhs: object):
        if isinstance(rhs, LazyVec):
            if self._vec.ptr_eq(rhs._vec):
                return True
            return self.to_list() == rhs.to_list()
        if isinstance(rhs, (list, tuple)):
            return self.to_list() == list(rhs)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_list()!r})"


class AtomicLazyVec(LazyVec):
    """
    Thread-safe variant of LazyVec. Vectors sharing a buffer can be cloned,
    read and dropped from multiple threads, but one vector must not be
    modified from multiple threads without synchronization.
    """

    __slots__ = ()

    handle = Alc
