from operator import index as as_index
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from lazycogs.core.cell import CellPayload
from lazycogs.core.errors import IndexOutOfBounds
from lazycogs.core.lazy import LazyClone
from lazycogs.lc import Alc, Lc, lazy_handle
from lazycogs.util.debugging import ldbgv


class Node(CellPayload):
    """
    A node of a lazy list: a handle to the value and a handle
    to the next node (None terminates the list)
    """

    __slots__ = ("value", "tail")

    def __init__(self, value: Lc, tail: Optional[Lc] = None) -> None:
        self.value = value
        self.tail = tail

    def duplicate(self) -> "Node":
        tail = self.tail
        return Node(self.value.lazy(), None if tail is None else tail.lazy())

    def dispose(self) -> None:
        self.value.drop()
        tail = self.tail
        self.tail = None
        release_chain(tail)

    def __repr__(self) -> str:
        return f"Node({self.value!r})"


def release_chain(head: Optional[Lc]) -> None:
    """
    Drop the handle to a chain of nodes. Nodes that are not shared
    are released one by one in a loop, so that dropping a long list
    does not recurse.
    """
    while head is not None:
        if not head.is_mutable():
            head.drop()
            return
        node = head.read()
        tail = node.tail
        node.tail = None
        head.drop()
        head = tail


class LazyList(LazyClone):
    """
    Singly-linked list whose nodes are lazily cloned one by one.

    Cloning a LazyList is O(1) and pushing to the front of the list
    is O(1) even if the list is shared, the new node just takes
    a reference to the old head. Modifying the list on the position i
    copies only the shared nodes from the head up to the position i,
    the rest of the list stays shared with the other clones.
    """

    __slots__ = ("_head", "_len")

    # the class of handles used for nodes and values,
    # determines the reference counting discipline
    handle = Lc

    def __init__(self, iterable: Iterable[Any] = ()) -> None:
        H = self.handle
        values = list(iterable)
        head = None
        for v in reversed(values):
            head = H(Node(H(v), head))
        self._head = head
        self._len = len(values)

    @classmethod
    def _from_head(cls, head: Optional[Lc], length: int) -> "LazyList":
        new = cls.__new__(cls)
        new._head = head
        new._len = length
        return new

    @classmethod
    def from_handles(cls, handles: Iterable[Lc]) -> "LazyList":
        """
        Create a list from handles to the values. The list takes
        lazy clones of the handles, so the values stay shared with
        the given handles until one side modifies them.
        """
        H = cls.handle
        values = [lazy_handle(h, H) for h in handles]
        head = None
        for v in reversed(values):
            head = H(Node(v, head))
        return cls._from_head(head, len(values))

    def _check_index(self, idx) -> int:
        idx = as_index(idx)
        if idx < 0 or idx >= self._len:
            raise IndexOutOfBounds(idx, self._len)
        return idx

    def _node(self, idx: int) -> Node:
        node = self._head.read()
        for _ in range(idx):
            node = node.tail.read()
        return node

    def _own_path(self, idx: int) -> Node:
        """
        Make the nodes from the head up to the node on the position idx
        exclusively owned by this list and return the node on idx.
        Shared nodes on the path are copied, the copy of the last one
        takes a reference to the rest of the list.
        """
        copied = 0
        h = self._head
        while True:
            if not h.is_mutable():
                copied += 1
            node = h.read_mut()
            if idx == 0:
                break
            idx -= 1
            h = node.tail

        if copied:
            ldbgv("list: copied {0} shared nodes", (copied,))
        return node

    @staticmethod
    def _unlink(h: Lc) -> Tuple[Any, Optional[Lc]]:
        """
        Drop the handle of a node, return the value of the node
        and a handle to the rest of the list. Copying a shared value
        is the only step that can fail, it is done first so that
        the list stays untouched on an error.
        """
        node = h.read()
        if not h.is_mutable():
            # somebody else holds the node too, leave it as it is
            # and just take our own reference to the rest
            value = node.value.take()
            tail = node.tail
            tail = None if tail is None else tail.lazy()
            h.drop()
            return value, tail

        vh = node.value
        if vh.is_mutable():
            value = vh.destroy()
        else:
            value = vh.take()
            vh.drop()
        h.destroy()
        return value, node.tail

    def len(self) -> int:
        return self._len

    def front(self) -> Optional[Any]:
        """Return the first element or None if the list is empty"""
        if self._head is None:
            return None
        return self._head.read().value.read()

    def front_mut(self) -> Optional[Any]:
        """
        Return the first element for an in-place modification
        or None if the list is empty
        """
        if self._head is None:
            return None
        return self._own_path(0).value.read_mut()

    def front_lazy(self) -> Optional[Lc]:
        if self._head is None:
            return None
        return self._head.read().value.lazy()

    def back(self) -> Optional[Any]:
        """Return the last element or None if the list is empty. O(n)"""
        if self._head is None:
            return None
        return self._node(self._len - 1).value.read()

    def back_mut(self) -> Optional[Any]:
        """
        Return the last element for an in-place modification or None
        if the list is empty. Copies every shared node of the list.
        """
        if self._head is None:
            return None
        return self._own_path(self._len - 1).value.read_mut()

    def back_lazy(self) -> Optional[Lc]:
        if self._head is None:
            return None
        return self._node(self._len - 1).value.lazy()

    def get(self, idx: int) -> Any:
        return self._node(self._check_index(idx)).value.read()

    def get_mut(self, idx: int) -> Any:
        return self._own_path(self._check_index(idx)).value.read_mut()

    def get_lazy(self, idx: int) -> Lc:
        return self._node(self._check_index(idx)).value.lazy()

    def push_front(self, value: Any) -> None:
        """Push a new element to the front of the list. Always O(1)"""
        H = self.handle
        # the new node takes over our reference to the old head
        self._head = H(Node(H(value), self._head))
        self._len += 1

    def pop_front(self) -> Optional[Any]:
        """
        Remove the first element and return it, return None if the list
        is empty. Always O(1), shared nodes are never copied.
        """
        head = self._head
        if head is None:
            return None
        value, self._head = self._unlink(head)
        self._len -= 1
        return value

    def set_at(self, idx: int, value: Any) -> None:
        """Set the element on the given position, O(idx)"""
        node = self._own_path(self._check_index(idx))
        node.value.write(value)

    def insert_at(self, idx: int, value: Any) -> None:
        """Insert an element before the given position (or at the end)"""
        idx = as_index(idx)
        if idx < 0 or idx > self._len:
            raise IndexOutOfBounds(idx, self._len)
        if idx == 0:
            self.push_front(value)
            return

        H = self.handle
        prev = self._own_path(idx - 1)
        prev.tail = H(Node(H(value), prev.tail))
        self._len += 1

    def remove_at(self, idx: int) -> Any:
        """Remove the element on the given position and return it"""
        idx = self._check_index(idx)
        if idx == 0:
            return self.pop_front()

        prev = self._own_path(idx - 1)
        value, prev.tail = self._unlink(prev.tail)
        self._len -= 1
        return value

    def push_back(self, value: Any) -> None:
        """Push a new element to the end of the list. O(n)"""
        self.insert_at(self._len, value)

    def iter(self) -> Iterator[Any]:
        h = self._head
        while h is not None:
            node = h.read()
            yield node.value.read()
            h = node.tail

    def to_list(self) -> List[Any]:
        return list(self.iter())

    def into_list(self) -> List[Any]:
        """
        Move the elements out into a list, the list becomes empty.
        Elements that are shared with other lists are copied.
        """
        values = []
        while self._head is not None:
            values.append(self.pop_front())
        return values

    def lazy(self) -> "LazyList":
        head = self._head
        return self._from_head(None if head is None else head.lazy(), self._len)

    def eager(self) -> "LazyList":
        """
        Clone the list with its own copy of every node, the values are
        cloned lazily
        """
        ldbgv("list: eager clone of {0} nodes", (self._len,))
        H = self.handle
        values = []
        h = self._head
        while h is not None:
            node = h.read()
            values.append(node.value.lazy())
            h = node.tail

        head = None
        for v in reversed(values):
            head = H(Node(v, head))
        return self._from_head(head, self._len)

    def is_mutable(self) -> bool:
        head = self._head
        return head is None or head.is_mutable()

    def drop(self) -> None:
        """Release all the nodes, the list is empty afterwards"""
        head = self._head
        self._head = None
        self._len = 0
        release_chain(head)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.drop()

    def __len__(self) -> int:
        return self._len

    def __getitem__(self, idx: int) -> Any:
        return self.get(idx)

    def __setitem__(self, idx: int, value: Any) -> None:
        self.set_at(idx, value)

    def __iter__(self) -> Iterator[Any]:
        return self.iter()

    def __eq__(self, rhs: object):
        if isinstance(rhs, LazyList):
            if self._len != rhs._len:
                return False
            return self.to_list() == rhs.to_list()
        if isinstance(rhs, (list, tuple)):
            return self.to_list() == list(rhs)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_list()!r})"


class AtomicLazyList(LazyList):
    """
    Thread-safe variant of LazyList. Lists sharing nodes can be cloned,
    read and dropped from multiple threads, but one list must not be
    modified from multiple threads without synchronization.
    """

    __slots__ = ()

    handle = Alc
