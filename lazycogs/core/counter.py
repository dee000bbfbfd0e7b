from threading import Lock


class RefCounter:
    """
    Reference count of a shared cell for use from a single thread.
    """

    __slots__ = "_count"

    ATOMIC = False

    def __init__(self, initial: int = 1) -> None:
        assert initial >= 0, initial
        self._count = initial

    def increment(self) -> int:
        self._count += 1
        return self._count

    def decrement(self) -> int:
        assert self._count > 0, "Decrementing a dead reference count"
        self._count -= 1
        return self._count

    def value(self) -> int:
        return self._count

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._count})"


class AtomicRefCounter(RefCounter):
    """
    Reference count that can be shared and released from multiple
    threads. Every update is done under a lock, so the release that drops
    the count to zero happens after all the previous shares and releases
    and exactly one releaser observes the zero.
    """

    __slots__ = "_lock"

    ATOMIC = True

    def __init__(self, initial: int = 1) -> None:
        super().__init__(initial)
        self._lock = Lock()

    def increment(self) -> int:
        with self._lock:
            self._count += 1
            return self._count

    def decrement(self) -> int:
        with self._lock:
            assert self._count > 0, "Decrementing a dead reference count"
            self._count -= 1
            return self._count

    def value(self) -> int:
        with self._lock:
            return self._count
