from abc import ABC, abstractmethod


class LazyClone(ABC):
    """
    Interface of data that can be lazily cloned.

    A lazy clone is O(1): it only takes another reference to the
    underlying storage, which is duplicated first when one of the
    clones wants to mutate it. An eager clone duplicates the storage
    right away, which is useful for data that is known to be modified.

    Example:

        class Foo(LazyClone):
            def __init__(self, bar, baz):
                self.bar = bar  # Lc
                self.baz = baz  # LazyVec

            def lazy(self):
                return Foo(self.bar.lazy(), self.baz.lazy())

            def eager(self):
                return Foo(self.bar.eager(), self.baz.eager())

            def is_mutable(self):
                return self.bar.is_mutable() and self.baz.is_mutable()
    """

    __slots__ = ()

    @abstractmethod
    def lazy(self):
        """The O(1) clone sharing the storage"""

    @abstractmethod
    def eager(self):
        """The clone with its own freshly duplicated storage"""

    @abstractmethod
    def is_mutable(self) -> bool:
        """Check whether the storage can be mutated with no side effects"""

    def clone(self):
        return self.lazy()

    def clone_eager(self):
        return self.eager()

    # a lazy clone already behaves like an independent copy
    def __copy__(self):
        return self.lazy()

    def __deepcopy__(self, memo):
        return self.lazy()
