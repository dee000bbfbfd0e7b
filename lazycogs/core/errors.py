class Error(Exception):
    """
    Generic error raised by lazily cloned structures (e.g., out-of-bound
    access to a collection, mutable access to a shared cell, etc.)
    """

    UNKNOWN = 0
    INDEX_OUT_OF_BOUNDS = 1
    NOT_EXCLUSIVE = 2

    def __init__(self, t, d=None):
        super().__init__(d)
        self._type = t
        self._descr = d

    def is_index_error(self):
        return self._type == Error.INDEX_OUT_OF_BOUNDS

    def is_not_exclusive(self):
        return self._type == Error.NOT_EXCLUSIVE

    def __repr__(self):
        ty = self._type
        if ty == Error.UNKNOWN:
            detail = "unknown error"
        elif ty == Error.INDEX_OUT_OF_BOUNDS:
            detail = "index out of bounds"
        elif ty == Error.NOT_EXCLUSIVE:
            detail = "cell is not exclusive"
        else:
            raise RuntimeError("Invalid error type")
        return detail

    def __str__(self):
        if self._descr:
            return f"{self.__repr__()}: {self._descr}"
        return self.__repr__()


class IndexOutOfBounds(Error, IndexError):
    """
    Positional access beyond the current length of a collection.
    """

    def __init__(self, index, length):
        super().__init__(
            Error.INDEX_OUT_OF_BOUNDS, f"index {index}, length {length}"
        )
        self.index = index
        self.length = length


class NotExclusive(Error):
    """
    Mutable access to a cell that is shared by other handles.
    Public operations of collections duplicate before asking for
    mutable access, so this one is never raised from them.
    """

    def __init__(self, count, descr=None):
        super().__init__(
            Error.NOT_EXCLUSIVE, descr or f"cell is shared by {count} handles"
        )
        self.count = count
