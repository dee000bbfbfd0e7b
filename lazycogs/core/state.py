class MutState:
    """
    The state of a shared cell:
      EXCLUSIVE - only one handle refers to the cell, it can be mutated
                  in place with no side effects
      SHARED    - more handles refer to the cell, it is read-only until
                  the handle that wants to mutate it duplicates it
    """

    EXCLUSIVE = 1
    SHARED = 2

    @staticmethod
    def of(count: int) -> int:
        assert count > 0, "Dead cell has no state"
        return MutState.EXCLUSIVE if count == 1 else MutState.SHARED

    @staticmethod
    def name(st: int) -> str:
        if st == MutState.EXCLUSIVE:
            return "exclusive"
        if st == MutState.SHARED:
            return "shared"
        raise RuntimeError("Invalid mutability state")
