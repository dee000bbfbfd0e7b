class CowStats:
    def __init__(self) -> None:
        # cells created by construction (not by duplication)
        self.cells_created = 0
        # cells created by duplicating a shared cell
        self.duplications = 0
        # cells whose count dropped to zero
        self.destroyed = 0
        # lazy clones of a cell (count increments)
        self.shares = 0

    def add(self, rhs: "CowStats") -> None:
        self.cells_created += rhs.cells_created
        self.duplications += rhs.duplications
        self.destroyed += rhs.destroyed
        self.shares += rhs.shares

    def reset(self) -> None:
        self.cells_created = 0
        self.duplications = 0
        self.destroyed = 0
        self.shares = 0

    def live_cells(self) -> int:
        return self.cells_created + self.duplications - self.destroyed

    def __repr__(self) -> str:
        return (
            f"CowStats(created={self.cells_created}, "
            f"duplications={self.duplications}, "
            f"destroyed={self.destroyed}, shares={self.shares})"
        )


# updated by shared cells when collecting statistics is enabled in options
stats = CowStats()


def get_stats() -> CowStats:
    return stats
