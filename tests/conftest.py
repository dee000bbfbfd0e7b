import pytest

from lazycogs.options import CowOptions, set_options
from lazycogs.stats import stats


@pytest.fixture
def cow_stats():
    """Collect statistics about cells while the test runs"""
    opts = CowOptions()
    opts.collect_stats = True
    old = set_options(opts)
    stats.reset()
    yield stats
    set_options(old)
    stats.reset()


class Tracked:
    """Element that counts how many times it was copied"""

    copies = 0

    def __init__(self, value):
        self.value = value

    def __deepcopy__(self, memo):
        Tracked.copies += 1
        return Tracked(self.value)

    def __eq__(self, rhs):
        return isinstance(rhs, Tracked) and self.value == rhs.value

    def __repr__(self):
        return f"Tracked({self.value})"


@pytest.fixture
def tracked():
    Tracked.copies = 0
    yield Tracked
    Tracked.copies = 0
