from lazycogs.collections.lazylist import LazyList
from lazycogs.collections.vector import LazyVec
from lazycogs.core.errors import Error, IndexOutOfBounds, NotExclusive
from lazycogs.options import CowOptions, get_options, set_options
from lazycogs.stats import CowStats, get_stats
from lazycogs.util import debugging


def test_options_copy():
    opts = CowOptions()
    assert not opts.debug and not opts.verbose and not opts.collect_stats
    opts.set_verbose()
    opts.collect_stats = True

    copied = CowOptions(opts)
    assert copied.debug and copied.verbose and copied.collect_stats
    assert "collect_stats = True" in str(copied)


def test_set_options_toggles_debugging(capsys):
    old = set_options(CowOptions().set_verbose())
    try:
        assert debugging.is_debugging()
        v = LazyVec([1, 2, 3])
        v.lazy().push(4)
        err = capsys.readouterr().err
        assert "[lc] " in err
        assert "vector: copying buffer of 3 elements" in err
        LazyList([1, 2]).eager()
        assert "list: eager clone of 2 nodes" in capsys.readouterr().err
    finally:
        set_options(old)

    assert not debugging.is_debugging()
    assert get_options() is old


def test_no_output_without_debugging(capsys):
    v = LazyVec([1])
    v.lazy().push(2)
    assert capsys.readouterr().err == ""


def test_stats_are_collected_only_when_enabled(cow_stats):
    assert get_stats() is cow_stats
    a = LazyVec([1])
    b = a.lazy()
    b.push(2)
    assert cow_stats.duplications == 1
    assert cow_stats.shares >= 1

    old = set_options(CowOptions())
    try:
        cow_stats.reset()
        a = LazyVec([1])
        b = a.lazy()
        b.push(2)
        assert cow_stats.duplications == 0
        assert cow_stats.cells_created == 0
    finally:
        set_options(old)


def test_stats_add():
    s = CowStats()
    s.cells_created = 2
    s.duplications = 1
    t = CowStats()
    t.add(s)
    t.add(s)
    assert t.cells_created == 4 and t.duplications == 2
    assert t.live_cells() == 6
    t.reset()
    assert t.live_cells() == 0


def test_errors():
    e = IndexOutOfBounds(5, 3)
    assert isinstance(e, Error) and isinstance(e, IndexError)
    assert e.is_index_error()
    assert str(e) == "index out of bounds: index 5, length 3"

    n = NotExclusive(2)
    assert n.is_not_exclusive()
    assert str(n) == "cell is not exclusive: cell is shared by 2 handles"
    assert repr(Error(Error.UNKNOWN)) == "unknown error"
