import copy

import pytest

from lazycogs.core.errors import NotExclusive
from lazycogs.core.state import MutState
from lazycogs.lc import Alc, Lc


def test_lazy_shares_cell():
    a = Lc([1, 2, 3])
    assert a.is_mutable(), "New Lc is not mutable"

    b = a.lazy()
    assert a.ptr_eq(b), "Lazy clone does not share the cell"
    assert a.ref_count() == 2
    assert not a.is_mutable()
    assert not b.is_mutable()
    assert b.state() == MutState.SHARED

    b.drop()
    assert b.is_dropped()
    assert a.is_mutable(), "Dropping the clone did not release the cell"


def test_read_mut_copies_shared_value():
    a = Lc([1, 2, 3])
    b = a.clone()

    b.read_mut().append(4)
    assert a.read() == [1, 2, 3], "Modification leaked to the original"
    assert b.read() == [1, 2, 3, 4]
    assert not a.ptr_eq(b)
    assert a.is_mutable() and b.is_mutable()

    # exclusive value is modified in place
    val = b.read()
    assert b.read_mut() is val


def test_write_rebinds():
    a = Lc("hello")
    b = a.lazy()
    b.write("bye")
    assert a.read() == "hello"
    assert b.read() == "bye"
    assert a.is_mutable() and b.is_mutable()


def test_eager():
    a = Lc({"k": [1]})
    b = a.eager()
    assert not a.ptr_eq(b)
    assert a.is_mutable() and b.is_mutable()
    assert a == b
    assert a.read()["k"] is not b.read()["k"]


def test_take_destroy_unwrap():
    a = Lc([1])
    t = a.take()
    assert t == [1] and t is not a.read()

    b = a.lazy()
    with pytest.raises(NotExclusive):
        a.destroy()

    # shared value is copied
    val = b.unwrap()
    assert val == [1] and val is not a.read()
    assert b.is_dropped()

    inner = a.read()
    assert a.destroy() is inner, "Exclusive destroy() copied the value"
    with pytest.raises(RuntimeError):
        a.read()


def test_del_releases_reference():
    a = Lc(1)
    b = a.lazy()
    assert not a.is_mutable()
    del b
    assert a.is_mutable(), "Garbage collected handle did not release the cell"


def test_context_manager():
    a = Lc([0])
    with a.lazy() as b:
        assert not a.is_mutable()
        assert b.read() == [0]
    assert a.is_mutable()


def test_copy_module_makes_lazy_clones():
    a = Lc([1])
    b = copy.copy(a)
    c = copy.deepcopy(a)
    assert a.ptr_eq(b) and a.ptr_eq(c)
    assert a.ref_count() == 3


def test_nested_lazy_values_are_not_copied():
    inner = Lc([1, 2])
    outer = Lc([inner])
    clone = outer.lazy()

    clone.read_mut()[0].read_mut().append(3)
    assert inner.read() == [1, 2], "Nested value modified through a clone"
    assert clone.read()[0].read() == [1, 2, 3]


def test_alc():
    a = Alc([1])
    b = a.lazy()
    assert isinstance(b, Alc)
    assert a._cell.is_atomic()
    b.read_mut().append(2)
    assert a.read() == [1]
    assert isinstance(a.eager(), Alc)
