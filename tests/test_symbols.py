import pytest

from skibidi_errors import FatalError, UndefinedVariableError
from skibidi_symbols import MAX_VARS, SymbolTable


def test_set_then_get():
    st = SymbolTable()
    assert st.set("x", 5) is True
    assert st.get("x") == 5
    assert "x" in st
    assert len(st) == 1


def test_set_updates_existing():
    st = SymbolTable()
    st.set("x", 1)
    st.set("x", 2)
    assert st.get("x") == 2
    assert len(st) == 1


def test_get_missing_is_fatal():
    st = SymbolTable()
    with pytest.raises(UndefinedVariableError) as exc:
        st.get("z")
    assert isinstance(exc.value, FatalError)
    assert exc.value.name == "z"


def test_full_table_rejects_new_names():
    st = SymbolTable(capacity=2)
    assert st.set("a", 1)
    assert st.set("b", 2)
    assert len(st) == st.capacity
    assert st.set("c", 3) is False
    assert "c" not in st
    # existing names still update
    assert st.set("a", 10) is True
    assert st.get("a") == 10


def test_default_capacity():
    assert SymbolTable().capacity == MAX_VARS == 100


def test_snapshot_keeps_insertion_order():
    st = SymbolTable()
    for name, value in [("b", 2), ("a", 1), ("c", 3)]:
        st.set(name, value)
    snap = st.snapshot()
    assert list(snap) == ["b", "a", "c"]
    snap["b"] = 99
    assert st.get("b") == 2


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        SymbolTable(capacity=-1)
