import operator

import pytest
from hypothesis import given, strategies as st

from lockpick.htable import LOAD_FACTOR_MAX_SHIFT, HashTable


def make(capacity=1, hash_fn=hash):
    return HashTable(capacity, hash_fn, operator.eq)


def key_hash(item):
    return hash(item[0])


def key_eq(a, b):
    return a[0] == b[0]


@pytest.mark.parametrize("capacity", [0, 3, 6, -2])
def test_capacity_must_be_power_of_two(capacity):
    with pytest.raises(ValueError):
        make(capacity)


def test_hash_must_be_callable():
    with pytest.raises(TypeError):
        HashTable(4, None, operator.eq)


def test_eq_must_be_callable():
    with pytest.raises(TypeError):
        HashTable(4, hash, "eq")


def test_for_elements_rejects_zero():
    with pytest.raises(ValueError):
        HashTable.for_elements(0, hash, operator.eq)


@given(st.integers(min_value=1, max_value=5000))
def test_for_elements_capacity_fits(n):
    table = HashTable.for_elements(n, hash, operator.eq)
    cap = table.capacity
    assert cap & (cap - 1) == 0
    assert n <= cap >> LOAD_FACTOR_MAX_SHIFT


def test_insert_and_contains():
    table = make()
    assert table.insert(10)
    assert table.insert(20)
    assert 10 in table
    assert 20 in table
    assert 30 not in table
    assert len(table) == 2


def test_duplicate_insert_rejected():
    table = make()
    assert table.insert("x")
    assert not table.insert("x")
    assert len(table) == 1


def test_find_returns_stored_entry():
    table = HashTable(4, key_hash, key_eq)
    table.insert(("alpha", 1))
    assert table.find(("alpha", None)) == ("alpha", 1)
    assert table.find(("beta", None)) is None


def test_remove():
    table = make()
    for value in range(10):
        table.insert(value)
    assert table.remove(4)
    assert 4 not in table
    assert not table.remove(4)
    assert len(table) == 9
    assert sorted(table) == [v for v in range(10) if v != 4]


def test_remove_from_empty():
    table = make()
    assert not table.remove(1)


def test_load_factor_kept():
    table = make()
    for value in range(100):
        table.insert(value)
        assert len(table) <= table.capacity >> LOAD_FACTOR_MAX_SHIFT


def test_table_shrinks_after_removals():
    table = make()
    for value in range(100):
        table.insert(value)
    grown = table.capacity
    for value in range(100):
        assert table.remove(value)
    assert len(table) == 0
    assert table.capacity < grown


def test_rehash_keeps_entries():
    table = make()
    for value in range(20):
        table.insert(value)
    table.rehash(500)
    assert table.capacity == HashTable.for_elements(500, hash, operator.eq).capacity
    assert sorted(table) == list(range(20))


def test_rehash_rejects_zero():
    table = make()
    with pytest.raises(ValueError):
        table.rehash(0)


def test_rehash_rejects_size_below_contents():
    table = make()
    for value in range(5):
        table.insert(value)
    with pytest.raises(ValueError):
        table.rehash(2)


@given(
    st.lists(
        st.tuples(st.booleans(), st.integers(min_value=0, max_value=40)),
        max_size=200,
    ),
    st.sampled_from([hash, lambda x: 0, lambda x: x % 3, lambda x: -x]),
)
def test_matches_set_model(ops, hash_fn):
    table = HashTable(1, hash_fn, operator.eq)
    model = set()
    for is_insert, value in ops:
        if is_insert:
            assert table.insert(value) == (value not in model)
            model.add(value)
        else:
            assert table.remove(value) == (value in model)
            model.discard(value)
        assert len(table) == len(model)
    assert set(table) == model
    for value in range(41):
        assert (value in table) == (value in model)