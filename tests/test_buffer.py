import copy
import itertools

import numpy as np
import pytest

from statslab.buffer import MIN_CAPACITY, OrderedNumericBuffer


@pytest.fixture
def buffer():
    """Буфер с повторяющимися значениями"""
    buf = OrderedNumericBuffer()
    buf.insert_many([5, 3, 8, 3, 2, 2, 2, 9])
    return buf


def _is_sorted(buf):
    values = buf.to_list()
    return all(a <= b for a, b in zip(values, values[1:]))


def test_empty_buffer_has_no_storage():
    buf = OrderedNumericBuffer()
    assert buf.size() == 0
    assert buf.capacity() == 0
    assert len(buf) == 0
    assert buf.to_list() == []


def test_insert_keeps_ascending_order():
    buf = OrderedNumericBuffer()
    for value in [5, 3, 8, 3]:
        buf.insert(value)
    assert buf.to_list() == [3.0, 3.0, 5.0, 8.0]


def test_insert_returns_lower_bound_position(buffer):
    # [2, 2, 2, 3, 3, 5, 8, 9]: первое значение >= 3 стоит на индексе 3
    assert buffer.lower_bound(3) == 3
    assert buffer.insert(3) == 3
    assert buffer.lower_bound(100) == buffer.size()
    assert buffer.lower_bound(-1) == 0


@pytest.mark.parametrize("inserts,expected_capacity", [
    (1, 8),
    (8, 8),
    (9, 16),
    (17, 32),
    (33, 64),
])
def test_growth_doubles_capacity(inserts, expected_capacity):
    buf = OrderedNumericBuffer()
    for i in range(inserts):
        buf.insert(float(inserts - i))
    assert buf.capacity() == expected_capacity
    assert buf.size() == inserts
    assert buf.to_list() == [float(x) for x in range(1, inserts + 1)]


@pytest.mark.parametrize("requested,expected", [
    (None, 0),
    (0, 0),
    (3, MIN_CAPACITY),
    (20, 20),
])
def test_initial_capacity(requested, expected):
    assert OrderedNumericBuffer(requested).capacity() == expected


def test_preallocated_buffer_grows_from_its_capacity():
    buf = OrderedNumericBuffer(10)
    buf.insert_many(range(11))
    assert buf.capacity() == 20


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        OrderedNumericBuffer(-1)


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_insert_rejected(value):
    buf = OrderedNumericBuffer()
    with pytest.raises(ValueError):
        buf.insert(value)
    assert buf.size() == 0


@pytest.mark.parametrize("value", ["3", b"3", None, [3]])
def test_non_numeric_insert_rejected(value):
    buf = OrderedNumericBuffer()
    with pytest.raises(TypeError):
        buf.insert(value)
    assert buf.size() == 0


def test_numpy_scalars_accepted():
    buf = OrderedNumericBuffer()
    buf.insert(np.float64(2.5))
    buf.insert(np.int32(1))
    assert buf.to_list() == [1.0, 2.5]


def test_erase_value_removes_leading_occurrences(buffer):
    removed = buffer.erase_value(2, count=2)
    assert removed == 2
    assert buffer.to_list() == [2.0, 3.0, 3.0, 5.0, 8.0, 9.0]


def test_erase_value_caps_at_available(buffer):
    assert buffer.erase_value(3, count=10) == 2
    assert 3.0 not in buffer.to_list()


def test_erase_value_absent_returns_zero(buffer):
    before = buffer.to_list()
    assert buffer.erase_value(4) == 0
    assert buffer.erase_value(100) == 0
    assert buffer.to_list() == before


def test_erase_value_requires_positive_count(buffer):
    with pytest.raises(ValueError):
        buffer.erase_value(2, count=0)


def test_erase_all(buffer):
    assert buffer.erase_all(2) == 3
    assert buffer.to_list() == [3.0, 3.0, 5.0, 8.0, 9.0]
    assert OrderedNumericBuffer().erase_all(1) == 0


def test_erase_at(buffer):
    assert buffer.erase_at(0) == 2.0
    assert buffer.erase_at(buffer.size() - 1) == 9.0
    assert buffer.to_list() == [2.0, 2.0, 3.0, 3.0, 5.0, 8.0]


@pytest.mark.parametrize("index", [-1, 8, 100])
def test_index_out_of_range_fails_loudly(buffer, index):
    with pytest.raises(IndexError):
        buffer.at(index)
    with pytest.raises(IndexError):
        buffer.erase_at(index)


def test_non_integer_index_rejected(buffer):
    with pytest.raises(TypeError):
        buffer.at(1.5)


def test_at_and_getitem(buffer):
    assert buffer.at(0) == 2.0
    assert buffer[7] == 9.0
    assert isinstance(buffer.at(3), float)


def test_clear_keeps_capacity(buffer):
    capacity = buffer.capacity()
    buffer.clear()
    assert buffer.size() == 0
    assert buffer.capacity() == capacity
    buffer.clear()
    assert buffer.size() == 0


def test_copy_is_independent(buffer):
    for clone in (buffer.copy(), copy.copy(buffer), copy.deepcopy(buffer)):
        assert clone == buffer
        assert clone.capacity() == buffer.capacity()
        clone.insert(1)
        assert clone != buffer
        assert buffer.size() == 8


def test_view_is_read_only(buffer):
    view = buffer.view()
    with pytest.raises(ValueError):
        view[0] = 100.0
    assert isinstance(buffer.to_numpy(), np.ndarray)


def test_insertion_order_does_not_matter():
    values = [4.0, -1.5, 4.0, 0.0, 7.25]
    results = set()
    for permutation in itertools.permutations(values):
        buf = OrderedNumericBuffer()
        buf.insert_many(permutation)
        results.add(tuple(buf.to_list()))
    assert results == {tuple(sorted(values))}


def test_random_operations_keep_invariants():
    """Сортировка и size <= capacity после произвольной последовательности операций"""
    rng = np.random.default_rng(42)
    buf = OrderedNumericBuffer()
    reference = []

    for _ in range(500):
        op = rng.integers(0, 3)
        if op == 0 or not reference:
            value = float(rng.integers(-20, 20))
            buf.insert(value)
            reference.append(value)
        elif op == 1:
            value = float(rng.integers(-20, 20))
            count = int(rng.integers(1, 4))
            removed = buf.erase_value(value, count)
            expected = min(count, reference.count(value))
            assert removed == expected
            for _ in range(removed):
                reference.remove(value)
        else:
            index = int(rng.integers(0, len(reference)))
            value = buf.erase_at(index)
            reference.remove(value)

        assert _is_sorted(buf)
        assert buf.size() <= buf.capacity()
        assert buf.to_list() == sorted(reference)
