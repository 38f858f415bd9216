import pytest

from undo_history.history import MISSING, HistoryBuffer, HistoryInvariantError


def make_buffer(*values: int, capacity: int = 100) -> HistoryBuffer:
    if not values:
        return HistoryBuffer(capacity=capacity)
    buffer = HistoryBuffer(capacity=capacity, initial=values[0])
    for value in values[1:]:
        buffer.append(value)
    return buffer


def test_empty_buffer_has_no_neighbours() -> None:
    buffer = make_buffer()

    assert buffer.is_empty
    assert buffer.size == 0
    assert buffer.current is MISSING
    assert buffer.has_previous() is False
    assert buffer.has_next() is False
    assert buffer.move_back() is False
    assert buffer.move_forward() is False
    assert list(buffer.traverse()) == []


def test_append_on_empty_seeds_single_entry() -> None:
    buffer = make_buffer()

    buffer.append(7)

    assert buffer.size == 1
    assert buffer.current == 7
    assert buffer.has_previous() is False
    assert list(buffer.traverse()) == [7]


def test_append_moves_cursor_to_tail() -> None:
    buffer = make_buffer(1, 2, 3)

    assert buffer.size == 3
    assert buffer.current == 3
    assert buffer.has_previous() is True
    assert buffer.has_next() is False
    assert list(buffer.traverse()) == [1, 2, 3]


def test_move_back_and_forward_walk_the_chain() -> None:
    buffer = make_buffer(1, 2, 3)

    assert buffer.move_back() is True
    assert buffer.current == 2
    assert buffer.move_back() is True
    assert buffer.current == 1
    assert buffer.move_back() is False
    assert buffer.current == 1

    assert buffer.move_forward() is True
    assert buffer.move_forward() is True
    assert buffer.move_forward() is False
    assert buffer.current == 3


def test_append_evicts_head_when_full() -> None:
    buffer = make_buffer(1, 2, 3, 4, capacity=3)

    assert buffer.size == 3
    assert list(buffer.traverse()) == [2, 3, 4]


def test_capacity_of_one_keeps_only_latest() -> None:
    buffer = make_buffer(1, 2, 3, capacity=1)

    assert buffer.size == 1
    assert buffer.current == 3
    assert buffer.has_previous() is False
    assert list(buffer.traverse()) == [3]


def test_append_after_move_back_prunes_forward_chain() -> None:
    buffer = make_buffer(1, 2, 3)
    buffer.move_back()
    buffer.move_back()

    buffer.shrink(2)
    buffer.append(4)

    assert buffer.size == 2
    assert buffer.has_next() is False
    assert list(buffer.traverse()) == [1, 4]


def test_released_slots_are_reused() -> None:
    buffer = make_buffer(*range(50), capacity=3)

    assert list(buffer.traverse()) == [47, 48, 49]
    assert len(buffer._slots) <= buffer.capacity + 1


def test_shrink_cannot_discount_the_current_entry() -> None:
    buffer = make_buffer(1, 2)

    with pytest.raises(HistoryInvariantError):
        buffer.shrink(2)
    with pytest.raises(HistoryInvariantError):
        buffer.shrink(-1)

    buffer.shrink(0)
    assert buffer.size == 2


def test_reset_with_value_leaves_single_entry() -> None:
    buffer = make_buffer(1, 2, 3)

    buffer.reset(9)

    assert buffer.size == 1
    assert buffer.current == 9
    assert buffer.has_previous() is False
    assert list(buffer.traverse()) == [9]


def test_reset_without_value_empties_buffer() -> None:
    buffer = make_buffer(1, 2, 3)

    buffer.reset()

    assert buffer.is_empty
    assert buffer.size == 0
    assert list(buffer.traverse()) == []


def test_reset_keeps_none_as_a_real_value() -> None:
    buffer = make_buffer(1)

    buffer.reset(None)

    assert buffer.size == 1
    assert list(buffer.traverse()) == [None]


def test_traverse_reads_live_chain_each_call() -> None:
    buffer = make_buffer(1, 2)
    first = buffer.traverse()

    buffer.append(3)

    assert list(buffer.traverse()) == [1, 2, 3]
    assert list(first) == [1, 2, 3]
    assert list(first) == []


def test_non_positive_capacity_is_rejected() -> None:
    with pytest.raises(ValueError):
        HistoryBuffer(capacity=0)
