import select

import pytest

from paristrace.eventqueue import EventQueue


def _readable(queue):
    ready, _, _ = select.select([queue.fileno()], [], [], 0)
    return bool(ready)


def test_fifo_order():
    with EventQueue() as queue:
        for item in ("a", "b", "c"):
            queue.push(item)
        assert [queue.pop() for _ in range(3)] == ["a", "b", "c"]


def test_len_tracks_push_and_pop():
    with EventQueue() as queue:
        assert len(queue) == 0
        queue.push(1)
        queue.push(2)
        assert len(queue) == 2
        queue.pop()
        assert len(queue) == 1


def test_pop_empty_raises():
    with EventQueue() as queue:
        with pytest.raises(IndexError):
            queue.pop()


def test_descriptor_signals_pending_elements():
    with EventQueue() as queue:
        assert _readable(queue) is False
        queue.push("x")
        queue.push("y")
        assert _readable(queue) is True
        queue.pop()
        assert _readable(queue) is True
        queue.pop()
        assert _readable(queue) is False


def test_none_is_a_valid_element():
    with EventQueue() as queue:
        queue.push(None)
        assert queue.pop() is None
        assert len(queue) == 0


def test_closed_queue_rejects_operations():
    queue = EventQueue()
    queue.push(1)
    queue.close()
    assert len(queue) == 0
    with pytest.raises(ValueError):
        queue.push(2)
    with pytest.raises(ValueError):
        queue.pop()
    with pytest.raises(ValueError):
        queue.fileno()