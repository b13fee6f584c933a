import pytest

from core.errors import CapacityExceededError, SimulationInvariantError
from core.event import Event, EventType
from core.event_queue import EventQueue
from core.process import ProcessDescriptor, ProcessState, create_runtime_table
from core.ready_queue import ReadyQueue


def test_events_ordered_by_time_then_kind_then_pid():
    queue = EventQueue()
    events = [
        Event(5, EventType.CPU_TIMEOUT, 1),
        Event(5, EventType.ARRIVAL, 3),
        Event(2, EventType.CPU_TIMEOUT, 9),
        Event(5, EventType.CPU_COMPLETE, 2),
        Event(5, EventType.ARRIVAL, 1),
    ]
    for event in events:
        queue.push(event)

    popped = [queue.pop() for _ in range(len(events))]
    assert popped == [
        Event(2, EventType.CPU_TIMEOUT, 9),
        Event(5, EventType.ARRIVAL, 1),
        Event(5, EventType.ARRIVAL, 3),
        Event(5, EventType.CPU_COMPLETE, 2),
        Event(5, EventType.CPU_TIMEOUT, 1),
    ]
    assert queue.is_empty()


def test_pop_from_empty_event_queue_is_invariant_violation():
    with pytest.raises(SimulationInvariantError):
        EventQueue().pop()


def test_event_queue_capacity():
    queue = EventQueue(capacity=1)
    queue.push(Event(0, EventType.ARRIVAL, 1))
    with pytest.raises(CapacityExceededError):
        queue.push(Event(1, EventType.ARRIVAL, 2))
    assert len(queue) == 1


def test_ready_queue_is_fifo_and_stamps_ready_time():
    table = create_runtime_table([ProcessDescriptor(1, 0, [3]), ProcessDescriptor(2, 0, [3])])
    queue = ReadyQueue(table)

    queue.enqueue(2, 4)
    queue.enqueue(1, 7)

    assert table[2].last_ready_time == 4
    assert table[1].last_ready_time == 7
    assert table[1].state == ProcessState.READY
    assert queue.snapshot() == [2, 1]
    assert queue.dequeue() == 2
    assert queue.dequeue() == 1
    assert queue.is_empty()


def test_ready_queue_overflow_is_reported():
    table = create_runtime_table([ProcessDescriptor(1, 0, [3])])
    queue = ReadyQueue(table)
    queue.enqueue(1, 0)
    with pytest.raises(CapacityExceededError):
        queue.enqueue(1, 0)


def test_dequeue_from_empty_ready_queue_is_invariant_violation():
    queue = ReadyQueue(create_runtime_table([ProcessDescriptor(1, 0, [3])]))
    with pytest.raises(SimulationInvariantError):
        queue.dequeue()
