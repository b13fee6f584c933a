import pytest

from core.errors import InputFormatError
from core.process import ProcessDescriptor, ProcessState, create_runtime_table


def test_descriptor_pattern_conversion():
    p = ProcessDescriptor.from_pattern(4, 2, [5, 3, 6, 1, 2])
    assert p.cpu_bursts == (5, 6, 2)
    assert p.io_bursts == (3, 1)
    assert p.burst_count == 3
    assert p.get_total_burst_time() == 13
    assert p.get_service_time() == 17
    assert p.to_pattern() == [5, 3, 6, 1, 2]


def test_trailing_io_is_not_part_of_service_time():
    p = ProcessDescriptor(1, 0, [3], [4])
    assert p.get_service_time() == 3
    assert p.get_total_cpu_io_time() == 7


@pytest.mark.parametrize('cpu,io,arrival', [
    ([], [], 0),
    ([3, 3], [], 0),
    ([3], [1, 1], 0),
    ([3, -1], [2], 0),
    ([3], [], -1),
])
def test_invalid_descriptors_rejected(cpu, io, arrival):
    with pytest.raises(InputFormatError):
        ProcessDescriptor(1, arrival, cpu, io)


def test_runtime_table_is_fresh_per_call():
    descriptors = [ProcessDescriptor(1, 0, [3, 4], [2])]
    first = create_runtime_table(descriptors)
    first[1].wait_time = 99
    first[1].advance_burst()

    second = create_runtime_table(descriptors)
    assert second[1].wait_time == 0
    assert second[1].current_burst_index == 0
    assert second[1].remaining_cpu == 3
    assert second[1].state == ProcessState.WAITING_ARRIVAL


def test_advance_burst_returns_io_time():
    table = create_runtime_table([ProcessDescriptor(1, 0, [3, 4], [2])])
    runtime = table[1]
    assert not runtime.is_last_burst()
    assert runtime.advance_burst() == 2
    assert runtime.remaining_cpu == 4
    assert runtime.is_last_burst()


def test_duplicate_pids_rejected():
    with pytest.raises(InputFormatError):
        create_runtime_table([ProcessDescriptor(1, 0, [3]), ProcessDescriptor(1, 2, [3])])
