"""
프로세스 기술자 및 실행 상태 (PCB) 관리 모듈
"""

from enum import Enum
from typing import Dict, List, Optional, Sequence

from .errors import InputFormatError


class ProcessState(Enum):
    """프로세스 상태"""
    WAITING_ARRIVAL = "Waiting Arrival"
    READY = "Ready"
    RUNNING = "Running"
    WAITING_IO = "Waiting I/O"
    FINISHED = "Finished"


class ProcessDescriptor:
    """
    프로세스 기술자
    한 번의 실행 동안 변하지 않는 정보 (ID, 도착 시간, 버스트 목록)
    """

    def __init__(self, pid: int, arrival_time: int, cpu_bursts: Sequence[int],
                 io_bursts: Sequence[int] = ()):
        """
        Args:
            pid: 외부 프로세스 ID
            arrival_time: 도착 시간
            cpu_bursts: CPU 버스트 시간 목록
            io_bursts: CPU 버스트 사이의 I/O 버스트 시간 목록
                       (CPU 버스트 수 - 1 또는 같은 개수)
        """
        if not cpu_bursts:
            raise InputFormatError(f"P{pid}: CPU 버스트가 최소 1개 필요합니다")
        if len(io_bursts) not in (len(cpu_bursts) - 1, len(cpu_bursts)):
            raise InputFormatError(
                f"P{pid}: I/O 버스트 수({len(io_bursts)})가 "
                f"CPU 버스트 수({len(cpu_bursts)})와 맞지 않습니다")
        if arrival_time < 0:
            raise InputFormatError(f"P{pid}: 도착 시간은 0 이상이어야 합니다: {arrival_time}")
        if any(t < 0 for t in cpu_bursts) or any(t < 0 for t in io_bursts):
            raise InputFormatError(f"P{pid}: 버스트 시간은 음수일 수 없습니다")

        self.pid = pid
        self.arrival_time = arrival_time
        self.cpu_bursts = tuple(cpu_bursts)
        self.io_bursts = tuple(io_bursts)

    @property
    def burst_count(self) -> int:
        """CPU 버스트 개수"""
        return len(self.cpu_bursts)

    def get_total_burst_time(self) -> int:
        """총 CPU 버스트 시간 (I/O 제외)"""
        return sum(self.cpu_bursts)

    def get_service_time(self) -> int:
        """
        최소 서비스 시간: CPU 버스트 + 실제로 수행되는 I/O 버스트

        마지막 CPU 버스트 뒤의 I/O 버스트는 수행되지 않으므로 제외한다
        """
        performed_io = self.io_bursts[:self.burst_count - 1]
        return self.get_total_burst_time() + sum(performed_io)

    def get_total_cpu_io_time(self) -> int:
        """모든 CPU 및 I/O 버스트 시간 합 (마지막 I/O 포함)"""
        return sum(self.cpu_bursts) + sum(self.io_bursts)

    def io_after(self, burst_index: int) -> int:
        """burst_index 번째 CPU 버스트 직후의 I/O 시간"""
        return self.io_bursts[burst_index]

    def to_pattern(self) -> List[int]:
        """[CPU, I/O, CPU, ...] 형태의 실행 패턴"""
        pattern = []
        for i, cpu in enumerate(self.cpu_bursts):
            pattern.append(cpu)
            if i < len(self.io_bursts):
                pattern.append(self.io_bursts[i])
        return pattern

    @classmethod
    def from_pattern(cls, pid: int, arrival_time: int,
                     execution_pattern: Sequence[int]) -> 'ProcessDescriptor':
        """[CPU, I/O, CPU, ...] 실행 패턴에서 기술자 생성"""
        return cls(pid, arrival_time,
                   list(execution_pattern[0::2]), list(execution_pattern[1::2]))

    def __eq__(self, other):
        if not isinstance(other, ProcessDescriptor):
            return NotImplemented
        return (self.pid, self.arrival_time, self.cpu_bursts, self.io_bursts) == \
               (other.pid, other.arrival_time, other.cpu_bursts, other.io_bursts)

    def __hash__(self):
        return hash((self.pid, self.arrival_time, self.cpu_bursts, self.io_bursts))

    def __repr__(self):
        return f"ProcessDescriptor(pid={self.pid}, arrival={self.arrival_time}, " \
               f"pattern={self.to_pattern()})"


class ProcessRuntime:
    """
    프로세스 실행 상태 (PCB)
    정책 실행마다 새로 만들어지며 이벤트 처리기만 변경한다
    """

    def __init__(self, descriptor: ProcessDescriptor):
        self.descriptor = descriptor
        self.state = ProcessState.WAITING_ARRIVAL

        self.current_burst_index = 0  # 현재 CPU 버스트 (0부터)
        self.remaining_cpu = descriptor.cpu_bursts[0]  # 현재 버스트의 남은 시간
        self.last_ready_time = 0  # 마지막으로 Ready 큐에 들어간 시간
        self.start_run_time = 0  # 현재 슬라이스 시작 시간
        self.wait_time = 0  # 누적 대기 시간
        self.finish_time: Optional[int] = None
        self.first_run_time: Optional[int] = None  # 응답 시간 계산용

    @property
    def pid(self) -> int:
        return self.descriptor.pid

    @property
    def arrival_time(self) -> int:
        return self.descriptor.arrival_time

    def is_last_burst(self) -> bool:
        """현재 CPU 버스트가 마지막인지 확인"""
        return self.current_burst_index + 1 >= self.descriptor.burst_count

    def advance_burst(self) -> int:
        """
        다음 CPU 버스트로 이동

        Returns:
            그 사이에 수행할 I/O 시간
        """
        io_time = self.descriptor.io_after(self.current_burst_index)
        self.current_burst_index += 1
        self.remaining_cpu = self.descriptor.cpu_bursts[self.current_burst_index]
        return io_time

    def __repr__(self):
        return f"P{self.pid}[{self.state.value}]"

    def __str__(self):
        return f"Process {self.pid}: State={self.state.value}, " \
               f"Burst={self.current_burst_index}, Remaining={self.remaining_cpu}"


def create_runtime_table(descriptors: Sequence[ProcessDescriptor]) -> Dict[int, ProcessRuntime]:
    """
    정책 실행 하나를 위한 새 프로세스 테이블 생성
    각 스케줄링 시뮬레이션이 이전 실행의 상태를 공유하지 않도록 한다
    """
    table: Dict[int, ProcessRuntime] = {}
    for descriptor in descriptors:
        if descriptor.pid in table:
            raise InputFormatError(f"중복된 프로세스 ID: {descriptor.pid}")
        table[descriptor.pid] = ProcessRuntime(descriptor)
    return table
