"""
디스패처: CPU가 비었을 때 다음 프로세스와 실행 슬라이스를 결정
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .errors import SimulationInvariantError
from .event import Event, EventType
from .event_queue import EventQueue
from .metrics import SchedulerStats
from .process import ProcessRuntime, ProcessState
from .ready_queue import ReadyQueue


@dataclass
class CpuState:
    """단일 CPU 상태"""
    running_pid: Optional[int] = None
    busy_until: int = 0  # 마지막 슬라이스가 끝나는 시각
    slice_length: int = 0  # 현재 슬라이스 길이
    last_pid: Optional[int] = None  # 문맥 전환 계산용

    def is_idle(self) -> bool:
        return self.running_pid is None


@dataclass(frozen=True)
class Dispatch:
    """디스패치 한 번의 결과"""
    pid: int
    start_time: int
    slice_length: int
    idle_gap: int
    event: Event


class Dispatcher:
    """
    Ready 큐의 맨 앞 프로세스를 min(남은 시간, 퀀텀) 만큼 실행시킨다
    FCFS는 퀀텀이 모든 버스트보다 큰 경우로 취급한다
    """

    def __init__(self, quantum: int, cpu: CpuState, ready_queue: ReadyQueue,
                 event_queue: EventQueue, process_table: Dict[int, ProcessRuntime],
                 stats: SchedulerStats):
        self.quantum = quantum
        self.cpu = cpu
        self.ready_queue = ready_queue
        self.event_queue = event_queue
        self.process_table = process_table
        self.stats = stats

    def dispatch(self, current_time: int) -> Optional[Dispatch]:
        """
        CPU가 비어 있으면 다음 프로세스를 실행

        Args:
            current_time: 현재 시뮬레이션 시각

        Returns:
            디스패치 결과 (Ready 큐가 비어 있으면 None, CPU 유휴)
        """
        if not self.cpu.is_idle():
            raise SimulationInvariantError(
                f"P{self.cpu.running_pid} 실행 중에 디스패치 호출")
        if self.ready_queue.is_empty():
            return None

        pid = self.ready_queue.dequeue()
        process = self.process_table[pid]

        waited = current_time - process.last_ready_time
        process.wait_time += waited
        self.stats.add_wait(waited)

        process.start_run_time = current_time
        process.state = ProcessState.RUNNING
        if process.first_run_time is None:
            process.first_run_time = current_time

        # 이전 슬라이스 종료 이후 CPU가 쉬던 구간
        idle_gap = max(0, current_time - self.cpu.busy_until)
        self.stats.add_idle(idle_gap)

        slice_length = min(process.remaining_cpu, self.quantum)
        self.cpu.running_pid = pid
        self.cpu.slice_length = slice_length
        self.cpu.busy_until = current_time + slice_length

        self.stats.dispatch_count += 1
        if self.cpu.last_pid is not None and self.cpu.last_pid != pid:
            self.stats.context_switches += 1
        self.cpu.last_pid = pid

        if slice_length == process.remaining_cpu:
            kind = EventType.CPU_COMPLETE
        else:
            kind = EventType.CPU_TIMEOUT
        event = Event(current_time + slice_length, kind, pid)
        self.event_queue.push(event)

        return Dispatch(pid, current_time, slice_length, idle_gap, event)
