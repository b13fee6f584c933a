"""
스케줄러 엔진: 이산 사건 시뮬레이션 루프 및 이벤트 처리
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .dispatcher import CpuState, Dispatcher
from .errors import InputFormatError, SimulationInvariantError
from .event import Event, EventType
from .event_queue import EventQueue
from .metrics import AggregateRecord, SchedulerStats
from .process import ProcessDescriptor, ProcessRuntime, ProcessState, create_runtime_table
from .ready_queue import ReadyQueue

# 사실상 무한한 퀀텀 (FCFS)
FCFS_QUANTUM = 1_000_000_000

# Round Robin 기본 타임 슬라이스
DEFAULT_TIME_SLICES = (10, 5)

# Gantt Chart의 CPU 유휴 구간 PID
IDLE_PID = -1


@dataclass
class GanttEntry:
    """Gantt Chart 엔트리"""
    pid: int
    start_time: int
    end_time: int
    state: ProcessState  # Running, Waiting I/O 등


class BaseScheduler:
    """
    이산 사건 스케줄러 엔진
    이벤트를 시간 순으로 꺼내 프로세스 상태를 바꾸고, CPU가 비면 디스패처를 호출한다
    엔진 인스턴스 하나가 정책 실행 하나에 해당하며 재사용하지 않는다
    """

    def __init__(self, processes: Sequence[ProcessDescriptor], quantum: int,
                 name: str = "Base Scheduler", event_capacity: Optional[int] = None):
        """
        Args:
            processes: 프로세스 기술자 목록
            quantum: 타임 슬라이스 (FCFS는 FCFS_QUANTUM)
            name: 알고리즘 이름
            event_capacity: 이벤트 큐 용량 (None이면 프로세스 수 × 4)
        """
        if not processes:
            raise InputFormatError("프로세스가 최소 1개 필요합니다")
        if quantum <= 0:
            raise InputFormatError(f"타임 슬라이스는 양수여야 합니다: {quantum}")

        self.name = name
        self.quantum = quantum
        self.descriptors = list(processes)
        self.processes: Dict[int, ProcessRuntime] = create_runtime_table(self.descriptors)
        self.current_time = 0
        self.finished_count = 0

        self.cpu = CpuState()
        self.stats = SchedulerStats()
        self.ready_queue = ReadyQueue(self.processes)
        if event_capacity is None:
            event_capacity = len(self.processes) * 4
        self.event_queue = EventQueue(event_capacity)
        self.dispatcher = Dispatcher(quantum, self.cpu, self.ready_queue,
                                     self.event_queue, self.processes, self.stats)

        # Gantt Chart 데이터
        self.gantt_chart: List[GanttEntry] = []

        # 이벤트 로그
        self.event_log: List[str] = []

        self.aggregate: Optional[AggregateRecord] = None
        self._started = False
        self._handlers = {
            EventType.ARRIVAL: self._handle_arrival,
            EventType.CPU_COMPLETE: self._handle_cpu_complete,
            EventType.CPU_TIMEOUT: self._handle_cpu_timeout,
        }

    def log_event(self, message: str):
        """이벤트 로그 기록"""
        log_entry = f"[T={self.current_time:3d}] {message}"
        self.event_log.append(log_entry)

    def add_to_gantt_chart(self, pid: int, start: int, end: int, state: ProcessState):
        """Gantt Chart에 엔트리 추가"""
        if start < end:  # 유효한 시간 구간만 추가
            self.gantt_chart.append(GanttEntry(pid, start, end, state))

    # ------------------------------------------------------------------
    # 메인 루프
    # ------------------------------------------------------------------
    def start(self):
        """모든 프로세스의 최초 도착 이벤트 등록"""
        if self._started:
            return
        self._started = True
        self.log_event(f"===== {self.name} Scheduling Started =====")
        for process in self.processes.values():
            self.event_queue.push(Event(process.arrival_time, EventType.ARRIVAL, process.pid))

    def step(self) -> bool:
        """
        이벤트 하나를 처리 (실시간 뷰어용)
        처리기에서 이어지는 디스패치와 새 이벤트 등록까지 한 번에 끝낸다

        Returns:
            시뮬레이션 완료 여부
        """
        if not self._started:
            self.start()
        if self.is_simulation_complete():
            return True

        event = self.event_queue.pop()
        if event.time < self.current_time:
            raise SimulationInvariantError(
                f"시계가 거꾸로 감: {event} (현재 {self.current_time})")
        self.current_time = event.time
        self._handlers[event.kind](event)

        all_finished = self.finished_count == len(self.processes)
        if all_finished != self.event_queue.is_empty():
            raise SimulationInvariantError(
                f"종료 프로세스 {self.finished_count}/{len(self.processes)}, "
                f"남은 이벤트 {len(self.event_queue)}")
        if all_finished:
            self._finish()
        return self.is_simulation_complete()

    def run(self, verbose: bool = False) -> Dict:
        """
        스케줄링 시뮬레이션 실행

        Args:
            verbose: 상세 로그 출력 여부

        Returns:
            시뮬레이션 결과 딕셔너리
        """
        while not self.step():
            pass

        if verbose:
            for log in self.event_log:
                print(log)

        return self.get_results()

    def is_simulation_complete(self) -> bool:
        """시뮬레이션 완료 여부 확인"""
        return self.aggregate is not None

    def _finish(self):
        self.aggregate = self.stats.build_aggregate(len(self.processes))
        self.log_event(f"===== {self.name} Scheduling Completed =====")

    # ------------------------------------------------------------------
    # 이벤트 처리기
    # ------------------------------------------------------------------
    def _handle_arrival(self, event: Event):
        """최초 도착과 I/O 복귀를 같은 방식으로 처리"""
        process = self.processes[event.process_id]
        if process.state == ProcessState.WAITING_ARRIVAL:
            origin = "upon arrival"
        elif process.state == ProcessState.WAITING_IO:
            origin = "after I/O"
        else:
            raise SimulationInvariantError(
                f"P{process.pid}: {process.state.value} 상태에서 도착 이벤트")

        self.ready_queue.enqueue(process.pid, self.current_time)
        self.log_event(f"Process {process.pid} joins ready queue {origin}")

        if self.cpu.is_idle():
            self._dispatch()

    def _handle_cpu_complete(self, event: Event):
        process = self._account_run(event)
        if process.remaining_cpu != 0:
            raise SimulationInvariantError(
                f"P{process.pid}: 버스트 완료 시점에 남은 시간 {process.remaining_cpu}")
        self._complete_burst(process)
        self._dispatch()

    def _handle_cpu_timeout(self, event: Event):
        process = self._account_run(event)
        self.stats.timeout_count += 1
        if process.remaining_cpu > 0:
            self.ready_queue.enqueue(process.pid, self.current_time)
            self.log_event(f"Process {process.pid} joins ready queue after timeout")
        else:
            # 슬라이스 경계에서 정확히 끝난 경우
            self._complete_burst(process)
        self._dispatch()

    def _account_run(self, event: Event) -> ProcessRuntime:
        """실행 시간을 현재 버스트에서 차감하고 CPU를 비운다"""
        process = self.processes[event.process_id]
        if self.cpu.running_pid != process.pid:
            raise SimulationInvariantError(
                f"{event}: 실행 중인 프로세스는 P{self.cpu.running_pid}")

        elapsed = max(0, self.current_time - process.start_run_time)
        if elapsed != self.cpu.slice_length:
            raise SimulationInvariantError(
                f"P{process.pid}: 실행 시간 {elapsed} != 슬라이스 {self.cpu.slice_length}")
        if elapsed > process.remaining_cpu:
            raise SimulationInvariantError(
                f"P{process.pid}: 남은 시간 {process.remaining_cpu}보다 긴 실행 {elapsed}")
        process.remaining_cpu -= elapsed

        self.add_to_gantt_chart(process.pid, process.start_run_time,
                                self.current_time, ProcessState.RUNNING)
        self.cpu.running_pid = None
        return process

    def _complete_burst(self, process: ProcessRuntime):
        """CPU 버스트 완료: 종료 또는 I/O로 이동"""
        if process.is_last_burst():
            process.finish_time = self.current_time
            process.state = ProcessState.FINISHED
            self.finished_count += 1
            record = self.stats.record_completion(process)
            self.log_event(
                f"Process {process.pid} exits. Turnaround time = {record.turnaround_time} "
                f"({record.turnaround_percentage:.0f}%), Wait time = {record.wait_time}")
            return

        io_time = process.advance_burst()
        wakeup = self.current_time + io_time
        process.state = ProcessState.WAITING_IO
        self.event_queue.push(Event(wakeup, EventType.ARRIVAL, process.pid))
        self.add_to_gantt_chart(process.pid, self.current_time, wakeup, ProcessState.WAITING_IO)
        self.log_event(f"Process {process.pid} will return after IO at {wakeup}")

    def _dispatch(self):
        previous_busy_until = self.cpu.busy_until
        dispatch = self.dispatcher.dispatch(self.current_time)
        if dispatch is None:
            self.log_event("CPU goes idle")
            return

        if dispatch.idle_gap > 0:
            self.add_to_gantt_chart(IDLE_PID, previous_busy_until,
                                    self.current_time, ProcessState.READY)
        self.log_event(
            f"Process {dispatch.pid} is scheduled to run for time {dispatch.slice_length}")

    # ------------------------------------------------------------------
    # 결과
    # ------------------------------------------------------------------
    def get_current_snapshot(self) -> Dict:
        """
        현재 시뮬레이션 상태 스냅샷 반환 (실시간 뷰어용)

        Returns:
            현재 상태 딕셔너리
        """
        return {
            'time': self.current_time,
            'running': self.cpu.running_pid,
            'ready_queue': self.ready_queue.snapshot(),
            'waiting_io': [p.pid for p in self.processes.values()
                           if p.state == ProcessState.WAITING_IO],
            'finished': [r.process_id for r in self.stats.completions],
            'pending_events': len(self.event_queue),
            'context_switches': self.stats.context_switches,
            'latest_gantt_entry': self.gantt_chart[-1] if self.gantt_chart else None,
            'latest_log': self.event_log[-1] if self.event_log else "",
        }

    def get_results(self) -> Dict:
        """
        시뮬레이션 결과 반환

        Returns:
            결과 딕셔너리 (종료 기록, 집계, Gantt Chart, 로그)
        """
        if self.aggregate is None:
            raise SimulationInvariantError(f"{self.name}: 시뮬레이션이 아직 끝나지 않았습니다")

        return {
            'algorithm': self.name,
            'quantum': self.quantum,
            'completions': list(self.stats.completions),
            'aggregate': self.aggregate,
            'statistics': self.stats.calculate_averages(len(self.processes)),
            'gantt_chart': self.gantt_chart,
            'event_log': self.event_log,
        }


def simulate(processes: Sequence[ProcessDescriptor], quantum: int,
             name: Optional[str] = None) -> Dict:
    """새 엔진으로 한 번의 정책 실행을 수행"""
    if name is None:
        name = "FCFS" if quantum >= FCFS_QUANTUM else f"Round Robin (q={quantum})"
    return BaseScheduler(processes, quantum, name).run()
