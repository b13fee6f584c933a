"""
성능 지표 집계 모듈
"""

from dataclasses import dataclass, asdict
from typing import Dict, List

from .process import ProcessRuntime


@dataclass(frozen=True)
class CompletionRecord:
    """프로세스 종료 기록 (종료 순서대로 생성)"""
    process_id: int
    finish_time: int
    turnaround_time: int
    turnaround_percentage: float
    wait_time: int
    response_time: int

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class AggregateRecord:
    """실행 전체의 집계 지표"""
    average_wait_time: float
    makespan: int
    idle_time: int
    utilization_percent: float
    average_turnaround_time: float = 0.0
    context_switches: int = 0
    dispatch_count: int = 0
    timeout_count: int = 0

    def to_dict(self) -> Dict:
        return asdict(self)


class SchedulerStats:
    """스케줄링 통계 누적기"""

    def __init__(self):
        self.total_wait_time = 0
        self.total_idle_time = 0
        self.makespan = 0
        self.context_switches = 0
        self.dispatch_count = 0
        self.timeout_count = 0
        self.completions: List[CompletionRecord] = []

    def add_wait(self, amount: int):
        self.total_wait_time += amount

    def add_idle(self, amount: int):
        self.total_idle_time += amount

    def record_completion(self, process: ProcessRuntime) -> CompletionRecord:
        """
        FINISHED 전이 시 종료 기록 생성

        반환 시간 비율 = 100 × 반환 시간 / (모든 CPU + I/O 버스트 시간 합)
        """
        turnaround = process.finish_time - process.arrival_time
        total_cpu_io = process.descriptor.get_total_cpu_io_time()
        percentage = 100.0 * turnaround / total_cpu_io if total_cpu_io > 0 else 0.0
        record = CompletionRecord(
            process_id=process.pid,
            finish_time=process.finish_time,
            turnaround_time=turnaround,
            turnaround_percentage=percentage,
            wait_time=process.wait_time,
            response_time=process.first_run_time - process.arrival_time,
        )
        self.completions.append(record)
        self.makespan = max(self.makespan, process.finish_time)
        return record

    def build_aggregate(self, process_count: int) -> AggregateRecord:
        """실행 종료 후 집계 기록 생성"""
        if process_count <= 0:
            return AggregateRecord(0.0, 0, 0, 0.0)

        utilization = 0.0
        if self.makespan > 0:
            utilization = 100.0 * (self.makespan - self.total_idle_time) / self.makespan

        total_turnaround = sum(r.turnaround_time for r in self.completions)
        return AggregateRecord(
            average_wait_time=self.total_wait_time / process_count,
            makespan=self.makespan,
            idle_time=self.total_idle_time,
            utilization_percent=utilization,
            average_turnaround_time=total_turnaround / process_count,
            context_switches=self.context_switches,
            dispatch_count=self.dispatch_count,
            timeout_count=self.timeout_count,
        )

    def calculate_averages(self, process_count: int) -> Dict:
        """시각화/웹 응답용 통계 딕셔너리"""
        aggregate = self.build_aggregate(process_count)
        return {
            'avg_waiting_time': aggregate.average_wait_time,
            'avg_turnaround_time': aggregate.average_turnaround_time,
            'makespan': aggregate.makespan,
            'idle_time': aggregate.idle_time,
            'cpu_utilization': aggregate.utilization_percent,
            'context_switches': aggregate.context_switches,
        }
