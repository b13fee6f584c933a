"""
기본 스케줄링 알고리즘: FCFS, Round Robin
두 정책은 같은 엔진을 쓰고 타임 슬라이스만 다르다
"""

from typing import Dict, List, Sequence

from core.process import ProcessDescriptor
from core.scheduler_base import BaseScheduler, FCFS_QUANTUM, DEFAULT_TIME_SLICES


class FCFSScheduler(BaseScheduler):
    """
    FCFS (First-Come, First-Served) 스케줄러
    비선점형: 타임 슬라이스가 어떤 버스트보다도 길어 타임아웃이 발생하지 않는다
    """

    def __init__(self, processes: Sequence[ProcessDescriptor]):
        longest = max((max(p.cpu_bursts) for p in processes), default=0)
        super().__init__(processes, max(FCFS_QUANTUM, longest + 1), "FCFS")


class RoundRobinScheduler(BaseScheduler):
    """
    Round Robin 스케줄러
    각 프로세스에게 동일한 타임 슬라이스를 할당하고 순환 실행
    """

    def __init__(self, processes: Sequence[ProcessDescriptor], time_slice: int = 10):
        super().__init__(processes, time_slice, f"Round Robin (q={time_slice})")
        self.time_slice = time_slice


def run_all_policies(processes: Sequence[ProcessDescriptor],
                     time_slices: Sequence[int] = DEFAULT_TIME_SLICES,
                     verbose: bool = False) -> List[Dict]:
    """
    FCFS 후 각 타임 슬라이스의 Round Robin을 차례로 실행
    실행마다 새 엔진을 만들어 상태를 공유하지 않는다
    """
    results = [FCFSScheduler(processes).run(verbose=verbose)]
    for time_slice in time_slices:
        results.append(RoundRobinScheduler(processes, time_slice).run(verbose=verbose))
    return results
