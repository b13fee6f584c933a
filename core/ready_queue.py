"""
Ready 큐 (FIFO)
"""

from collections import deque
from typing import Deque, Dict, List, Optional

from .errors import CapacityExceededError, SimulationInvariantError
from .process import ProcessRuntime, ProcessState


class ReadyQueue:
    """
    CPU를 기다리는 프로세스 ID의 FIFO 큐
    모든 정책에서 같은 순서를 쓰며, Round Robin도 재삽입으로만 순서가 바뀐다
    """

    def __init__(self, process_table: Dict[int, ProcessRuntime], capacity: Optional[int] = None):
        """
        Args:
            process_table: 진입 시각을 기록할 프로세스 테이블
            capacity: 최대 항목 수 (None이면 프로세스 수)
        """
        self.process_table = process_table
        self.capacity = capacity if capacity is not None else len(process_table)
        self._queue: Deque[int] = deque()

    def enqueue(self, pid: int, at_time: int):
        """큐 끝에 추가하고 프로세스의 last_ready_time을 기록"""
        if len(self._queue) >= self.capacity:
            raise CapacityExceededError(
                f"Ready 큐 용량 초과 (capacity={self.capacity}): P{pid}")
        process = self.process_table[pid]
        process.last_ready_time = at_time
        process.state = ProcessState.READY
        self._queue.append(pid)

    def dequeue(self) -> int:
        if not self._queue:
            raise SimulationInvariantError("빈 Ready 큐에서 dequeue 호출")
        return self._queue.popleft()

    def is_empty(self) -> bool:
        return not self._queue

    def snapshot(self) -> List[int]:
        return list(self._queue)

    def __len__(self):
        return len(self._queue)
