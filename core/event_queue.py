"""
이벤트 우선순위 큐 (min-heap)
"""

import heapq
from typing import List, Optional

from .errors import CapacityExceededError, SimulationInvariantError
from .event import Event


class EventQueue:
    """
    (시간, 종류, 프로세스 ID) 순서의 이벤트 min-heap
    같은 시각의 이벤트도 항상 같은 순서로 꺼내진다
    """

    def __init__(self, capacity: Optional[int] = None):
        """
        Args:
            capacity: 동시에 보관할 수 있는 최대 이벤트 수 (None이면 제한 없음)
        """
        self.capacity = capacity
        self._heap: List[Event] = []

    def push(self, event: Event):
        if self.capacity is not None and len(self._heap) >= self.capacity:
            raise CapacityExceededError(
                f"이벤트 큐 용량 초과 (capacity={self.capacity}): {event}")
        heapq.heappush(self._heap, event)

    def pop(self) -> Event:
        """가장 이른 이벤트를 꺼낸다. 빈 큐에서 호출하면 엔진 결함이다"""
        if not self._heap:
            raise SimulationInvariantError("빈 이벤트 큐에서 pop 호출")
        return heapq.heappop(self._heap)

    def peek(self) -> Optional[Event]:
        return self._heap[0] if self._heap else None

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self):
        return len(self._heap)
