"""
시뮬레이션 이벤트 정의
"""

from dataclasses import dataclass
from enum import IntEnum


class EventType(IntEnum):
    """
    이벤트 종류
    같은 시각의 이벤트는 값이 작은 종류가 먼저 처리된다
    """
    ARRIVAL = 0  # 최초 도착 또는 I/O 복귀
    CPU_COMPLETE = 1  # CPU 버스트 완료
    CPU_TIMEOUT = 2  # 타임 슬라이스 만료


@dataclass(frozen=True, order=True)
class Event:
    """시뮬레이션 이벤트: (시간, 종류, 프로세스 ID) 순으로 정렬"""
    time: int
    kind: EventType
    process_id: int

    def __repr__(self):
        return f"Event(time={self.time}, kind={self.kind.name}, pid={self.process_id})"
