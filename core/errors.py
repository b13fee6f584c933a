"""
시뮬레이터 예외 정의
입력 오류, 용량 초과, 시뮬레이션 불변식 위반을 서로 구분한다
"""


class SchedulerError(Exception):
    """시뮬레이터 예외의 공통 부모"""


class InputFormatError(SchedulerError, ValueError):
    """잘못된 입력 (프로세스 수, 버스트 값, 파일 형식 등)"""


class CapacityExceededError(SchedulerError):
    """설정된 용량(버스트 수, 큐 크기)을 초과함"""


class SimulationInvariantError(SchedulerError):
    """
    이벤트 순서 처리의 결함을 나타내는 예외
    입력 오류와 달리 시뮬레이터 자체의 버그를 의미한다
    """
