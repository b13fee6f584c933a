"""
입력 데이터 파서 및 프로세스 생성 모듈
"""

import random
from typing import Iterator, List, Optional

from core.errors import CapacityExceededError, InputFormatError
from core.process import ProcessDescriptor

# 버스트 목록 종료 표시
END_MARKER = -1


class _TokenStream:
    """공백으로 구분된 정수 토큰 스트림 (# 주석 줄 무시)"""

    def __init__(self, text: str):
        self._tokens: Iterator[str] = iter(self._tokenize(text))
        self.position = 0

    @staticmethod
    def _tokenize(text: str) -> List[str]:
        tokens = []
        for line in text.splitlines():
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            tokens.extend(line.split())
        return tokens

    def next_int(self, what: str) -> int:
        self.position += 1
        try:
            token = next(self._tokens)
        except StopIteration:
            raise InputFormatError(f"입력이 끝났습니다: {what}이(가) 필요합니다 (토큰 #{self.position})")
        try:
            return int(token)
        except ValueError:
            raise InputFormatError(f"정수가 아닌 값 '{token}' ({what}, 토큰 #{self.position})")


class InputParser:
    """입력 파일 파서"""

    @staticmethod
    def parse_file(filename: str, max_bursts: Optional[int] = None) -> List[ProcessDescriptor]:
        """
        파일에서 프로세스 정보 읽기

        파일 형식: 프로세스 수 n, 이어서 프로세스마다
                   ID 도착시간 CPU IO CPU IO ... -1
        예: 1 0 5 3 5 -1

        Args:
            filename: 입력 파일 경로
            max_bursts: 프로세스당 최대 CPU 버스트 수 (None이면 제한 없음)

        Returns:
            프로세스 기술자 리스트
        """
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                text = f.read()
        except OSError as e:
            raise InputFormatError(f"파일 '{filename}'을 읽을 수 없습니다: {e}")

        return InputParser.parse_text(text, max_bursts)

    @staticmethod
    def parse_text(text: str, max_bursts: Optional[int] = None) -> List[ProcessDescriptor]:
        """문자열에서 프로세스 정보 읽기 (형식은 parse_file 참고)"""
        stream = _TokenStream(text)
        count = stream.next_int("프로세스 수")
        if count <= 0:
            raise InputFormatError(f"프로세스 수는 양수여야 합니다: {count}")

        processes = []
        seen = set()
        for _ in range(count):
            process = InputParser._parse_process(stream, max_bursts)
            if process.pid in seen:
                raise InputFormatError(f"중복된 프로세스 ID: {process.pid}")
            seen.add(process.pid)
            processes.append(process)
        return processes

    @staticmethod
    def _parse_process(stream: _TokenStream, max_bursts: Optional[int]) -> ProcessDescriptor:
        """프로세스 하나 파싱: CPU와 I/O 버스트가 번갈아 오고 -1로 끝난다"""
        pid = stream.next_int("프로세스 ID")
        arrival_time = stream.next_int(f"P{pid} 도착 시간")

        cpu_bursts: List[int] = []
        io_bursts: List[int] = []
        while True:
            cpu = stream.next_int(f"P{pid} CPU 버스트")
            if cpu == END_MARKER:
                break
            if cpu < 0:
                raise InputFormatError(f"P{pid}: 버스트 시간은 음수일 수 없습니다: {cpu}")
            cpu_bursts.append(cpu)
            if max_bursts is not None and len(cpu_bursts) > max_bursts:
                raise CapacityExceededError(
                    f"P{pid}: CPU 버스트가 최대 {max_bursts}개를 넘습니다")

            io = stream.next_int(f"P{pid} I/O 버스트")
            if io == END_MARKER:
                # 마지막 CPU 버스트 직후 종료
                break
            if io < 0:
                raise InputFormatError(f"P{pid}: 버스트 시간은 음수일 수 없습니다: {io}")
            io_bursts.append(io)

        return ProcessDescriptor(pid, arrival_time, cpu_bursts, io_bursts)

    @staticmethod
    def generate_random_processes(num_processes: int = 10,
                                  max_arrival: int = 20,
                                  max_burst: int = 30,
                                  max_io: int = 20,
                                  seed: int = None) -> List[ProcessDescriptor]:
        """
        랜덤 프로세스 생성

        Args:
            num_processes: 생성할 프로세스 수
            max_arrival: 최대 도착 시간
            max_burst: 최대 CPU 버스트 시간
            max_io: 최대 I/O 시간
            seed: 랜덤 시드

        Returns:
            프로세스 기술자 리스트
        """
        if num_processes <= 0:
            raise InputFormatError(f"프로세스 수는 양수여야 합니다: {num_processes}")
        rng = random.Random(seed)

        processes = []
        for pid in range(1, num_processes + 1):
            arrival_time = rng.randint(0, max_arrival)

            # I/O bound: 짧은 CPU 버스트가 여러 번, CPU bound: 긴 버스트가 적게
            if rng.random() < 0.4:
                num_bursts = rng.randint(2, 4)
                cpu_bursts = [rng.randint(1, max(1, max_burst // 3)) for _ in range(num_bursts)]
                io_bursts = [rng.randint(1, max_io) for _ in range(num_bursts - 1)]
            else:
                num_bursts = rng.randint(1, 3)
                cpu_bursts = [rng.randint(max(1, max_burst // 2), max_burst) for _ in range(num_bursts)]
                io_bursts = [rng.randint(1, max(1, max_io // 2)) for _ in range(num_bursts - 1)]

            processes.append(ProcessDescriptor(pid, arrival_time, cpu_bursts, io_bursts))

        return processes

    @staticmethod
    def format_processes(processes: List[ProcessDescriptor]) -> str:
        """parse_text로 다시 읽을 수 있는 형식의 문자열 생성"""
        lines = [
            "# CPU Scheduler Input Data",
            "# Format: ID ArrivalTime CPU IO CPU IO ... -1",
            str(len(processes)),
        ]
        for process in processes:
            fields = [process.pid, process.arrival_time] + process.to_pattern() + [END_MARKER]
            lines.append(' '.join(str(x) for x in fields))
        return '\n'.join(lines) + '\n'

    @staticmethod
    def save_processes_to_file(processes: List[ProcessDescriptor], filename: str):
        """
        프로세스 리스트를 파일로 저장

        Args:
            processes: 저장할 프로세스 리스트
            filename: 출력 파일 경로
        """
        with open(filename, 'w', encoding='utf-8') as f:
            f.write(InputParser.format_processes(processes))

        print(f"{len(processes)}개의 프로세스를 {filename}에 저장했습니다")

    @staticmethod
    def print_process_summary(processes: List[ProcessDescriptor]):
        """프로세스 요약 정보 출력"""
        print("\n" + "="*80)
        print("프로세스 요약")
        print("="*80)
        print(f"{'PID':<6} {'도착시간':>8} {'CPU 버스트':>10} {'총 CPU':>10} "
              f"{'총 I/O':>10} {'서비스 시간':>12}")
        print("-"*80)

        for p in sorted(processes, key=lambda x: x.pid):
            total_cpu = p.get_total_burst_time()
            print(f"{p.pid:<6} {p.arrival_time:>8} {p.burst_count:>10} {total_cpu:>10} "
                  f"{p.get_service_time() - total_cpu:>10} {p.get_service_time():>12}")

        print("="*80 + "\n")

        cpu_bound = sum(1 for p in processes if p.burst_count == 1)
        print(f"전체 프로세스: {len(processes)}개")
        print(f"  - CPU 중심: {cpu_bound}개")
        print(f"  - I/O 포함: {len(processes) - cpu_bound}개")
        print()
