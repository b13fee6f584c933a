#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CPU 스케줄링 시뮬레이터 - 메인 실행 파일
FCFS, Round Robin (q=10), Round Robin (q=5)을 차례로 실행
"""

import argparse
import os
import re
import sys
import traceback
from typing import Dict, List, Optional

from core.errors import CapacityExceededError, InputFormatError, SimulationInvariantError
from core.scheduler_base import DEFAULT_TIME_SLICES
from schedulers.basic_schedulers import FCFSScheduler, RoundRobinScheduler
from utils.input_parser import InputParser
from utils.visualization import Visualizer

DEFAULT_INPUT_FILE = "input.txt"

# 종료 코드
EXIT_INPUT_ERROR = 1
EXIT_CAPACITY_ERROR = 2
EXIT_INVARIANT_ERROR = 3


def print_banner():
    """배너 출력"""
    print("\n" + "="*80)
    print(" "*25 + "CPU 스케줄링 시뮬레이터")
    print("="*80 + "\n")


def run_policy(input_file: str, time_slice: Optional[int], verbose: bool = False,
               max_bursts: Optional[int] = None) -> Dict:
    """
    입력 파일을 새로 읽어 정책 하나를 실행

    Args:
        input_file: 입력 파일 경로
        time_slice: Round Robin 타임 슬라이스 (None이면 FCFS)
        verbose: 상세 로그 출력 여부
        max_bursts: 프로세스당 최대 CPU 버스트 수

    Returns:
        시뮬레이션 결과 딕셔너리
    """
    processes = InputParser.parse_file(input_file, max_bursts)
    if time_slice is None:
        print("**** FCFS Scheduling ****")
        scheduler = FCFSScheduler(processes)
    else:
        print(f"**** RR Scheduling with q = {time_slice} ****")
        scheduler = RoundRobinScheduler(processes, time_slice)

    result = scheduler.run(verbose=verbose)
    print(Visualizer.format_run_report(result))
    print()
    return result


def save_results(results: List[Dict], output_dir: str):
    """Gantt 차트, 비교 차트, 통계 표 저장"""
    os.makedirs(output_dir, exist_ok=True)
    visualizer = Visualizer()
    visualizer.print_statistics_table(results)

    print("Gantt 차트 생성 중...")
    for result in results:
        # 파일명 안전하게 변환
        safe_algo = re.sub(r'[^A-Za-z0-9]+', '_', result['algorithm']).strip('_')
        save_path = os.path.join(output_dir, f"gantt_{safe_algo}.png")
        visualizer.draw_gantt_chart(result['gantt_chart'], result['algorithm'],
                                    save_path=save_path, show=False)

    if len(results) > 1:
        comparison_path = os.path.join(output_dir, "comparison.png")
        visualizer.compare_algorithms(results, save_path=comparison_path, show=False)

    results_file = os.path.join(output_dir, "results.txt")
    with open(results_file, 'w', encoding='utf-8') as f:
        for result in results:
            f.write(f"**** {result['algorithm']} ****\n")
            f.write(Visualizer.format_run_report(result) + "\n\n")
    print(f"[완료] 결과가 '{output_dir}/' 디렉토리에 저장되었습니다")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='CPU scheduling simulator (FCFS and Round Robin, discrete-event)')
    parser.add_argument('input', nargs='?', default=DEFAULT_INPUT_FILE,
                        help=f'Path to process/burst file (default: {DEFAULT_INPUT_FILE})')
    parser.add_argument('-q', '--quantum', type=int, action='append', dest='quanta',
                        help='Round Robin time slice; repeat for several runs (default: 10 and 5)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Print the event log of every run')
    parser.add_argument('--charts', metavar='DIR',
                        help='Save Gantt/comparison charts and a results file into DIR')
    parser.add_argument('--max-bursts', type=int, default=None,
                        help='Reject processes with more CPU bursts than this')
    parser.add_argument('--generate', type=int, metavar='N',
                        help='Write N random processes to the input path and exit')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for --generate')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """메인 함수"""
    args = build_parser().parse_args(argv)
    print_banner()

    try:
        if args.generate is not None:
            processes = InputParser.generate_random_processes(args.generate, seed=args.seed)
            InputParser.save_processes_to_file(processes, args.input)
            InputParser.print_process_summary(processes)
            return 0

        quanta = args.quanta if args.quanta else list(DEFAULT_TIME_SLICES)
        if any(q <= 0 for q in quanta):
            raise InputFormatError(f"타임 슬라이스는 양수여야 합니다: {quanta}")

        results = [run_policy(args.input, None, args.verbose, args.max_bursts)]
        for time_slice in quanta:
            results.append(run_policy(args.input, time_slice, args.verbose, args.max_bursts))

        if args.charts:
            save_results(results, args.charts)
        return 0

    except InputFormatError as e:
        print(f"[오류] 입력 오류: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    except CapacityExceededError as e:
        print(f"[오류] 용량 초과: {e}", file=sys.stderr)
        return EXIT_CAPACITY_ERROR
    except SimulationInvariantError as e:
        print(f"[오류] 시뮬레이션 불변식 위반: {e}", file=sys.stderr)
        traceback.print_exc()
        return EXIT_INVARIANT_ERROR


if __name__ == "__main__":
    sys.exit(main())
