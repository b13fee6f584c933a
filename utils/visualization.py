"""
시각화 모듈: 실행 리포트, Gantt Chart 및 통계 그래프 생성
"""

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
from typing import List, Dict
from core.scheduler_base import GanttEntry, IDLE_PID
from core.process import ProcessState


class Visualizer:
    """스케줄링 결과 시각화"""

    def __init__(self):
        # 프로세스별 색상 설정
        self.colors = plt.cm.Set3.colors
        self.idle_color = '#CCCCCC'
        self.waiting_color = '#FFE5E5'

    @staticmethod
    def format_run_report(result: Dict) -> str:
        """
        실행 결과를 고전적인 텍스트 리포트로 변환

        Args:
            result: 스케줄러 run() 결과

        Returns:
            종료 순서대로의 프로세스 줄과 집계 줄
        """
        lines = []
        for record in result['completions']:
            lines.append(f"{record.finish_time} : Process {record.process_id} exits. "
                         f"Turnaround time = {record.turnaround_time} "
                         f"({record.turnaround_percentage:.0f}%), "
                         f"Wait time = {record.wait_time}")

        aggregate = result['aggregate']
        lines.append(f"Average wait time = {aggregate.average_wait_time:.2f}")
        lines.append(f"Total turnaround time = {aggregate.makespan}")
        lines.append(f"CPU idle time = {aggregate.idle_time}")
        lines.append(f"CPU utilization = {aggregate.utilization_percent:.2f}%")
        return '\n'.join(lines)

    def draw_gantt_chart(self, gantt_data: List[GanttEntry], algorithm_name: str,
                         save_path: str = None, show: bool = True):
        """
        Gantt Chart 그리기

        Args:
            gantt_data: Gantt Chart 데이터
            algorithm_name: 알고리즘 이름
            save_path: 저장 경로 (None이면 저장 안 함)
            show: 화면에 표시할지 여부
        """
        if not gantt_data:
            print(f"{algorithm_name}에 대한 Gantt 차트 데이터가 없습니다")
            return

        fig, ax = plt.subplots(figsize=(16, 6))

        # 맨 아래 줄은 CPU 유휴 구간
        unique_pids = sorted(set(entry.pid for entry in gantt_data if entry.pid != IDLE_PID))
        pid_to_y = {pid: idx + 1 for idx, pid in enumerate(unique_pids)}
        pid_to_y[IDLE_PID] = 0

        for entry in gantt_data:
            duration = entry.end_time - entry.start_time
            y_pos = pid_to_y[entry.pid]

            if entry.pid == IDLE_PID:
                color = self.idle_color
                alpha = 1.0
            elif entry.state == ProcessState.RUNNING:
                color = self.colors[entry.pid % len(self.colors)]
                alpha = 1.0
            else:
                color = self.waiting_color
                alpha = 0.7

            ax.barh(y_pos, duration, left=entry.start_time, height=0.8,
                    color=color, alpha=alpha, edgecolor='black', linewidth=0.5)

            # 충분히 긴 실행 구간만 프로세스 ID 표시
            if entry.state == ProcessState.RUNNING and duration > 1:
                ax.text(entry.start_time + duration/2, y_pos, f'P{entry.pid}',
                        ha='center', va='center', fontsize=8, fontweight='bold')

        ax.set_yticks(range(len(unique_pids) + 1))
        ax.set_yticklabels(['Idle'] + [f'P{pid}' for pid in unique_pids])
        ax.set_xlabel('Time', fontsize=12)
        ax.set_ylabel('Process', fontsize=12)
        ax.set_title(f'Gantt Chart - {algorithm_name}', fontsize=14, fontweight='bold')
        ax.grid(axis='x', alpha=0.3)

        legend_elements = [
            mpatches.Patch(color=self.colors[0], label='Running'),
            mpatches.Patch(color=self.waiting_color, alpha=0.7, label='I/O (Waiting)'),
            mpatches.Patch(color=self.idle_color, label='CPU Idle'),
        ]
        ax.legend(handles=legend_elements, loc='upper right')

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Gantt 차트가 {save_path}에 저장되었습니다")

        if show:
            plt.show()
        else:
            plt.close(fig)

    def compare_algorithms(self, results: List[Dict], save_path: str = None, show: bool = True):
        """
        여러 실행의 성능 비교 그래프

        Args:
            results: 각 실행의 결과 리스트
            save_path: 저장 경로
            show: 화면에 표시할지 여부
        """
        if not results:
            print("비교할 결과가 없습니다")
            return

        algorithms = [r['algorithm'] for r in results]
        panels = [
            ('avg_waiting_time', 'Average Waiting Time', 'skyblue', '{:.2f}'),
            ('makespan', 'Makespan', 'lightcoral', '{:.0f}'),
            ('cpu_utilization', 'CPU Utilization (%)', 'lightgreen', '{:.1f}%'),
            ('context_switches', 'Context Switches', 'plum', '{:.0f}'),
        ]

        fig, axes = plt.subplots(2, 2, figsize=(16, 12))
        fig.suptitle('Scheduling Policies Performance Comparison',
                     fontsize=16, fontweight='bold')

        for ax, (key, label, color, fmt) in zip(axes.flat, panels):
            values = [r['statistics'][key] for r in results]
            bars = ax.bar(range(len(algorithms)), values, color=color, edgecolor='black')
            ax.set_xticks(range(len(algorithms)))
            ax.set_xticklabels(algorithms, rotation=45, ha='right', fontsize=9)
            ax.set_ylabel(label, fontsize=11)
            ax.set_title(f'{label} Comparison', fontsize=12, fontweight='bold')
            ax.grid(axis='y', alpha=0.3)
            if key == 'cpu_utilization':
                ax.set_ylim(0, 100)

            for bar, value in zip(bars, values):
                ax.text(bar.get_x() + bar.get_width()/2., bar.get_height(),
                        fmt.format(value), ha='center', va='bottom', fontsize=9)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"비교 차트가 {save_path}에 저장되었습니다")

        if show:
            plt.show()
        else:
            plt.close(fig)

    def print_statistics_table(self, results: List[Dict]):
        """
        통계를 표 형식으로 출력

        Args:
            results: 각 실행의 결과 리스트
        """
        print("\n" + "="*110)
        print("스케줄링 정책 성능 비교")
        print("="*110)
        print(f"{'알고리즘':<26} {'평균 대기':>10} {'평균 반환':>10} {'전체 시간':>10} "
              f"{'유휴 시간':>10} {'CPU 이용률(%)':>14} {'문맥전환':>10}")
        print("-"*110)

        for result in results:
            stats = result['statistics']
            print(f"{result['algorithm']:<26} "
                  f"{stats['avg_waiting_time']:>10.2f} "
                  f"{stats['avg_turnaround_time']:>10.2f} "
                  f"{stats['makespan']:>10} "
                  f"{stats['idle_time']:>10} "
                  f"{stats['cpu_utilization']:>14.2f} "
                  f"{stats['context_switches']:>10}")

        print("="*110 + "\n")

    def print_process_details(self, results: Dict):
        """
        개별 프로세스의 상세 정보 출력 (종료 순서)

        Args:
            results: 스케줄러 실행 결과
        """
        print(f"\n{'='*80}")
        print(f"프로세스 상세 - {results['algorithm']}")
        print(f"{'='*80}")
        print(f"{'PID':<6} {'종료':>8} {'반환':>8} {'반환(%)':>10} {'대기':>8} {'응답':>8}")
        print(f"{'-'*80}")

        for record in results['completions']:
            print(f"{record.process_id:<6} "
                  f"{record.finish_time:>8} "
                  f"{record.turnaround_time:>8} "
                  f"{record.turnaround_percentage:>10.0f} "
                  f"{record.wait_time:>8} "
                  f"{record.response_time:>8}")

        print(f"{'='*80}\n")
