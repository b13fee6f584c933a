from schedulers import FCFSScheduler, RoundRobinScheduler, run_all_policies
from utils.visualization import Visualizer


def test_run_report_format(single_process):
    report = Visualizer.format_run_report(FCFSScheduler(single_process).run())
    assert report.splitlines() == [
        "5 : Process 1 exits. Turnaround time = 5 (100%), Wait time = 0",
        "Average wait time = 0.00",
        "Total turnaround time = 5",
        "CPU idle time = 0",
        "CPU utilization = 100.00%",
    ]


def test_run_report_lists_completions_in_order(rr_pair):
    lines = Visualizer.format_run_report(RoundRobinScheduler(rr_pair, 3).run()).splitlines()
    assert lines[0] == "10 : Process 2 exits. Turnaround time = 9 (225%), Wait time = 5"
    assert lines[1] == "14 : Process 1 exits. Turnaround time = 14 (140%), Wait time = 4"
    assert lines[2] == "Average wait time = 4.50"


def test_charts_are_saved(io_mix, tmp_path):
    results = run_all_policies(io_mix)
    visualizer = Visualizer()

    gantt_path = tmp_path / "gantt.png"
    visualizer.draw_gantt_chart(results[1]['gantt_chart'], results[1]['algorithm'],
                                save_path=str(gantt_path), show=False)
    assert gantt_path.stat().st_size > 0

    comparison_path = tmp_path / "comparison.png"
    visualizer.compare_algorithms(results, save_path=str(comparison_path), show=False)
    assert comparison_path.stat().st_size > 0


def test_tables_print(io_mix, capsys):
    results = run_all_policies(io_mix)
    visualizer = Visualizer()
    visualizer.print_statistics_table(results)
    visualizer.print_process_details(results[0])
    out = capsys.readouterr().out
    assert "Round Robin (q=5)" in out
    assert "프로세스 상세 - FCFS" in out
