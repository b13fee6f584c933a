import os

import main


def test_three_policy_runs(sample_file, capsys):
    assert main.main([sample_file]) == 0
    out = capsys.readouterr().out

    assert out.index("**** FCFS Scheduling ****") \
        < out.index("**** RR Scheduling with q = 10 ****") \
        < out.index("**** RR Scheduling with q = 5 ****")
    assert "16 : Process 3 exits. Turnaround time = 14 (175%), Wait time = 6" in out
    assert out.count("CPU utilization = ") == 3


def test_custom_quanta(sample_file, capsys):
    assert main.main([sample_file, "-q", "3"]) == 0
    out = capsys.readouterr().out
    assert "**** RR Scheduling with q = 3 ****" in out
    assert "q = 10" not in out


def test_charts_written(sample_file, tmp_path, capsys):
    charts = tmp_path / "charts"
    assert main.main([sample_file, "--charts", str(charts)]) == 0
    files = set(os.listdir(charts))
    assert {"gantt_FCFS.png", "gantt_Round_Robin_q_10.png", "gantt_Round_Robin_q_5.png",
            "comparison.png", "results.txt"} <= files


def test_malformed_input_exit_code(tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_text("2\n1 0 5 -1\n")
    assert main.main([str(path)]) == main.EXIT_INPUT_ERROR
    assert "입력 오류" in capsys.readouterr().err


def test_capacity_exit_code(sample_file, capsys):
    assert main.main([sample_file, "--max-bursts", "1"]) == main.EXIT_CAPACITY_ERROR


def test_invalid_quantum(sample_file, capsys):
    assert main.main([sample_file, "-q", "0"]) == main.EXIT_INPUT_ERROR


def test_generate_then_run(tmp_path, capsys):
    path = str(tmp_path / "random.txt")
    assert main.main([path, "--generate", "5", "--seed", "7"]) == 0
    assert main.main([path]) == 0
    assert capsys.readouterr().out.count("exits.") == 15
