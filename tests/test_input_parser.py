import pytest

from core.errors import CapacityExceededError, InputFormatError
from core.process import ProcessDescriptor
from utils.input_parser import InputParser


def test_parse_alternating_bursts():
    processes = InputParser.parse_text("""
        # two processes
        2
        1 0 5 3 5 -1
        2 4 7 -1
    """)
    assert processes == [
        ProcessDescriptor(1, 0, [5, 5], [3]),
        ProcessDescriptor(2, 4, [7], []),
    ]


def test_trailing_io_is_kept():
    (process,) = InputParser.parse_text("1\n9 0 5 2 -1\n")
    assert process.cpu_bursts == (5,)
    assert process.io_bursts == (2,)


def test_parse_file(sample_file):
    processes = InputParser.parse_file(sample_file)
    assert [p.pid for p in processes] == [1, 2, 3]
    assert processes[2].to_pattern() == [8]


@pytest.mark.parametrize('text', [
    "",
    "0\n",
    "-3\n",
    "2\n1 0 5 -1\n",
    "1\n1 0 five -1\n",
    "1\n1 0 5 -2 -1\n",
    "1\n1 0 -1\n",
    "1\n1 -4 5 -1\n",
    "2\n1 0 5 -1\n1 2 3 -1\n",
])
def test_malformed_input_rejected(text):
    with pytest.raises(InputFormatError):
        InputParser.parse_text(text)


def test_missing_file_rejected(tmp_path):
    with pytest.raises(InputFormatError):
        InputParser.parse_file(str(tmp_path / "missing.txt"))


def test_burst_bound():
    text = "1\n1 0 1 1 1 1 1 -1\n"
    assert InputParser.parse_text(text, max_bursts=3)[0].burst_count == 3
    with pytest.raises(CapacityExceededError):
        InputParser.parse_text(text, max_bursts=2)


def test_generated_processes_survive_save_and_load(tmp_path):
    generated = InputParser.generate_random_processes(12, seed=42)
    assert generated == InputParser.generate_random_processes(12, seed=42)

    path = tmp_path / "generated.txt"
    InputParser.save_processes_to_file(generated, str(path))
    assert InputParser.parse_file(str(path)) == generated


def test_print_process_summary(io_mix, capsys):
    InputParser.print_process_summary(io_mix)
    out = capsys.readouterr().out
    assert "전체 프로세스: 3개" in out
