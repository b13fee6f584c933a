import os

os.environ.setdefault("MPLBACKEND", "Agg")

import pytest

from core.process import ProcessDescriptor


@pytest.fixture
def single_process():
    return [ProcessDescriptor(1, 0, [5])]


@pytest.fixture
def rr_pair():
    return [ProcessDescriptor(1, 0, [10]), ProcessDescriptor(2, 1, [4])]


@pytest.fixture
def io_mix():
    return [
        ProcessDescriptor.from_pattern(1, 0, [5, 3, 5]),
        ProcessDescriptor.from_pattern(2, 1, [3, 2, 3]),
        ProcessDescriptor.from_pattern(3, 2, [8]),
    ]


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text("3\n1 0 5 3 5 -1\n2 1 3 2 3 -1\n3 2 8 -1\n")
    return str(path)
