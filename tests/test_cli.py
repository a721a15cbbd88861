import json
from pathlib import Path

import pytest

from schedsim.cli import main
from schedsim.workload_io import load_workload


def _workload(tmp_path: Path) -> Path:
    p = tmp_path / "w.json"
    p.write_text(json.dumps([
        {"pid": "A", "arrival_time": 0, "burst_time": 5, "priority": 1},
        {"pid": "B", "arrival_time": 1, "burst_time": 3, "priority": 2},
        {"pid": "C", "arrival_time": 3, "burst_time": 1, "priority": 1},
    ]))
    return p


def test_run_prints_tables(tmp_path, capsys):
    assert main(["run", "-a", "fifo", "-w", str(_workload(tmp_path))]) == 0
    out = capsys.readouterr().out
    assert "FIFO" in out
    assert "Per-process" in out
    assert "Avg waiting" in out


def test_run_mlfq_with_explicit_quanta(tmp_path, capsys):
    argv = ["run", "-a", "mlfq", "-w", str(_workload(tmp_path)), "--mlfq-quanta", "1", "2", "3", "4"]
    assert main(argv) == 0
    out = capsys.readouterr().out
    assert "Q3" in out
    assert "1, 2, 3, 4" in out


def test_run_with_step_replay(capsys):
    assert main(["run", "-a", "srtf", "-r", "3", "--seed", "2", "--step", "--step-delay", "0"]) == 0
    assert "Simulating" in capsys.readouterr().out


def test_compare(capsys):
    assert main(["compare", "-r", "5", "--seed", "1", "-a", "fifo", "sjf", "mlfq"]) == 0
    out = capsys.readouterr().out
    assert "FIFO" in out
    assert "MLFQ" in out


def test_generate(tmp_path, capsys):
    out_file = tmp_path / "gen.csv"
    assert main(["generate", str(out_file), "-n", "4", "--seed", "7"]) == 0
    assert len(load_workload(out_file)) == 4


def test_errors_exit_with_status_1(tmp_path, capsys):
    assert main(["run", "-a", "lottery", "-r", "3"]) == 1
    assert "Unknown" in capsys.readouterr().out
    assert main(["run", "-a", "rr", "-r", "3", "-q", "0"]) == 1
    assert main(["run", "-a", "fifo", "-w", str(tmp_path / "missing.json")]) == 1


def test_negative_step_delay_is_a_usage_error(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["run", "-a", "fifo", "-r", "2", "--step", "--step-delay", "-1"])
    assert exc.value.code == 2
    assert "must not be negative" in capsys.readouterr().err
