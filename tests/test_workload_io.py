from pathlib import Path

import pytest

from schedsim.exceptions import InvalidInputError
from schedsim.models import ProcessSpec
from schedsim.workload_io import generate_random_workload, load_workload, save_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3,"priority":2},'
                 '{"pid":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], ProcessSpec)
    assert procs[0].priority == 2
    assert procs[1].priority == 1
    assert procs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,3,1\nB,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == "A"
    assert procs[1].priority == 1


def test_save_then_load_csv(tmp_path: Path):
    procs = [ProcessSpec("A", 0, 3, 2), ProcessSpec("B", 4, 1, 1)]
    path = save_workload(procs, tmp_path / "w.csv")
    assert load_workload(path) == procs


@pytest.mark.parametrize(
    "name, text",
    [
        ("w.json", '{"pid": "A"}'),
        ("w.json", "[{\"pid\": \"A\", \"arrival_time\": \"soon\", \"burst_time\": 1}]"),
        ("w.json", "not json"),
        ("w.csv", "pid,arrival_time\nA,0\n"),
        ("w.txt", "A 0 1"),
        ("w.json", '[{"pid":"A","arrival_time":0,"burst_time":2.7}]'),
        ("w.json", '[{"pid":"A","arrival_time":true,"burst_time":2}]'),
        ("w.csv", "pid,arrival_time,burst_time\nA,0,2.7\n"),
    ],
)
def test_bad_workloads(tmp_path: Path, name, text):
    p = tmp_path / name
    p.write_text(text)
    with pytest.raises(InvalidInputError):
        load_workload(p)


def test_random_workload_is_seeded():
    first = generate_random_workload(5, seed=3)
    assert first == generate_random_workload(5, seed=3)
    assert [p.pid for p in first] == ["P1", "P2", "P3", "P4", "P5"]
    for p in first:
        assert 0 <= p.arrival_time <= 9
        assert 1 <= p.burst_time <= 10
        assert 1 <= p.priority <= 4


def test_random_workload_needs_a_process():
    with pytest.raises(InvalidInputError):
        generate_random_workload(0)
