from rich.panel import Panel

from schedsim.algorithms import schedule_fifo, schedule_mlfq
from schedsim.gantt import build_rich_gantt, coalesce, render_gantt
from schedsim.models import IDLE, ExecutionInterval, ProcessSpec


def test_coalesce_merges_adjacent_slices_only():
    slices = [
        ExecutionInterval(IDLE, 0, 1),
        ExecutionInterval(IDLE, 1, 2),
        ExecutionInterval("A", 2, 3),
        ExecutionInterval("A", 3, 4),
        ExecutionInterval("B", 4, 5),
        ExecutionInterval("A", 5, 6),
    ]
    merged = coalesce(slices)
    assert [(s.pid, s.start, s.end) for s in merged] == [
        (IDLE, 0, 2),
        ("A", 2, 4),
        ("B", 4, 5),
        ("A", 5, 6),
    ]
    assert len(slices) == 6


def test_coalesce_keeps_queue_levels_apart():
    slices = [ExecutionInterval("A", 0, 1, 0), ExecutionInterval("A", 1, 3, 1)]
    assert coalesce(slices) == slices


def test_render_gantt_plain():
    res = schedule_fifo([ProcessSpec("A", 2, 3), ProcessSpec("B", 5, 2)])
    text = render_gantt(res.timeline)
    lines = text.splitlines()
    assert lines[0] == "Gantt Chart:"
    assert "..." in lines[1]
    assert "A" in lines[2] and "B" in lines[2]
    assert lines[3].startswith("0")
    assert lines[3].endswith("7")


def test_render_gantt_empty():
    assert render_gantt([]) == "(no execution)"


def test_build_rich_gantt_for_mlfq():
    res = schedule_mlfq([ProcessSpec("A", 0, 4)], quanta=(1, 2, 3, 4))
    panel, marks = build_rich_gantt(res.timeline, by_level=True)
    assert isinstance(panel, Panel)
    assert marks.split()[-1] == "4"


def test_build_rich_gantt_empty():
    panel, marks = build_rich_gantt([])
    assert isinstance(panel, Panel)
    assert marks == ""
