from __future__ import annotations

from typing import Dict, List, Sequence

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ExecutionInterval

PID_COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]
LEVEL_COLORS = ["bright_red", "bright_green", "bright_blue", "bright_yellow"]
IDLE_STYLE = "on grey23"


def coalesce(slices: Sequence[ExecutionInterval]) -> List[ExecutionInterval]:
    """
    Merge back-to-back slices of the same process (and queue level) for
    display. SRTF and unit idle steps otherwise render as many 1-wide cells.
    The input sequence is left untouched.
    """
    merged: List[ExecutionInterval] = []
    for sl in slices:
        last = merged[-1] if merged else None
        if last and last.pid == sl.pid and last.queue_level == sl.queue_level and last.end == sl.start:
            merged[-1] = ExecutionInterval(pid=last.pid, start=last.start, end=sl.end, queue_level=last.queue_level)
        else:
            merged.append(sl)
    return merged


def _time_marks(slices: Sequence[ExecutionInterval]) -> str:
    marks = "0"
    for sl in slices:
        marks += f"{sl.end:>{max(3, sl.duration)}}"
    return marks


def render_gantt(slices: Sequence[ExecutionInterval]) -> str:
    """
    Plain-text Gantt chart. Idle time is drawn with dots.
    """
    if not slices:
        return "(no execution)"

    slices = coalesce(slices)

    line = "|"
    labels = ""

    for sl in slices:
        width = max(3, sl.duration)
        if sl.is_idle:
            line += "." * width
            labels += "-".ljust(width)
            continue
        line += "=" * width
        labels += sl.pid[:width].ljust(width)

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            " " + labels,
            _time_marks(slices),
        ]
    )


def build_rich_gantt(slices: Sequence[ExecutionInterval], by_level: bool = False) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.

    With ``by_level`` (MLFQ) slices are colored by queue level and a legend
    is added underneath.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    slices = coalesce(slices)
    pid_to_color: Dict[str, str] = {}

    def slice_color(sl: ExecutionInterval) -> str:
        if by_level and sl.queue_level is not None:
            return LEVEL_COLORS[sl.queue_level % len(LEVEL_COLORS)]
        if sl.pid not in pid_to_color:
            pid_to_color[sl.pid] = PID_COLORS[len(pid_to_color) % len(PID_COLORS)]
        return pid_to_color[sl.pid]

    timeline = Text()
    labels = Text()

    for sl in slices:
        width = max(3, sl.duration)
        if sl.is_idle:
            timeline.append(" " * width, style=IDLE_STYLE)
            labels.append("-".ljust(width), style="dim")
            continue

        timeline.append(" " * width, style=f"on {slice_color(sl)}")
        labels.append(sl.pid[:width].ljust(width), style="bold")

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    body = table
    if by_level:
        legend = Text("Queues: ")
        for level, color in enumerate(LEVEL_COLORS):
            legend.append(f" Q{level} ", style=f"black on {color}")
            legend.append(" ")
        body = Group(table, legend)

    panel = Panel.fit(body, title="Gantt Chart")
    return panel, _time_marks(slices)
