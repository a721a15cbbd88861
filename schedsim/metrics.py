from __future__ import annotations

from typing import Sequence

from .exceptions import SimulationInvariantError
from .models import ExecutionInterval, Process, SimulationMetrics


def compute_metrics(
    completed: Sequence[Process],
    total_time: int,
    timeline: Sequence[ExecutionInterval] = (),
    expected_count: int | None = None,
) -> SimulationMetrics:
    """
    Average turnaround, waiting and response time over a finished run.

    Turnaround and waiting are (re)derived on each process from its
    completion time. ``total_time`` is the final simulation clock. When a
    timeline is given, CPU busy/idle time, throughput and utilization are
    filled in as well.
    """
    if not completed:
        raise SimulationInvariantError("Cannot compute metrics over an empty completed list")
    if expected_count is not None and len(completed) != expected_count:
        raise SimulationInvariantError(
            f"Only {len(completed)} of {expected_count} processes completed"
        )

    for p in completed:
        if p.completion_time is None or p.response_time is None:
            raise SimulationInvariantError(f"Process {p.pid} has not completed")
        p.turnaround_time = p.completion_time - p.arrival_time
        p.waiting_time = p.turnaround_time - p.burst_time

    n = len(completed)
    cpu_busy_time = sum(sl.duration for sl in timeline if not sl.is_idle)
    idle_time = sum(sl.duration for sl in timeline if sl.is_idle)

    return SimulationMetrics(
        avg_turnaround=sum(p.turnaround_time for p in completed) / n,
        avg_waiting=sum(p.waiting_time for p in completed) / n,
        avg_response=sum(p.response_time for p in completed) / n,
        total_time=total_time,
        cpu_busy_time=cpu_busy_time,
        idle_time=idle_time,
        throughput=n / total_time if total_time > 0 else 0.0,
        cpu_utilization=cpu_busy_time / total_time if total_time > 0 else 0.0,
    )
