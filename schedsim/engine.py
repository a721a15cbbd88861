from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .config import is_int
from .exceptions import InvalidInputError, SimulationInvariantError
from .models import IDLE, ExecutionInterval, Process, ProcessSpec

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    """
    Everything a single simulation run owns: the process arena, the clock,
    the Gantt log and the completion order (as arena indices).
    """

    processes: List[Process]
    clock: int = 0
    timeline: List[ExecutionInterval] = field(default_factory=list)
    completed: List[int] = field(default_factory=list)

    @property
    def done(self) -> bool:
        return len(self.completed) == len(self.processes)

    def completed_processes(self) -> List[Process]:
        return [self.processes[i] for i in self.completed]

    def eligible(self) -> List[int]:
        """Indices of arrived, unfinished processes in input order."""
        return [
            i
            for i, p in enumerate(self.processes)
            if p.arrival_time <= self.clock and p.remaining_time > 0
        ]


def validate_processes(specs: Sequence[ProcessSpec]) -> None:
    if not specs:
        raise InvalidInputError("At least one process is required")

    seen: set[str] = set()
    for spec in specs:
        if spec.pid in seen:
            raise InvalidInputError(f"Duplicate process id '{spec.pid}'")
        seen.add(spec.pid)
        for name in ("arrival_time", "burst_time", "priority"):
            value = getattr(spec, name)
            if not is_int(value):
                raise InvalidInputError(f"{spec.pid}: {name} must be an integer, got {value!r}")
        if spec.arrival_time < 0:
            raise InvalidInputError(f"{spec.pid}: arrival_time cannot be negative")
        if spec.burst_time < 1:
            raise InvalidInputError(f"{spec.pid}: burst_time must be a positive integer")
        if spec.priority < 1:
            raise InvalidInputError(f"{spec.pid}: priority must be a positive integer")


def new_state(specs: Sequence[ProcessSpec]) -> SimulationState:
    """
    Validate the workload and build a fresh arena of Process records.
    Input descriptors are never mutated.
    """
    validate_processes(specs)
    return SimulationState(processes=[Process.from_spec(s) for s in specs])


def execute(state: SimulationState, index: int, duration: int, queue_level: Optional[int] = None) -> bool:
    """
    Run ``state.processes[index]`` for ``duration`` units starting at the
    current clock. Returns True when the process completed in this step.

    This is the only place the clock and a process's remaining, response
    and completion fields are changed.
    """
    process = state.processes[index]
    if duration <= 0 or duration > process.remaining_time:
        raise SimulationInvariantError(
            f"Cannot run {process.pid} for {duration} units with {process.remaining_time} remaining"
        )

    if process.response_time is None:
        process.response_time = state.clock - process.arrival_time

    start = state.clock
    state.timeline.append(
        ExecutionInterval(pid=process.pid, start=start, end=start + duration, queue_level=queue_level)
    )
    state.clock += duration
    process.remaining_time -= duration
    logger.debug("t=%d-%d run %s (level=%s)", start, state.clock, process.pid, queue_level)

    if process.remaining_time == 0:
        process.completion_time = state.clock
        process.turnaround_time = process.completion_time - process.arrival_time
        process.waiting_time = process.turnaround_time - process.burst_time
        state.completed.append(index)
        logger.debug("t=%d %s completed", state.clock, process.pid)
        return True
    return False


def idle(state: SimulationState, until: int) -> None:
    """Record an IDLE interval from the current clock up to ``until``."""
    if until <= state.clock:
        raise SimulationInvariantError(f"Idle interval must move forward (clock={state.clock}, until={until})")
    state.timeline.append(ExecutionInterval(pid=IDLE, start=state.clock, end=until))
    logger.debug("t=%d-%d idle", state.clock, until)
    state.clock = until


def arrivals_between(
    state: SimulationState,
    start: int,
    end: int,
    exclude: Iterable[int] = (),
) -> List[int]:
    """
    Unfinished processes with ``start < arrival_time <= end``, skipping the
    indices in ``exclude``. Ordered by arrival time, then input position.
    """
    skip = set(exclude)
    found = [
        i
        for i, p in enumerate(state.processes)
        if start < p.arrival_time <= end and p.remaining_time > 0 and i not in skip
    ]
    return sorted(found, key=lambda i: (state.processes[i].arrival_time, i))
