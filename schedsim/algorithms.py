from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import Deque, List, Optional, Sequence, Tuple

from .config import MLFQ_LEVELS, SimulationConfig, validate_quanta, validate_quantum
from .engine import SimulationState, arrivals_between, execute, idle, new_state
from .exceptions import UnknownAlgorithmError
from .metrics import compute_metrics
from .models import ProcessSpec, SimulationResult

logger = logging.getLogger(__name__)


class Algorithm(str, Enum):
    FIFO = "fifo"
    SJF = "sjf"
    SRTF = "srtf"
    RR = "rr"
    MLFQ = "mlfq"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, name: "str | Algorithm") -> "Algorithm":
        if isinstance(name, Algorithm):
            return name
        key = str(name).strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnknownAlgorithmError(str(name)) from None


_LABELS = {
    Algorithm.FIFO: "FIFO",
    Algorithm.SJF: "SJF (non-preemptive)",
    Algorithm.SRTF: "SRTF (preemptive)",
    Algorithm.RR: "Round Robin",
    Algorithm.MLFQ: "MLFQ",
}

_ALIASES = {
    "fcfs": "fifo",
    "round-robin": "rr",
    "roundrobin": "rr",
}


def _finish(
    state: SimulationState,
    algorithm: Algorithm,
    quantum: Optional[int] = None,
    quanta: Optional[Tuple[int, ...]] = None,
) -> SimulationResult:
    completed = state.completed_processes()
    metrics = compute_metrics(
        completed,
        total_time=state.clock,
        timeline=state.timeline,
        expected_count=len(state.processes),
    )
    return SimulationResult(
        algorithm=algorithm,
        quantum=quantum,
        quanta=quanta,
        timeline=list(state.timeline),
        processes=completed,
        metrics=metrics,
    )


def schedule_fifo(processes: Sequence[ProcessSpec]) -> SimulationResult:
    """
    First-In First-Out (non-preemptive). Processes run to completion in
    arrival order; ties keep input order.
    """
    state = new_state(processes)
    order = sorted(range(len(state.processes)), key=lambda i: state.processes[i].arrival_time)

    for i in order:
        p = state.processes[i]
        if state.clock < p.arrival_time:
            idle(state, p.arrival_time)
        execute(state, i, p.burst_time)

    return _finish(state, Algorithm.FIFO)


def schedule_sjf(processes: Sequence[ProcessSpec]) -> SimulationResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not
    yet completed, choose the one with the smallest burst time. The first
    such process in input order wins a tie. When nothing has arrived the
    clock advances one idle unit at a time.
    """
    state = new_state(processes)

    while not state.done:
        ready = state.eligible()
        if not ready:
            idle(state, state.clock + 1)
            continue

        i = min(ready, key=lambda x: state.processes[x].burst_time)
        execute(state, i, state.processes[i].remaining_time)

    return _finish(state, Algorithm.SJF)


def schedule_srtf(processes: Sequence[ProcessSpec]) -> SimulationResult:
    """
    Shortest Remaining Time First (preemptive SJF).

    The choice is remade after every time unit, so a newly arrived shorter
    job takes the CPU at the next unit boundary.
    """
    state = new_state(processes)

    while not state.done:
        ready = state.eligible()
        if not ready:
            idle(state, state.clock + 1)
            continue

        i = min(ready, key=lambda x: state.processes[x].remaining_time)
        execute(state, i, 1)

    return _finish(state, Algorithm.SRTF)


def schedule_rr(processes: Sequence[ProcessSpec], quantum: Optional[int] = None) -> SimulationResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes arriving during a slice, i.e. with arrival in
    (slice start, slice end], join the ready queue before the preempted
    process is put back at its tail.
    """
    quantum = validate_quantum(quantum)
    state = new_state(processes)

    ready: Deque[int] = deque(i for i, p in enumerate(state.processes) if p.arrival_time <= 0)

    while not state.done:
        if not ready:
            idle(state, state.clock + 1)
            ready.extend(
                i
                for i, p in enumerate(state.processes)
                if p.arrival_time == state.clock and p.remaining_time > 0
            )
            continue

        i = ready.popleft()
        slice_start = state.clock
        finished = execute(state, i, min(quantum, state.processes[i].remaining_time))

        ready.extend(arrivals_between(state, slice_start, state.clock, exclude=[*ready, i]))

        if not finished:
            ready.append(i)

    return _finish(state, Algorithm.RR, quantum=quantum)


def schedule_mlfq(processes: Sequence[ProcessSpec], quanta: Sequence[int]) -> SimulationResult:
    """
    Multi-Level Feedback Queue with four levels.

    - Every process is admitted to Q0 (highest priority).
    - The front of the highest non-empty queue runs for that level's
      quantum or until it finishes.
    - An unfinished process is demoted one level; at Q3 it goes back to
      the tail of Q3 (round robin at the bottom).
    - After each step, arrivals in (step start, step end] join Q0.
    """
    quanta = validate_quanta(quanta)
    state = new_state(processes)
    queues: List[Deque[int]] = [deque() for _ in range(MLFQ_LEVELS)]

    for i, p in enumerate(state.processes):
        p.queue_level = 0
        if p.arrival_time <= 0:
            queues[0].append(i)

    def admit(indices) -> None:
        for idx in indices:
            state.processes[idx].queue_level = 0
            queues[0].append(idx)

    while not state.done:
        level = next((lvl for lvl, q in enumerate(queues) if q), None)

        if level is None:
            idle(state, state.clock + 1)
            admit(
                i
                for i, p in enumerate(state.processes)
                if p.arrival_time == state.clock and p.remaining_time > 0
            )
            continue

        i = queues[level][0]
        p = state.processes[i]
        slice_start = state.clock
        finished = execute(state, i, min(quanta[level], p.remaining_time), queue_level=level)
        queues[level].popleft()

        if not finished:
            if level < MLFQ_LEVELS - 1:
                p.queue_level = level + 1
                logger.debug("t=%d %s demoted to Q%d", state.clock, p.pid, p.queue_level)
            queues[p.queue_level].append(i)

        queued = [idx for q in queues for idx in q]
        admit(arrivals_between(state, slice_start, state.clock, exclude=queued))

    return _finish(state, Algorithm.MLFQ, quanta=quanta)


def run_algorithm(
    name: "str | Algorithm",
    processes: Sequence[ProcessSpec],
    config: Optional[SimulationConfig] = None,
) -> SimulationResult:
    """
    Dispatch to the requested algorithm. Only Round Robin and MLFQ read
    ``config``; the others ignore it.
    """
    algorithm = Algorithm.parse(name)
    config = config or SimulationConfig()

    if algorithm is Algorithm.FIFO:
        result = schedule_fifo(processes)
    elif algorithm is Algorithm.SJF:
        result = schedule_sjf(processes)
    elif algorithm is Algorithm.SRTF:
        result = schedule_srtf(processes)
    elif algorithm is Algorithm.RR:
        result = schedule_rr(processes, quantum=config.quantum)
    else:
        result = schedule_mlfq(processes, quanta=config.effective_mlfq_quanta)

    logger.info(
        "%s: %d processes finished at t=%d",
        algorithm.label,
        len(result.processes),
        result.metrics.total_time,
    )
    return result
