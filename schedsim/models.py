from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:
    from .algorithms import Algorithm

IDLE = "IDLE"


@dataclass(frozen=True)
class ProcessSpec:
    """
    Input descriptor for one process, as supplied by a workload.
    """

    pid: str
    arrival_time: int
    burst_time: int
    priority: int = 1


@dataclass
class Process:
    """
    Per-run process record. The engine mutates it in place, so every
    simulation run builds its own copies with ``from_spec``.
    """

    pid: str
    arrival_time: int
    burst_time: int
    priority: int = 1
    remaining_time: int = 0
    completion_time: Optional[int] = None
    turnaround_time: Optional[int] = None
    waiting_time: Optional[int] = None
    response_time: Optional[int] = None
    queue_level: int = 0

    @classmethod
    def from_spec(cls, spec: ProcessSpec) -> "Process":
        return cls(
            pid=spec.pid,
            arrival_time=spec.arrival_time,
            burst_time=spec.burst_time,
            priority=spec.priority,
            remaining_time=spec.burst_time,
        )

    @property
    def is_complete(self) -> bool:
        return self.remaining_time == 0


@dataclass(frozen=True)
class ExecutionInterval:
    """
    One half-open slice [start, end) of the Gantt chart. ``pid`` is
    ``IDLE`` when the CPU had nothing eligible to run.
    """

    pid: str
    start: int
    end: int
    queue_level: Optional[int] = None

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def is_idle(self) -> bool:
        return self.pid == IDLE


@dataclass
class SimulationMetrics:
    avg_turnaround: float
    avg_waiting: float
    avg_response: float
    total_time: int
    cpu_busy_time: int = 0
    idle_time: int = 0
    throughput: float = 0.0
    cpu_utilization: float = 0.0


@dataclass
class SimulationResult:
    algorithm: "Algorithm"
    quantum: Optional[int] = None
    quanta: Optional[Tuple[int, ...]] = None
    timeline: List[ExecutionInterval] = field(default_factory=list)
    processes: List[Process] = field(default_factory=list)
    metrics: Optional[SimulationMetrics] = None
