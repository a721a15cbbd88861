"""
CPU scheduling simulator.

Simulates FIFO, SJF, SRTF, Round-Robin and MLFQ scheduling over a fixed
set of processes and reports a Gantt timeline plus timing metrics.
"""

from .algorithms import (
    Algorithm,
    run_algorithm,
    schedule_fifo,
    schedule_mlfq,
    schedule_rr,
    schedule_sjf,
    schedule_srtf,
)
from .config import SimulationConfig, mlfq_quanta
from .exceptions import (
    InvalidInputError,
    SchedulerError,
    SimulationInvariantError,
    UnknownAlgorithmError,
)
from .models import IDLE, ExecutionInterval, Process, ProcessSpec, SimulationMetrics, SimulationResult

__all__ = [
    "Algorithm",
    "ExecutionInterval",
    "IDLE",
    "InvalidInputError",
    "Process",
    "ProcessSpec",
    "SchedulerError",
    "SimulationConfig",
    "SimulationInvariantError",
    "SimulationMetrics",
    "SimulationResult",
    "UnknownAlgorithmError",
    "mlfq_quanta",
    "run_algorithm",
    "schedule_fifo",
    "schedule_mlfq",
    "schedule_rr",
    "schedule_sjf",
    "schedule_srtf",
]
