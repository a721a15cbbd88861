from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by schedsim."""


class InvalidInputError(SchedulerError, ValueError):
    """A workload or scheduling parameter was rejected before simulation."""


class UnknownAlgorithmError(SchedulerError, ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown or unimplemented algorithm '{name}'")
        self.name = name


class SimulationInvariantError(SchedulerError, AssertionError):
    """
    The engine broke one of its own guarantees (for example a run ended
    with processes still outstanding). This is a bug, not a user error.
    """
