from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .exceptions import InvalidInputError

MLFQ_LEVELS = 4
DEFAULT_QUANTUM = 2


def mlfq_quanta(base: int) -> Tuple[int, ...]:
    """Default MLFQ ladder: q, 2q, 3q, 4q."""
    return tuple(base * (level + 1) for level in range(MLFQ_LEVELS))


def is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_quantum(quantum, what: str = "quantum") -> int:
    if not is_int(quantum) or quantum <= 0:
        raise InvalidInputError(f"{what} must be a positive integer, got {quantum!r}")
    return quantum


def validate_quanta(quanta: Sequence[int]) -> Tuple[int, ...]:
    quanta = tuple(quanta)
    if len(quanta) != MLFQ_LEVELS:
        raise InvalidInputError(f"MLFQ needs exactly {MLFQ_LEVELS} quanta, got {len(quanta)}")
    for level, q in enumerate(quanta):
        validate_quantum(q, what=f"MLFQ quantum for level {level}")
    return quanta


@dataclass
class SimulationConfig:
    """
    Algorithm parameters. ``quantum`` drives Round-Robin and, unless
    ``mlfq_quanta`` is given, the default MLFQ ladder.
    """

    quantum: int = DEFAULT_QUANTUM
    mlfq_quanta: Optional[Tuple[int, ...]] = None

    def __post_init__(self) -> None:
        validate_quantum(self.quantum)
        if self.mlfq_quanta is not None:
            self.mlfq_quanta = validate_quanta(self.mlfq_quanta)

    @property
    def effective_mlfq_quanta(self) -> Tuple[int, ...]:
        if self.mlfq_quanta is not None:
            return self.mlfq_quanta
        return mlfq_quanta(self.quantum)
