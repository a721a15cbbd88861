from __future__ import annotations

import csv
import json
import random
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional, Sequence

from .config import is_int
from .exceptions import InvalidInputError
from .models import ProcessSpec

FIELDS = ["pid", "arrival_time", "burst_time", "priority"]


def load_workload(path: str | Path) -> List[ProcessSpec]:
    """
    Load a workload from a JSON or CSV file into a list of ProcessSpec objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise InvalidInputError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def save_workload(processes: Sequence[ProcessSpec], path: str | Path) -> Path:
    """
    Write a workload in the format implied by the file suffix.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    rows = [asdict(p) for p in processes]

    if suffix == ".json":
        with path.open("w", encoding="utf-8") as f:
            json.dump(rows, f, indent=2)
            f.write("\n")
    elif suffix == ".csv":
        with path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=FIELDS)
            writer.writeheader()
            writer.writerows(rows)
    else:
        raise InvalidInputError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    return path


def generate_random_workload(count: int, seed: Optional[int] = None) -> List[ProcessSpec]:
    """
    Random workload of ``count`` processes named P1..Pn: arrivals in
    [0, 9], bursts in [1, 10], priorities in [1, 4].
    """
    if count < 1:
        raise InvalidInputError("Process count must be at least 1")

    rng = random.Random(seed)
    return [
        ProcessSpec(
            pid=f"P{i}",
            arrival_time=rng.randint(0, 9),
            burst_time=rng.randint(1, 10),
            priority=rng.randint(1, 4),
        )
        for i in range(1, count + 1)
    ]


def _load_json(path: Path) -> List[ProcessSpec]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidInputError(f"{path}: invalid JSON ({exc})") from exc

    if not isinstance(raw, list):
        raise InvalidInputError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[ProcessSpec]:
    processes: List[ProcessSpec] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _int_field(value) -> int:
    if is_int(value):
        return value
    if isinstance(value, str):
        return int(value.strip())
    raise ValueError(f"expected an integer, got {value!r}")


def _process_from_mapping(mapping) -> ProcessSpec:
    try:
        pid = str(mapping["pid"]).strip()
        arrival_time = _int_field(mapping["arrival_time"])
        burst_time = _int_field(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = _int_field(priority_val) if priority_val not in (None, "") else 1
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise InvalidInputError(f"Invalid process entry: {mapping!r}") from exc

    return ProcessSpec(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
