from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List

from .models import Process

logger = logging.getLogger(__name__)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    Entries are validated here so the schedulers only ever see well-formed
    batches: unique pids, non-negative arrival times, positive bursts.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    validate_workload(processes)
    logger.info("Loaded %d processes from %s", len(processes), path)
    return processes


def validate_workload(processes: List[Process]) -> None:
    seen: set[str] = set()
    for p in processes:
        if p.pid in seen:
            raise ValueError(f"Duplicate pid in workload: {p.pid!r}")
        seen.add(p.pid)
        if not isinstance(p.arrival_time, int) or not isinstance(p.burst_time, int):
            raise ValueError(f"Process {p.pid!r} needs integer arrival_time and burst_time")
        if p.arrival_time < 0:
            raise ValueError(f"Process {p.pid!r} has negative arrival_time {p.arrival_time}")
        if p.burst_time <= 0:
            raise ValueError(f"Process {p.pid!r} needs a positive burst_time, got {p.burst_time}")


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _process_from_mapping(mapping) -> Process:
    try:
        pid = str(mapping["pid"])
        arrival_time = int(mapping["arrival_time"])
        burst_time = int(mapping["burst_time"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc

    return Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time)
