from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from .metrics import compute_metrics, compute_system_metrics
from .models import Metrics, Process, ProcessMetrics, ScheduleResult, ScheduledSlice
from .ready_queue import ReadyQueue
from .workload_io import validate_workload

logger = logging.getLogger(__name__)


def _by_arrival(processes: Sequence[Process]) -> List[Process]:
    # sorted() is stable, so equal arrivals keep their input order.
    return sorted(processes, key=lambda p: p.arrival_time)


def _finish(
    algorithm: str,
    quantum: Optional[int],
    metrics: List[ProcessMetrics],
    timeline: List[ScheduledSlice],
) -> ScheduleResult:
    result = ScheduleResult(
        algorithm=algorithm,
        quantum=quantum,
        processes=metrics,
        timeline=timeline,
        metrics=compute_metrics(metrics),
    )
    compute_system_metrics(result)
    logger.info(
        "%s finished %d processes at t=%d (avg waiting %.2f)",
        algorithm,
        len(metrics),
        result.system.makespan,
        result.metrics.avg_waiting,
    )
    return result


def schedule_fcfs(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Processes with equal arrival times run in input order.
    """
    time = 0
    timeline: List[ScheduledSlice] = []
    metrics: List[ProcessMetrics] = []

    for p in _by_arrival(processes):
        if time < p.arrival_time:
            logger.debug("t=%d: CPU idle until %d", time, p.arrival_time)
            time = p.arrival_time

        start_time = time
        time += p.burst_time

        logger.debug("t=%d: dispatch %s, runs until %d", start_time, p.pid, time)
        timeline.append(ScheduledSlice(pid=p.pid, start_time=start_time, end_time=time))
        metrics.append(
            ProcessMetrics(
                pid=p.pid,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                start_time=start_time,
                completion_time=time,
            )
        )

    return _finish("FCFS", quantum, metrics, timeline)


def schedule_sjf(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time. Ties go to the
    process that comes first in arrival order (then input order). When nothing
    has arrived yet, time jumps straight to the next arrival.
    """
    ordered = _by_arrival(processes)
    done = [False] * len(ordered)
    finished: Dict[int, ProcessMetrics] = {}

    time = 0
    timeline: List[ScheduledSlice] = []

    while len(finished) < len(ordered):
        shortest: Optional[int] = None
        for i, p in enumerate(ordered):
            if done[i] or p.arrival_time > time:
                continue
            if shortest is None or p.burst_time < ordered[shortest].burst_time:
                shortest = i

        if shortest is None:
            next_arrival = min(p.arrival_time for i, p in enumerate(ordered) if not done[i])
            logger.debug("t=%d: CPU idle until %d", time, next_arrival)
            time = next_arrival
            continue

        p = ordered[shortest]
        start_time = time
        time += p.burst_time

        logger.debug("t=%d: dispatch %s (burst %d), runs until %d", start_time, p.pid, p.burst_time, time)
        timeline.append(ScheduledSlice(pid=p.pid, start_time=start_time, end_time=time))
        finished[shortest] = ProcessMetrics(
            pid=p.pid,
            arrival_time=p.arrival_time,
            burst_time=p.burst_time,
            start_time=start_time,
            completion_time=time,
        )
        done[shortest] = True

    metrics = [finished[i] for i in range(len(ordered))]
    return _finish("SJF (non-preemptive)", quantum, metrics, timeline)


def schedule_rr(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    The simulation advances one time unit per step. Each step, in order:

    1. admit processes arriving exactly now (ascending input index), skipping
       any that are already running or queued;
    2. charge one unit to the running process, completing it or, once its
       quantum is used up, sending it to the tail of the ready queue;
    3. dispatch the head of the ready queue if the CPU is free;
    4. advance the clock unless every process has completed.

    Because admission happens before preemption, a process arriving at the
    same instant a quantum expires is queued ahead of the preempted one.
    """
    if quantum is None or quantum <= 0:
        raise ValueError("Round Robin requires a positive quantum (use --quantum)")
    validate_workload(processes)

    n = len(processes)
    if n == 0:
        logger.info("Round Robin called with an empty batch")
        result = ScheduleResult(algorithm="Round Robin", quantum=quantum, metrics=Metrics())
        compute_system_metrics(result)
        return result

    remaining = [p.burst_time for p in processes]
    first_dispatch: List[Optional[int]] = [None] * n
    completion: List[Optional[int]] = [None] * n
    ready = ReadyQueue(capacity=n)
    timeline: List[ScheduledSlice] = []

    time = 0
    completed = 0
    running: Optional[int] = None
    quantum_used = 0
    slice_start = 0

    while True:
        for i, p in enumerate(processes):
            if completion[i] is None and p.arrival_time == time and i != running and i not in ready:
                logger.debug("t=%d: %s arrives", time, p.pid)
                ready.push(i)

        if running is not None:
            idx = running
            remaining[idx] -= 1
            quantum_used += 1

            if remaining[idx] == 0:
                logger.debug("t=%d: %s completes", time, processes[idx].pid)
                timeline.append(ScheduledSlice(pid=processes[idx].pid, start_time=slice_start, end_time=time))
                completion[idx] = time
                completed += 1
                running = None
                quantum_used = 0
            elif quantum_used == quantum:
                logger.debug("t=%d: %s preempted, %d left", time, processes[idx].pid, remaining[idx])
                timeline.append(ScheduledSlice(pid=processes[idx].pid, start_time=slice_start, end_time=time))
                ready.push(idx)
                running = None
                quantum_used = 0

        if running is None and ready:
            running = ready.pop()
            quantum_used = 0
            slice_start = time
            if first_dispatch[running] is None:
                first_dispatch[running] = time
            logger.debug("t=%d: dispatch %s", time, processes[running].pid)

        if completed < n:
            time += 1
        else:
            break

    metrics = [
        ProcessMetrics(
            pid=p.pid,
            arrival_time=p.arrival_time,
            burst_time=p.burst_time,
            start_time=first_dispatch[i],
            completion_time=completion[i],
        )
        for i, p in enumerate(processes)
    ]
    return _finish("Round Robin", quantum, metrics, timeline)


def fcfs_metrics(processes: Sequence[Process]) -> Metrics:
    return schedule_fcfs(processes).metrics


def sjf_metrics(processes: Sequence[Process]) -> Metrics:
    return schedule_sjf(processes).metrics


def rr_metrics(processes: Sequence[Process], time_quantum: int) -> Metrics:
    return schedule_rr(processes, quantum=time_quantum).metrics


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "rr": schedule_rr,
}

QUANTUM_ALGORITHMS = {"rr"}


def run_algorithm(name: str, processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is only used by round-robin.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    return func(processes, quantum=quantum)
