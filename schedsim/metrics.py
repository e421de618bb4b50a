from __future__ import annotations

from typing import Sequence

from .models import Metrics, ProcessMetrics, ScheduleResult, SystemMetrics


def compute_metrics(processes: Sequence[ProcessMetrics]) -> Metrics:
    """
    Reduce a completed schedule into average turnaround, waiting and
    response time.

    An empty batch has no defined averages; callers must not pass one.
    """
    if not processes:
        raise ValueError("Cannot compute metrics for an empty process batch")

    n = len(processes)
    total_turnaround = sum(p.turnaround_time for p in processes)
    total_waiting = sum(p.waiting_time for p in processes)
    total_response = sum(p.response_time for p in processes)

    return Metrics(
        avg_turnaround=total_turnaround / n,
        avg_waiting=total_waiting / n,
        avg_response=total_response / n,
    )


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization given populated per-process metrics
    and timeline slices.
    """
    if not result.processes:
        system = SystemMetrics(cpu_busy_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)
        result.system = system
        return system

    makespan = max(p.completion_time for p in result.processes)
    cpu_busy_time = sum(slice_.length for slice_ in result.timeline)

    throughput = len(result.processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )
    result.system = system
    return system
