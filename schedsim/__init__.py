"""
schedsim package.

Simulates FCFS, non-preemptive SJF and Round Robin CPU scheduling over a
batch of processes and reports turnaround, waiting and response averages.
"""

from .algorithms import (
    ALGORITHMS,
    fcfs_metrics,
    rr_metrics,
    run_algorithm,
    schedule_fcfs,
    schedule_rr,
    schedule_sjf,
    sjf_metrics,
)
from .metrics import compute_metrics
from .models import Metrics, Process, ProcessMetrics, ScheduleResult

__all__ = [
    "ALGORITHMS",
    "Metrics",
    "Process",
    "ProcessMetrics",
    "ScheduleResult",
    "compute_metrics",
    "fcfs_metrics",
    "rr_metrics",
    "run_algorithm",
    "schedule_fcfs",
    "schedule_rr",
    "schedule_sjf",
    "sjf_metrics",
]
