from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    pid: str
    arrival_time: int
    burst_time: int


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: str
    start_time: int
    end_time: int

    @property
    def length(self) -> int:
        return self.end_time - self.start_time


@dataclass
class ProcessMetrics:
    pid: str
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int

    @property
    def turnaround_time(self) -> int:
        return self.completion_time - self.arrival_time

    @property
    def waiting_time(self) -> int:
        return self.turnaround_time - self.burst_time

    @property
    def response_time(self) -> int:
        return self.start_time - self.arrival_time


@dataclass(frozen=True)
class Metrics:
    avg_turnaround: float = 0.0
    avg_waiting: float = 0.0
    avg_response: float = 0.0


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    metrics: Metrics = field(default_factory=Metrics)
    system: Optional[SystemMetrics] = None

    def by_pid(self, pid: str) -> ProcessMetrics:
        for p in self.processes:
            if p.pid == pid:
                return p
        raise KeyError(pid)
