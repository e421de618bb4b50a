import pytest

from schedsim.algorithms import (
    fcfs_metrics,
    rr_metrics,
    run_algorithm,
    schedule_fcfs,
    schedule_rr,
    schedule_sjf,
    sjf_metrics,
)
from schedsim.models import Metrics, Process


def _procs():
    return [
        Process("P1", arrival_time=0, burst_time=5),
        Process("P2", arrival_time=1, burst_time=3),
        Process("P3", arrival_time=2, burst_time=8),
    ]


def _textbook():
    return [
        Process("P0", arrival_time=0, burst_time=8),
        Process("P1", arrival_time=1, burst_time=4),
        Process("P2", arrival_time=2, burst_time=9),
        Process("P3", arrival_time=3, burst_time=5),
    ]


def _rr_procs():
    return [
        Process("P0", arrival_time=0, burst_time=5),
        Process("P1", arrival_time=1, burst_time=3),
        Process("P2", arrival_time=2, burst_time=1),
    ]


def test_fcfs_order():
    res = schedule_fcfs(_procs())
    assert [s.pid for s in res.timeline] == ["P1", "P2", "P3"]
    assert res.processes[0].waiting_time == 0
    assert res.processes[1].waiting_time == 4
    assert res.processes[2].waiting_time == 6


def test_fcfs_two_processes():
    res = schedule_fcfs([Process("P0", 0, 5), Process("P1", 1, 3)])
    p0, p1 = res.processes
    assert (p0.start_time, p0.completion_time) == (0, 5)
    assert (p1.start_time, p1.completion_time) == (5, 8)
    assert res.metrics.avg_waiting == 2.0


def test_fcfs_sorts_by_arrival_and_skips_idle_gap():
    res = schedule_fcfs([Process("late", 10, 2), Process("early", 0, 3)])
    assert [p.pid for p in res.processes] == ["early", "late"]
    assert res.by_pid("late").start_time == 10
    assert res.by_pid("late").completion_time == 12
    assert res.system.cpu_busy_time == 5
    assert res.system.makespan == 12


def test_fcfs_equal_arrivals_keep_input_order():
    res = schedule_fcfs([Process("B", 0, 4), Process("A", 0, 1), Process("C", 0, 2)])
    assert [s.pid for s in res.timeline] == ["B", "A", "C"]


def test_sjf_order():
    res = schedule_sjf(_procs())
    assert [s.pid for s in res.timeline] == ["P1", "P2", "P3"]


def test_sjf_textbook_batch():
    res = schedule_sjf(_textbook())
    assert [s.pid for s in res.timeline] == ["P0", "P1", "P3", "P2"]
    assert res.by_pid("P3").start_time == 12
    assert res.by_pid("P2").completion_time == 26
    # Non-preemptive: P0 holds the CPU until 8. 6.5 would need preemption.
    assert res.metrics.avg_waiting == pytest.approx(7.75)


def test_sjf_tie_goes_to_earlier_process():
    procs = [Process("X", 0, 6), Process("B", 2, 3), Process("A", 1, 3)]
    res = schedule_sjf(procs)
    # At t=6 both A and B are ready with burst 3; A arrived first.
    assert [s.pid for s in res.timeline] == ["X", "A", "B"]


def test_sjf_jumps_to_next_arrival_when_idle():
    res = schedule_sjf([Process("A", 5, 2), Process("B", 20, 1)])
    assert res.by_pid("A").start_time == 5
    assert res.by_pid("B").start_time == 20
    assert res.metrics.avg_waiting == 0.0


def test_rr_quantum_2():
    res = schedule_rr(_procs(), quantum=2)
    assert {s.pid for s in res.timeline} == {"P1", "P2", "P3"}
    assert sum(p.burst_time for p in _procs()) == res.system.cpu_busy_time


def test_rr_preempts_and_orders_arrivals():
    res = schedule_rr(_rr_procs(), quantum=2)
    assert [(s.pid, s.start_time, s.end_time) for s in res.timeline] == [
        ("P0", 0, 2),
        ("P1", 2, 4),
        ("P2", 4, 5),
        ("P0", 5, 7),
        ("P1", 7, 8),
        ("P0", 8, 9),
    ]
    assert [p.completion_time for p in res.processes] == [9, 8, 5]
    assert [p.start_time for p in res.processes] == [0, 2, 4]
    assert res.system.cpu_busy_time == 9
    assert res.metrics.avg_response == pytest.approx(1.0)
    assert res.metrics.avg_waiting == pytest.approx(10 / 3)


def test_rr_idle_cpu_until_first_arrival():
    res = schedule_rr([Process("A", 3, 2)], quantum=4)
    p = res.processes[0]
    assert (p.start_time, p.completion_time) == (3, 5)


def test_rr_large_quantum_matches_fcfs():
    procs = _procs()
    rr = schedule_rr(procs, quantum=100)
    fcfs = schedule_fcfs(procs)
    assert rr.metrics == fcfs.metrics


def test_rr_empty_batch_returns_zero_metrics():
    res = schedule_rr([], quantum=3)
    assert res.metrics == Metrics(0.0, 0.0, 0.0)
    assert res.processes == []
    assert res.system.makespan == 0


@pytest.mark.parametrize("quantum", [None, 0, -1])
def test_rr_rejects_non_positive_quantum(quantum):
    with pytest.raises(ValueError):
        schedule_rr(_procs(), quantum=quantum)


@pytest.mark.parametrize("schedule", [schedule_fcfs, schedule_sjf])
def test_non_preemptive_empty_batch_is_rejected(schedule):
    with pytest.raises(ValueError):
        schedule([])


@pytest.mark.parametrize(
    "run",
    [fcfs_metrics, sjf_metrics, lambda procs: rr_metrics(procs, time_quantum=2)],
)
def test_single_process(run):
    m = run([Process("solo", 0, 1)])
    assert m.avg_waiting == 0.0
    assert m.avg_response == 0.0
    assert m.avg_turnaround == 1.0


@pytest.mark.parametrize("name", ["fcfs", "sjf", "rr"])
def test_schedule_invariants(name):
    procs = _textbook() + [Process("P4", 30, 2), Process("P5", 30, 7)]
    res = run_algorithm(name, procs, quantum=3)

    assert res.system.cpu_busy_time == sum(p.burst_time for p in procs)
    for p in res.processes:
        assert p.completion_time >= p.start_time >= p.arrival_time
    if name == "rr":
        assert all(s.length <= 3 for s in res.timeline)
        for p in res.processes:
            assert sum(s.length for s in res.timeline if s.pid == p.pid) == p.burst_time
    else:
        intervals = sorted((p.start_time, p.completion_time) for p in res.processes)
        for (_, end), (start, _) in zip(intervals, intervals[1:]):
            assert end <= start
        for p in res.processes:
            assert p.completion_time - p.start_time == p.burst_time


def test_schedulers_do_not_mutate_input():
    procs = _textbook()
    before = list(procs)
    for name in ("fcfs", "sjf", "rr"):
        run_algorithm(name, procs, quantum=2)
    assert procs == before


def test_run_algorithm_rejects_unknown_name():
    with pytest.raises(ValueError, match="Unknown algorithm"):
        run_algorithm("lottery", _procs())


def test_run_algorithm_is_case_insensitive():
    assert run_algorithm("FCFS", _procs()).algorithm == "FCFS"


def test_sjf_equal_arrival_and_burst_keep_input_order():
    res = schedule_sjf([Process("X", 0, 4), Process("B", 1, 2), Process("A", 1, 2)])
    assert [s.pid for s in res.timeline] == ["X", "B", "A"]


@pytest.mark.parametrize(
    "procs, message",
    [
        ([Process("Z", 0, 0)], "positive burst_time"),
        ([Process("N", -1, 2)], "negative arrival_time"),
        ([Process("F", 0.5, 2)], "integer arrival_time"),
        ([Process("D", 0, 2), Process("D", 1, 2)], "Duplicate pid"),
    ],
)
def test_rr_rejects_malformed_batch(procs, message):
    with pytest.raises(ValueError, match=message):
        schedule_rr(procs, quantum=2)
    with pytest.raises(ValueError, match=message):
        rr_metrics(procs, time_quantum=2)
