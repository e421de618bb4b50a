from __future__ import annotations

from typing import Dict, Iterator, List, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _walk(slices: List[ScheduledSlice]) -> Iterator[Tuple[int, ScheduledSlice]]:
    """Yield (idle gap before slice, slice) in time order."""
    last_time = 0
    for sl in sorted(slices, key=lambda s: (s.start_time, s.end_time)):
        yield max(0, sl.start_time - last_time), sl
        last_time = sl.end_time


def _time_marks(slices: List[ScheduledSlice]) -> str:
    marks = "0"
    for gap, sl in _walk(slices):
        if gap:
            marks += f"{sl.start_time:>3}"
        marks += f"{sl.end_time:>3}"
    return marks


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart: '=' for CPU time, '.' for idle time.
    """
    if not slices:
        return "(no execution)"

    line = "|"
    labels = ""
    for gap, sl in _walk(slices):
        line += "." * gap
        labels += " " * gap
        width = max(1, sl.length)
        line += "=" * width
        labels += sl.pid[:width].ljust(width)
    line += "|"

    return "\n".join(["Gantt Chart:", line, labels, _time_marks(slices)])


def build_rich_gantt(slices: List[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        return Panel("No execution", title="Gantt Chart"), ""

    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = COLORS[len(pid_to_color) % len(COLORS)]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    for gap, sl in _walk(slices):
        if gap:
            timeline.append(" " * gap)
            labels.append(" " * gap)
        width = max(1, sl.length)
        timeline.append(" " * width, style=f"on {pid_color(sl.pid)}")
        labels.append(sl.pid[:width].ljust(width), style="bold")

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    return Panel.fit(table, title="Gantt Chart"), _time_marks(slices)
