"""Flatten a finished schedule into report records and timeline items."""

from __future__ import annotations

import csv
import json
from dataclasses import asdict, dataclass
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from .models import CalendarPeriod
from .scheduler.calendar import days_between

if TYPE_CHECKING:
    from .scheduler.core import SchedulingResult

CSV_HEADER = ["Task", "Start Date", "End Date", "Assigned Developers", "Effort Per Developer"]


@dataclass(frozen=True)
class ScheduleRecord:
    """One span of a developer's time: a task assignment, on-call or leave."""

    label: str
    start_date: date
    end_date: date
    developer: str
    duration_days: float

    def to_row(self) -> list[str]:
        return [
            self.label,
            self.start_date.isoformat(),
            self.end_date.isoformat(),
            self.developer,
            f"{self.duration_days:.2f}",
        ]


@dataclass(frozen=True)
class TimelineItem:
    """A timeline visualisation entry."""

    id: str
    start: str
    end: str
    content: str


def _period_record(period: CalendarPeriod) -> ScheduleRecord:
    return ScheduleRecord(
        label=period.label,
        start_date=period.start_time,
        end_date=period.end_time,
        developer=period.dev_name,
        duration_days=days_between(period.start_time, period.end_time),
    )


def build_records(result: SchedulingResult) -> list[ScheduleRecord]:
    """On-call spans, then leave spans, then one record per developer on each completed task.

    Task records start on the day the developer joined and end on the task's
    end date. Incomplete tasks are left out.
    """
    records = [_period_record(oncall) for oncall in result.oncalls]
    records.extend(_period_record(leave) for leave in result.leaves)

    for task in result.tasks:
        if not task.is_completed or task.end_time is None:
            continue
        for dev_name, dev_start in task.dev_start_times.items():
            records.append(
                ScheduleRecord(
                    label=task.name,
                    start_date=dev_start,
                    end_date=task.end_time,
                    developer=dev_name.strip(),
                    duration_days=days_between(dev_start, task.end_time),
                )
            )

    return records


def build_timeline(result: SchedulingResult) -> list[TimelineItem]:
    """Timeline items for every task with projected dates, then on-call and leave.

    Unlike the records, tasks still in progress when the run stopped are
    included with their projected end.
    """
    items: list[TimelineItem] = []
    for task in result.tasks:
        if task.start_time is None or task.end_time is None:
            continue
        for dev_name, dev_start in task.dev_start_times.items():
            items.append(
                TimelineItem(
                    id=f"task_{task.name}_{dev_name}",
                    start=dev_start.isoformat(),
                    end=task.end_time.isoformat(),
                    content=f"Task: {task.name} (Assigned to: {dev_name})",
                )
            )

    for i, oncall in enumerate(result.oncalls):
        items.append(
            TimelineItem(
                id=f"oncall_{i}",
                start=oncall.start_time.isoformat(),
                end=oncall.end_time.isoformat(),
                content=f"On-call: {oncall.dev_name}",
            )
        )

    for i, leave in enumerate(result.leaves):
        items.append(
            TimelineItem(
                id=f"leave_{i}",
                start=leave.start_time.isoformat(),
                end=leave.end_time.isoformat(),
                content=f"Leave: {leave.dev_name}",
            )
        )

    return items


def write_records_csv(records: list[ScheduleRecord], output: Path | TextIO) -> None:
    """Write records as CSV to a path or an open text stream."""
    if isinstance(output, Path):
        with output.open("w", newline="", encoding="utf-8") as f:
            write_records_csv(records, f)
        return

    writer = csv.writer(output)
    writer.writerow(CSV_HEADER)
    for record in records:
        writer.writerow(record.to_row())


def timeline_to_json(items: list[TimelineItem], indent: int | None = 2) -> str:
    return json.dumps([asdict(item) for item in items], indent=indent)
