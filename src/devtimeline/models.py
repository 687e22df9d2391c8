"""Data models for devtimeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

# Stand-in for an unparseable calendar date in lenient mode
ZERO_DATE = date.min

ON_CALL_LABEL = "On-Call Duty"
LEAVE_LABEL = "Leave"


@dataclass
class Task:
    """A unit of work plus the simulation state the engine attaches to it.

    ``effort`` is already adjusted for parallelism. ``start_time`` stays None
    until a developer is first assigned; ``end_time`` is the projected
    completion date and is revised whenever more developers join.
    """

    name: str
    task_type: str
    priority: int
    parallel_factor: int
    effort: float
    dependencies: list[str] = field(default_factory=list)

    assigned_devs: list[Developer] = field(default_factory=list)
    dev_start_times: dict[str, date] = field(default_factory=dict)
    start_time: date | None = None
    end_time: date | None = None
    is_completed: bool = False

    @property
    def is_started(self) -> bool:
        return self.start_time is not None

    @property
    def open_slots(self) -> int:
        return max(self.parallel_factor - len(self.assigned_devs), 0)

    def assign(self, developer: Developer, on: date) -> None:
        """Add a developer to this task starting on the given date."""
        if self.open_slots == 0:
            raise ValueError(f"Task {self.name} already has {self.parallel_factor} developers")
        self.assigned_devs.append(developer)
        self.dev_start_times[developer.name] = on

    def mark_completed(self) -> None:
        self.is_completed = True


@dataclass
class Developer:
    """A developer who can work on tasks whose type is in ``task_types``."""

    name: str
    role: str
    task_types: list[str] = field(default_factory=list)
    next_free_time: date | None = None

    def can_work_on(self, task_type: str) -> bool:
        return task_type in self.task_types


@dataclass(frozen=True)
class Role:
    """Fraction of a nominal workday a developer in this role contributes."""

    name: str
    availability_percent: float


@dataclass(frozen=True)
class CalendarPeriod:
    """An inclusive date range during which a developer cannot work."""

    dev_name: str
    start_time: date
    end_time: date

    label = ""

    def contains(self, day: date) -> bool:
        return self.start_time <= day <= self.end_time


@dataclass(frozen=True)
class OnCall(CalendarPeriod):
    """An on-call rotation."""

    label = ON_CALL_LABEL


@dataclass(frozen=True)
class Leave(CalendarPeriod):
    """Planned leave."""

    label = LEAVE_LABEL
