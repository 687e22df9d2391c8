"""Core dataclasses for the scheduling system."""

from dataclasses import dataclass, field
from datetime import date

from devtimeline.models import Developer, Leave, OnCall, Role, Task


def _default_str_list() -> list[str]:
    return []


@dataclass
class ScheduleInputs:
    """Everything one scheduling run consumes, freshly loaded for that run."""

    tasks: list[Task]
    developers: list[Developer]
    roles: dict[str, Role]
    oncalls: list[OnCall] = field(default_factory=list)
    leaves: list[Leave] = field(default_factory=list)


@dataclass
class SchedulingResult:
    """Final state of a run.

    ``tasks`` holds the scheduled tasks in priority order with their
    simulation state; tasks dropped for lack of a skilled developer are only
    listed by name in ``dropped_tasks``. ``completed`` is False when the run
    stopped at its iteration bound with work outstanding.
    """

    tasks: list[Task]
    oncalls: list[OnCall]
    leaves: list[Leave]
    start_date: date
    end_date: date
    iterations: int
    completed: bool
    dropped_tasks: list[str] = field(default_factory=_default_str_list)
    warnings: list[str] = field(default_factory=_default_str_list)

    @property
    def incomplete_tasks(self) -> list[Task]:
        return [task for task in self.tasks if not task.is_completed]
