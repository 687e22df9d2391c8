"""CSV input loading.

Five comma-separated tables drive a run, each with a header row:

- roles.csv: Name, AvailabilityPercent
- tasks.csv: Name, TaskType, Priority, Effort, ParallelFactor, Dependencies,
  [NeedsFrontend], [NeedsQA]
- developers.csv: Name, Role, TaskTypes
- oncalls.csv / leaves.csv: DevName, StartDate, EndDate

Dependencies and TaskTypes are comma-joined lists inside a single (quoted)
field. Task effort is stored already adjusted for parallelism, and the
NeedsFrontend/NeedsQA flags expand into companion tasks right after their
parent.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import TypeVar

from .exceptions import InputError
from .logger import get_logger
from .models import ZERO_DATE, CalendarPeriod, Developer, Leave, OnCall, Role, Task
from .scheduler.config import SchedulingConfig
from .scheduler.core import ScheduleInputs
from .scheduler.effort import EffortModel

logger = get_logger()

PeriodT = TypeVar("PeriodT", bound=CalendarPeriod)

ROLES_FILE = "roles.csv"
TASKS_FILE = "tasks.csv"
DEVELOPERS_FILE = "developers.csv"
ONCALLS_FILE = "oncalls.csv"
LEAVES_FILE = "leaves.csv"


@dataclass
class InputPaths:
    """Locations of the five input tables."""

    roles: Path
    tasks: Path
    developers: Path
    oncalls: Path
    leaves: Path

    @classmethod
    def from_directory(cls, directory: Path | str) -> InputPaths:
        """Use the conventional file names inside ``directory``."""
        directory = Path(directory)
        return cls(
            roles=directory / ROLES_FILE,
            tasks=directory / TASKS_FILE,
            developers=directory / DEVELOPERS_FILE,
            oncalls=directory / ONCALLS_FILE,
            leaves=directory / LEAVES_FILE,
        )


@dataclass
class Row:
    """A data row and the line it came from, for error messages."""

    source: str
    line: int
    values: list[str]

    def where(self) -> str:
        return f"{self.source} line {self.line}"


def read_table(path: Path | str, *, min_columns: int, max_columns: int | None = None) -> list[Row]:
    """Read a CSV table, skipping the header row and blank lines.

    Raises:
        InputError: If the file is missing, has no header, or a row has the
            wrong number of columns
    """
    path = Path(path)
    max_columns = max_columns or min_columns
    if not path.exists():
        raise InputError(f"Input file not found: {path}")

    with path.open(newline="", encoding="utf-8-sig") as f:
        reader = csv.reader(f)
        try:
            header = next(reader, None)
            if header is None:
                raise InputError(f"{path.name} is empty (expected a header row)")

            rows: list[Row] = []
            for values in reader:
                if not values or all(not v.strip() for v in values):
                    continue
                row = Row(path.name, reader.line_num, values)
                if not min_columns <= len(values) <= max_columns:
                    expected = (
                        str(min_columns)
                        if min_columns == max_columns
                        else f"{min_columns}-{max_columns}"
                    )
                    raise InputError(
                        f"{row.where()}: expected {expected} columns, got {len(values)}"
                    )
                rows.append(row)
        except csv.Error as e:
            raise InputError(f"{path.name} line {reader.line_num}: {e}") from e

    return rows


def split_names(value: str) -> list[str]:
    """Split a comma-joined list, dropping blanks and duplicates (order kept)."""
    names: list[str] = []
    for part in value.split(","):
        name = part.strip()
        if name and name not in names:
            names.append(name)
    return names


def parse_int(row: Row, index: int, column: str) -> int:
    try:
        return int(row.values[index].strip())
    except ValueError:
        raise InputError(
            f"{row.where()}: invalid integer for {column}: {row.values[index]!r}"
        ) from None


def parse_float(row: Row, index: int, column: str) -> float:
    try:
        return float(row.values[index].strip())
    except ValueError:
        raise InputError(f"{row.where()}: invalid number for {column}: {row.values[index]!r}") from None


def parse_date(row: Row, index: int, column: str, *, strict: bool = False) -> date:
    """Parse a YYYY-MM-DD date.

    In lenient mode an unparseable date becomes ZERO_DATE, which never
    overlaps a real scheduling day.
    """
    raw = row.values[index].strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        if strict:
            raise InputError(f"{row.where()}: invalid date for {column}: {raw!r}") from None
        logger.warning(f"{row.where()}: invalid date for {column}: {raw!r}, using {ZERO_DATE}")
        return ZERO_DATE


def parse_flag(row: Row, index: int) -> bool:
    if len(row.values) <= index:
        return False
    return row.values[index].strip().lower() == "true"


def load_roles(path: Path | str, config: SchedulingConfig | None = None) -> dict[str, Role]:
    config = config or SchedulingConfig()
    roles: dict[str, Role] = {}
    for row in read_table(path, min_columns=2):
        name = row.values[0].strip()
        availability = parse_float(row, 1, "AvailabilityPercent")
        if not 0 < availability <= 1:
            message = f"{row.where()}: availability {availability} for role {name} is outside (0, 1]"
            if config.strict:
                raise InputError(message)
            logger.warning(message)
        roles[name] = Role(name=name, availability_percent=availability)
    return roles


def load_tasks(path: Path | str, config: SchedulingConfig | None = None) -> list[Task]:
    """Load tasks, adjusting effort and appending Frontend/QA companions."""
    config = config or SchedulingConfig()
    effort_model = EffortModel({}, config=config)
    companions = config.companions

    tasks: list[Task] = []
    for row in read_table(path, min_columns=6, max_columns=8):
        name = row.values[0].strip()
        priority = parse_int(row, 2, "Priority")
        nominal_effort = parse_float(row, 3, "Effort")
        parallel_factor = parse_int(row, 4, "ParallelFactor")
        if parallel_factor < 1:
            raise InputError(f"{row.where()}: ParallelFactor must be at least 1")
        if nominal_effort <= 0:
            raise InputError(f"{row.where()}: Effort must be positive")

        tasks.append(
            Task(
                name=name,
                task_type=row.values[1].strip(),
                priority=priority,
                parallel_factor=parallel_factor,
                effort=effort_model.adjusted_effort(nominal_effort, parallel_factor),
                dependencies=split_names(row.values[5]),
            )
        )

        needs_frontend = parse_flag(row, 6)
        needs_qa = parse_flag(row, 7)
        companion_effort = effort_model.companion_effort(nominal_effort, parallel_factor)

        frontend_name = name + companions.frontend_suffix
        if needs_frontend:
            tasks.append(
                Task(
                    name=frontend_name,
                    task_type=companions.frontend_task_type,
                    priority=priority,
                    parallel_factor=1,
                    effort=companion_effort,
                    dependencies=[name],
                )
            )

        if needs_qa:
            qa_dependencies = [name, frontend_name] if needs_frontend else [name]
            tasks.append(
                Task(
                    name=name + companions.qa_suffix,
                    task_type=companions.qa_task_type,
                    priority=priority,
                    parallel_factor=1,
                    effort=companion_effort,
                    dependencies=qa_dependencies,
                )
            )

    return tasks


def load_developers(path: Path | str) -> list[Developer]:
    return [
        Developer(
            name=row.values[0].strip(),
            role=row.values[1].strip(),
            task_types=split_names(row.values[2]),
        )
        for row in read_table(path, min_columns=3)
    ]


def _load_periods(
    path: Path | str, period_cls: type[PeriodT], config: SchedulingConfig
) -> list[PeriodT]:
    periods: list[PeriodT] = []
    for row in read_table(path, min_columns=3):
        periods.append(
            period_cls(
                dev_name=row.values[0].strip(),
                start_time=parse_date(row, 1, "StartDate", strict=config.strict),
                end_time=parse_date(row, 2, "EndDate", strict=config.strict),
            )
        )
    return periods


def load_oncalls(path: Path | str, config: SchedulingConfig | None = None) -> list[OnCall]:
    return _load_periods(path, OnCall, config or SchedulingConfig())


def load_leaves(path: Path | str, config: SchedulingConfig | None = None) -> list[Leave]:
    return _load_periods(path, Leave, config or SchedulingConfig())


def load_inputs(paths: InputPaths, config: SchedulingConfig | None = None) -> ScheduleInputs:
    """Load all five tables into fresh objects for a single run."""
    config = config or SchedulingConfig()
    inputs = ScheduleInputs(
        tasks=load_tasks(paths.tasks, config),
        developers=load_developers(paths.developers),
        roles=load_roles(paths.roles, config),
        oncalls=load_oncalls(paths.oncalls, config),
        leaves=load_leaves(paths.leaves, config),
    )
    logger.changes(
        f"Loaded {len(inputs.tasks)} tasks, {len(inputs.developers)} developers, "
        f"{len(inputs.roles)} roles, {len(inputs.oncalls)} on-call and "
        f"{len(inputs.leaves)} leave periods"
    )
    return inputs
