"""Pytest configuration and fixtures for devtimeline tests."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date
from pathlib import Path
from typing import Any

import pytest

from devtimeline.logger import reset_logger
from devtimeline.models import Developer, Role, Task
from devtimeline.scheduler import SchedulingConfig, SchedulingEngine, SchedulingResult

MONDAY = date(2025, 1, 6)


@pytest.fixture(autouse=True)
def quiet_logger() -> None:
    """Reset logger handlers and level before each test for isolation."""
    reset_logger()


@pytest.fixture
def examples_dir() -> Path:
    return Path(__file__).resolve().parent.parent / "examples"


@pytest.fixture
def roles() -> dict[str, Role]:
    return {
        "Senior": Role("Senior", 1.0),
        "Junior": Role("Junior", 0.5),
    }


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """Factory for tasks with already-adjusted effort."""

    def _make(  # noqa: PLR0913 - mirrors Task fields
        name: str,
        *,
        task_type: str = "Backend",
        priority: int = 1,
        parallel_factor: int = 1,
        effort: float = 1.0,
        dependencies: Iterable[str] = (),
    ) -> Task:
        return Task(
            name=name,
            task_type=task_type,
            priority=priority,
            parallel_factor=parallel_factor,
            effort=effort,
            dependencies=list(dependencies),
        )

    return _make


@pytest.fixture
def make_dev() -> Callable[..., Developer]:
    """Factory for developers (Senior backend developers by default)."""

    def _make(name: str, *, role: str = "Senior", task_types: Iterable[str] = ("Backend",)) -> Developer:
        return Developer(name=name, role=role, task_types=list(task_types))

    return _make


@pytest.fixture
def run_schedule(roles: dict[str, Role]) -> Callable[..., SchedulingResult]:
    """Run the engine over freshly built inputs, starting on a Monday by default."""

    def _run(  # noqa: PLR0913 - mirrors SchedulingEngine signature
        tasks: list[Task],
        developers: list[Developer],
        *,
        start: date = MONDAY,
        oncalls: Iterable[Any] = (),
        leaves: Iterable[Any] = (),
        config: SchedulingConfig | None = None,
        role_table: dict[str, Role] | None = None,
    ) -> SchedulingResult:
        engine = SchedulingEngine(
            tasks,
            developers,
            role_table if role_table is not None else roles,
            oncalls,
            leaves,
            config=config,
        )
        return engine.schedule(start)

    return _run


def write_csv(path: Path, *lines: str) -> Path:
    """Write CSV lines (header first) and return the path."""
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def csv_writer(tmp_path: Path) -> Callable[..., Path]:
    """Write a named CSV file into the test's temporary directory."""

    def _write(filename: str, *lines: str) -> Path:
        return write_csv(tmp_path / filename, *lines)

    return _write
