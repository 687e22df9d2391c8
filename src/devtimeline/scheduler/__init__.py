"""Scheduler package - day-stepping developer/task scheduling.

Components:
- AvailabilityOracle: may a developer take a task on a given day
- EffortModel: adjusted effort, daily progress and end-date projection
- SchedulingEngine: the greedy workday simulation
- SchedulingService: cycle check followed by an engine run
"""

from .availability import AvailabilityOracle
from .calendar import add_workdays, is_weekend
from .config import CompanionConfig, EffortConfig, SchedulingConfig
from .core import ScheduleInputs, SchedulingResult
from .effort import EffortModel, round_half_up
from .engine import SchedulingEngine
from .service import SchedulingService

__all__ = [
    # Core dataclasses
    "ScheduleInputs",
    "SchedulingResult",
    # Configuration
    "SchedulingConfig",
    "EffortConfig",
    "CompanionConfig",
    # Components
    "AvailabilityOracle",
    "EffortModel",
    "SchedulingEngine",
    "SchedulingService",
    # Helpers
    "add_workdays",
    "is_weekend",
    "round_half_up",
]
