"""High-level scheduling service."""

from datetime import date

from devtimeline.graph import DependencyGraph
from devtimeline.logger import get_logger

from .config import SchedulingConfig
from .core import ScheduleInputs, SchedulingResult
from .engine import SchedulingEngine

logger = get_logger()


class SchedulingService:
    """Validates the dependency graph, then runs the engine.

    A graph with a cycle never reaches the engine: ``schedule`` raises
    CircularDependencyError instead.
    """

    def __init__(
        self,
        inputs: ScheduleInputs,
        start_date: date | None = None,
        config: SchedulingConfig | None = None,
    ):
        """Initialize scheduling service.

        Args:
            inputs: Freshly loaded tasks, developers, roles and calendars
            start_date: First simulated day (defaults to today)
            config: Optional scheduling configuration
        """
        self.inputs = inputs
        self.start_date = start_date or date.today()  # noqa: DTZ011
        self.config = config or SchedulingConfig()

    def validate(self) -> None:
        """Raise if the task graph must not be scheduled."""
        DependencyGraph(self.inputs.tasks).validate(strict=self.config.strict)

    def schedule(self) -> SchedulingResult:
        self.validate()

        engine = SchedulingEngine(
            self.inputs.tasks,
            self.inputs.developers,
            self.inputs.roles,
            self.inputs.oncalls,
            self.inputs.leaves,
            config=self.config,
        )
        result = engine.schedule(self.start_date)

        for name in result.dropped_tasks:
            result.warnings.append(f"Task '{name}' has no developer with a matching skill - skipped")

        logger.changes(
            f"Scheduled {len(result.tasks) - len(result.incomplete_tasks)}/{len(result.tasks)} "
            f"tasks between {result.start_date} and {result.end_date}"
        )
        return result
