"""Day-stepping greedy scheduling engine."""

from collections.abc import Iterable, Mapping
from datetime import date

from devtimeline.graph import DependencyGraph
from devtimeline.logger import get_logger
from devtimeline.models import Developer, Leave, OnCall, Role, Task

from .availability import AvailabilityOracle
from .calendar import add_workdays, days_between
from .config import SchedulingConfig
from .core import SchedulingResult
from .effort import EffortModel

logger = get_logger()


class SchedulingEngine:
    """Simulates the project one workday at a time.

    Each simulated day walks the tasks in priority order. A task whose
    dependencies are all complete takes developers who are free that day,
    up to its parallel factor, and its completion date is re-projected
    whenever someone joins. Developers are reserved through the projected
    completion date the moment they join, so nobody is booked on two tasks
    at once. A task is complete on the first simulated day that is not
    before its projected end and on which at least one developer able to
    work on it is available. If a higher-priority task claims that developer
    first, completion waits, and so do the task's dependents.

    The engine mutates the Task and Developer objects it is given and is
    single-shot: schedule each freshly loaded set of inputs exactly once.
    The dependency graph must already have been checked for cycles.
    """

    def __init__(  # noqa: PLR0913 - mirrors the five input tables
        self,
        tasks: Iterable[Task],
        developers: Iterable[Developer],
        roles: Mapping[str, Role],
        oncalls: Iterable[OnCall] = (),
        leaves: Iterable[Leave] = (),
        *,
        config: SchedulingConfig | None = None,
    ):
        self.tasks = list(tasks)
        self.developers = list(developers)
        self.roles = dict(roles)
        self.oncalls = list(oncalls)
        self.leaves = list(leaves)
        self.config = config or SchedulingConfig()

        self.oracle = AvailabilityOracle(self.developers, self.oncalls, self.leaves)
        self.effort_model = EffortModel(self.roles, self.oracle, self.config)
        # Indexed over every loaded task so dependencies on dropped tasks
        # still resolve (and never complete)
        self.graph = DependencyGraph(self.tasks)

        self._warnings: list[str] = []
        self._released: set[str] = set()

    def schedule(self, start_date: date) -> SchedulingResult:
        """Run the simulation from ``start_date`` until every task completes.

        Stops early, with the partial schedule, after ``max_run_iterations``
        day advances.
        """
        if any(task.is_started for task in self.tasks):
            raise ValueError("Tasks already carry schedule state; load fresh inputs for each run")

        self._warnings = []
        self._released = set()
        scheduled, dropped = self._initialize(start_date)

        current = start_date
        max_iterations = self.config.max_run_iterations
        iterations = 0
        completed = False

        while iterations < max_iterations:
            logger.changes(f"Day: {current}")
            if self._process_day(scheduled, current):
                completed = True
                break
            current = add_workdays(current, 1)
            iterations += 1

        if not completed:
            pending = [task.name for task in scheduled if not task.is_completed]
            message = (
                f"Scheduling stopped after {iterations} iterations at {current} with "
                f"{len(pending)} incomplete task(s): {', '.join(pending)}"
            )
            logger.warning(message)
            self._warnings.append(message)

        return SchedulingResult(
            tasks=scheduled,
            oncalls=self.oncalls,
            leaves=self.leaves,
            start_date=start_date,
            end_date=current,
            iterations=iterations,
            completed=completed,
            dropped_tasks=dropped,
            warnings=list(self._warnings),
        )

    def _initialize(self, start_date: date) -> tuple[list[Task], list[str]]:
        """Drop unstaffable tasks, order by priority, free every developer."""
        scheduled: list[Task] = []
        dropped: list[str] = []
        for task in self.tasks:
            if self.oracle.has_matching_developer(task):
                scheduled.append(task)
            else:
                dropped.append(task.name)
                logger.checks(f"Dropping task {task.name}: nobody works on {task.task_type}")

        # sort() is stable, so equal priorities keep their input order
        scheduled.sort(key=lambda task: task.priority)

        for dev in self.developers:
            dev.next_free_time = start_date

        return (scheduled, dropped)

    def _process_day(self, scheduled: list[Task], current: date) -> bool:
        """Advance every task by one day; return True once all are complete."""
        self._sweep_completed(scheduled)

        all_completed = True
        for task in scheduled:
            if not self._process_task(task, current):
                all_completed = False
        return all_completed

    def _sweep_completed(self, scheduled: list[Task]) -> None:
        # Developers were already reserved only up to end_time, so completed
        # tasks need no release step; this just reports them once.
        for task in scheduled:
            if task.is_completed and task.assigned_devs and task.name not in self._released:
                self._released.add(task.name)
                for dev in task.assigned_devs:
                    logger.debug(f"  Released {dev.name} from {task.name} at {task.end_time}")

    def _dependencies_completed(self, task: Task) -> bool:
        for dep_name in task.dependencies:
            dep_index = self.graph.index.get(dep_name)
            if dep_index is None:
                if self.config.strict:
                    logger.checks(f"  Skipping {task.name}: unknown dependency {dep_name}")
                    return False
                continue
            if not self.tasks[dep_index].is_completed:
                logger.checks(f"  Skipping {task.name}: waiting on {dep_name}")
                return False
        return True

    def _process_task(self, task: Task, current: date) -> bool:
        """Assign developers to a ready task and check whether it is done."""
        if task.is_completed:
            return True

        if not self._dependencies_completed(task):
            return False

        logger.checks(
            f"  Considering task {task.name} (priority={task.priority}, "
            f"assigned={len(task.assigned_devs)}/{task.parallel_factor})"
        )

        # The task's own developers count here: they become free again on its end date
        available = self.oracle.find_available(task, current)
        if not available:
            logger.checks(f"  Skipping {task.name}: no developer available")
            return False

        assigned = {dev.name for dev in task.assigned_devs}
        newcomers = [dev for dev in available if dev.name not in assigned]
        if newcomers:
            self._assign_developers(task, newcomers, current)

        if task.end_time is not None and current >= task.end_time:
            task.mark_completed()
            logger.changes(f"  Completed task {task.name} on {current}")

        return task.is_completed

    def _assign_developers(self, task: Task, available: list[Developer], current: date) -> None:
        if not task.is_started:
            task.start_time = current
            task.assigned_devs = []
            task.dev_start_times = {}
            logger.changes(f"  Started task {task.name} on {current}")

        slots = task.open_slots
        if slots == 0:
            return

        previous = list(task.assigned_devs)
        new_devs = available[:slots]
        for dev in new_devs:
            task.assign(dev, current)

        logger.changes(
            f"  Assigned {', '.join(dev.name for dev in new_devs)} to {task.name} from {current}"
        )
        self._update_end_time(task, previous, current)

    def _update_end_time(self, task: Task, previous: list[Developer], current: date) -> None:
        """Re-project completion from today and reserve the whole team until then.

        Work already done is estimated from the developers who were on the
        task before today, over the calendar days since it started.
        """
        assert task.start_time is not None
        days_worked = days_between(task.start_time, current)
        remaining = task.effort - self.effort_model.daily_progress(previous) * days_worked

        end_time, exhausted = self.effort_model.calculate_end_date(
            task.assigned_devs, current, remaining
        )
        if exhausted:
            self._warnings.append(
                f"Task '{task.name}' made no progress within "
                f"{self.config.max_projection_iterations} workdays; end date set to {end_time}"
            )

        task.end_time = end_time
        for dev in task.assigned_devs:
            dev.next_free_time = end_time

        logger.changes(
            f"  Task {task.name} now ends {end_time} "
            f"(remaining effort {remaining:.2f}, {len(task.assigned_devs)} developer(s))"
        )
