"""Developer availability checks."""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date

from devtimeline.logger import get_logger
from devtimeline.models import CalendarPeriod, Developer, Leave, OnCall, Task

logger = get_logger()


class AvailabilityOracle:
    """Answers whether a developer may be assigned to a task on a date.

    On-call and leave periods are indexed per developer name once, so each
    lookup only scans that developer's own periods. Weekends are not
    considered here; they only matter when effort is consumed.
    """

    def __init__(
        self,
        developers: Sequence[Developer],
        oncalls: Iterable[OnCall] = (),
        leaves: Iterable[Leave] = (),
    ):
        self.developers = list(developers)
        self._oncalls: dict[str, list[OnCall]] = defaultdict(list)
        self._leaves: dict[str, list[Leave]] = defaultdict(list)
        for oncall in oncalls:
            self._oncalls[oncall.dev_name].append(oncall)
        for leave in leaves:
            self._leaves[leave.dev_name].append(leave)

    @staticmethod
    def _find_period(periods: Sequence[CalendarPeriod], day: date) -> CalendarPeriod | None:
        for period in periods:
            if period.contains(day):
                return period
        return None

    def is_on_call(self, developer: Developer, day: date) -> bool:
        period = self._find_period(self._oncalls.get(developer.name, []), day)
        if period is not None:
            logger.debug(
                f"        {developer.name} is on call {period.start_time} to {period.end_time}"
            )
        return period is not None

    def is_on_leave(self, developer: Developer, day: date) -> bool:
        period = self._find_period(self._leaves.get(developer.name, []), day)
        if period is not None:
            logger.debug(
                f"        {developer.name} is on leave {period.start_time} to {period.end_time}"
            )
        return period is not None

    def is_blocked(self, developer: Developer, day: date) -> bool:
        """Return True if the developer is on call or on leave that day."""
        return self.is_on_call(developer, day) or self.is_on_leave(developer, day)

    def is_available(self, developer: Developer, task: Task, day: date) -> bool:
        """Check skill match, existing reservation, on-call and leave, in that order."""
        if not developer.can_work_on(task.task_type):
            logger.debug(f"        {developer.name}: cannot work on {task.task_type}")
            return False

        if developer.next_free_time is not None and day < developer.next_free_time:
            logger.debug(f"        {developer.name}: busy until {developer.next_free_time}")
            return False

        return not self.is_blocked(developer, day)

    def find_available(
        self, task: Task, day: date, exclude: Iterable[Developer] = ()
    ) -> list[Developer]:
        """Developers available for ``task`` on ``day``, in developer input order.

        Input order is the tie-break when there are more candidates than open
        slots, so it must not be changed here.
        """
        excluded = {dev.name for dev in exclude}
        available = [
            dev
            for dev in self.developers
            if dev.name not in excluded and self.is_available(dev, task, day)
        ]
        logger.debug(
            f"      Available for {task.name} on {day}: "
            f"{', '.join(dev.name for dev in available) if available else 'none'}"
        )
        return available

    def has_matching_developer(self, task: Task) -> bool:
        """Return True if any developer lists the task's type."""
        return any(dev.can_work_on(task.task_type) for dev in self.developers)
