"""Effort adjustment and progress projection."""

import math
from collections.abc import Mapping, Sequence
from datetime import date, timedelta

from devtimeline.logger import get_logger
from devtimeline.models import Developer, Role

from .availability import AvailabilityOracle
from .calendar import add_years, is_weekend
from .config import EffortConfig, SchedulingConfig

logger = get_logger()


def round_half_up(value: float) -> float:
    """Round to the nearest integer with halves away from zero (2.5 -> 3, not 2)."""
    return float(math.copysign(math.floor(abs(value) + 0.5), value))


class EffortModel:
    """Converts nominal effort to adjusted effort and projects completion dates."""

    def __init__(
        self,
        roles: Mapping[str, Role],
        oracle: AvailabilityOracle | None = None,
        config: SchedulingConfig | None = None,
    ):
        self.roles = roles
        self.oracle = oracle
        self.config = config or SchedulingConfig()

    @property
    def effort_config(self) -> EffortConfig:
        return self.config.effort

    def effort_multiplier(self, parallel_factor: int) -> float:
        """Parallelism surcharge factor, e.g. 1.6 for a parallel factor of 2."""
        cfg = self.effort_config
        surcharge = cfg.surcharge_per_parallel_percent * parallel_factor + cfg.surcharge_base_percent
        return 1.0 + surcharge / 100.0

    def adjusted_effort(self, nominal_effort: float, parallel_factor: int) -> float:
        return round_half_up(nominal_effort * self.effort_multiplier(parallel_factor))

    def companion_effort(self, nominal_effort: float, parallel_factor: int) -> float:
        """Effort of a Frontend/QA companion, sized from its parent's nominal effort."""
        share = self.effort_config.companion_share
        return round_half_up(nominal_effort * share * self.effort_multiplier(parallel_factor))

    def daily_progress(self, developers: Sequence[Developer]) -> float:
        """Sum of role availability; developers with unknown roles add nothing."""
        progress = 0.0
        for dev in developers:
            role = self.roles.get(dev.role)
            if role is None:
                continue
            progress += role.availability_percent
            logger.debug(f"        {dev.name} contributes {role.availability_percent:.2f}")
        return progress

    def _working_developers(self, developers: Sequence[Developer], day: date) -> list[Developer]:
        if self.oracle is None:
            return list(developers)
        # Blocked developers stay assigned but contribute nothing today
        return [dev for dev in developers if not self.oracle.is_blocked(dev, day)]

    def calculate_end_date(
        self, developers: Sequence[Developer], start: date, remaining_effort: float
    ) -> tuple[date, bool]:
        """Walk forward from ``start`` until ``remaining_effort`` is consumed.

        Weekends advance the date without consuming effort and without
        counting towards the iteration bound. Every workday the developers
        who are on call or on leave are left out of that day's progress.

        Returns:
            Tuple of (completion date, exhausted). When the bound of
            ``max_projection_iterations`` workdays is hit with effort still
            remaining, the completion date falls back to one year after
            ``start`` and ``exhausted`` is True.
        """
        current = start
        remaining = remaining_effort
        max_iterations = self.config.max_projection_iterations
        iterations = 0

        while remaining > 0 and iterations < max_iterations:
            if is_weekend(current):
                current += timedelta(days=1)
                continue

            progress = self.daily_progress(self._working_developers(developers, current))
            if progress > 0:
                remaining -= progress

            if remaining > 0:
                current += timedelta(days=1)
            iterations += 1

        if remaining > 0:
            fallback = add_years(start, 1)
            logger.warning(
                f"End date projection from {start} gave up after {iterations} workdays "
                f"with {remaining:.2f} effort left; using {fallback}"
            )
            return (fallback, True)

        logger.debug(f"        Projected end date {current} (from {start})")
        return (current, False)
