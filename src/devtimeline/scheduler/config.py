"""Configuration classes for the scheduling system."""

from pydantic import BaseModel, Field

# Day-advance iterations for a whole run (about ten years of workdays)
DEFAULT_MAX_RUN_ITERATIONS = 3650
# Workday iterations for a single end-date projection (about one year)
DEFAULT_MAX_PROJECTION_ITERATIONS = 365


class EffortConfig(BaseModel):
    """Parallelism surcharge and companion task sizing.

    Adjusted effort is ``nominal * (1 + (per_parallel * parallel_factor + base) / 100)``.
    """

    surcharge_base_percent: float = 40.0
    surcharge_per_parallel_percent: float = 10.0
    companion_share: float = Field(default=0.25, gt=0)


class CompanionConfig(BaseModel):
    """Synthetic tasks generated from the NeedsFrontend/NeedsQA task flags."""

    frontend_task_type: str = "Frontend"
    frontend_suffix: str = "_Frontend"
    qa_task_type: str = "QA"
    qa_suffix: str = "_QA"


class SchedulingConfig(BaseModel):
    """Configuration for loading inputs and running the scheduler."""

    # Lenient mode tolerates dangling dependencies, unparseable dates and
    # out-of-range role availability; strict mode rejects them.
    strict: bool = False

    max_run_iterations: int = Field(default=DEFAULT_MAX_RUN_ITERATIONS, ge=1)
    max_projection_iterations: int = Field(default=DEFAULT_MAX_PROJECTION_ITERATIONS, ge=1)

    effort: EffortConfig = EffortConfig()
    companions: CompanionConfig = CompanionConfig()
