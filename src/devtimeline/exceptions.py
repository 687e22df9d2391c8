"""Custom exceptions for devtimeline."""


class DevTimelineError(Exception):
    """Base exception for all devtimeline errors."""

    pass


class InputError(DevTimelineError):
    """Raised when an input table is missing or malformed."""

    pass


class ConfigError(DevTimelineError):
    """Raised when a configuration file cannot be loaded."""

    pass


class ValidationError(DevTimelineError):
    """Raised when the task graph fails validation."""

    pass


class CircularDependencyError(ValidationError):
    """Raised when the task dependency graph contains a cycle."""

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__(f"Circular dependency detected: {' -> '.join(cycle)}")


class MissingReferenceError(ValidationError):
    """Raised in strict mode when a dependency names an unknown task."""

    pass
