"""Domain errors."""


class InvalidArgumentError(ValueError):
    """Raised when a calculation or request receives an unusable value."""


class ProfileNotFoundError(LookupError):
    """Raised when a profile does not exist."""


class WorkoutNotFoundError(LookupError):
    """Raised when a workout log does not exist."""
