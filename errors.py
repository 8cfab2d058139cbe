class WorkoutError(ValueError):
    """Base class for all errors raised by the workout tracker."""


class ValidationError(WorkoutError):
    """Raised when user supplied input is malformed."""


class SchemaValidationError(WorkoutError):
    """Raised when a JSON document on disk fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Invalid data in {path}: {detail}")
        self.path = path
        self.detail = detail


class NotFoundError(WorkoutError):
    """Raised when a referenced entity does not exist."""


class AlreadyExistsError(WorkoutError):
    """Raised when creating an entity whose id is taken."""


class AmbiguousProfileError(WorkoutError):
    """Raised when several profiles exist and none was chosen."""

    def __init__(self, profiles: list[str]) -> None:
        super().__init__(
            f"Multiple profiles exist ({', '.join(profiles)}). "
            "Please specify --profile <name>"
        )
        self.profiles = profiles


class LastProfileError(WorkoutError):
    """Raised when deleting the only remaining profile."""


class ActiveSessionError(WorkoutError):
    """Raised when starting a workout while one is in progress."""


class NoActiveSessionError(WorkoutError):
    """Raised when a session command runs with no workout in progress."""
