"""Typed failures raised by the tracker services."""


class TrackerError(Exception):
    """Base class for domain failures surfaced to callers."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(TrackerError):  # noqa: N818
    """Malformed or out-of-range request data."""


class InvalidQuantity(InvalidInput):
    """A cart quantity that is not a positive integer."""


class NotFound(TrackerError):  # noqa: N818
    """A referenced entity id does not exist."""


class GenerationFailed(TrackerError):  # noqa: N818
    """The recipe generator errored or returned an unusable payload."""
