from __future__ import annotations


class GreedyError(Exception):
    """Base class for failures reported back to the caller as a CommandResult."""

    kind = "GreedyError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingTargetError(GreedyError):
    """edit/delete intent with no resolvable assignment identifier."""

    kind = "MissingTargetError"


class UnknownIntentError(GreedyError):
    kind = "UnknownIntentError"


class NotFoundError(GreedyError):
    kind = "NotFoundError"


class ValidationError(GreedyError):
    """A required argument is missing or an argument has the wrong shape."""

    kind = "ValidationError"


class UpstreamError(GreedyError):
    """The language model or another collaborator failed or returned malformed data."""

    kind = "UpstreamError"
