"""Exception types raised by the transformation pipeline."""

from __future__ import annotations

from typing import Any


class PageforgeError(Exception):
    """Base class for errors raised by pageforge itself."""


class RegistrationError(PageforgeError, ValueError):
    """Raised when an operation is registered with malformed arguments."""

    def __init__(self, kind: str, reason: str) -> None:
        self.kind = kind
        self.reason = reason
        super().__init__(f"Invalid {kind} registration: {reason}")


class DataLoadError(PageforgeError):
    """Raised when a file-based data source cannot be read or parsed."""

    def __init__(self, file_name: str, reason: str) -> None:
        self.file_name = file_name
        self.reason = reason
        super().__init__(f"Could not load data from '{file_name}': {reason}")


class CompletionError(PageforgeError, RuntimeError):
    """Raised when a single-shot completion is settled more than once."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"Completion for {label} was already settled")


class HandlerContractError(PageforgeError, TypeError):
    """Raised when a handler delivers a value of the wrong shape."""

    def __init__(self, label: str, expected: str, got: Any) -> None:
        self.label = label
        self.expected = expected
        self.got = got
        super().__init__(
            f"{label} must deliver {expected}, got {type(got).__name__}"
        )


class HandlerFailure(PageforgeError):
    """Carries a failure value that is not an exception.

    Callback-style handlers may reject with any object (a bare string, a
    dict, ...). Those values cannot be raised directly, so they travel in
    this carrier with ``value`` holding the exact object that was passed.
    """

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(value)

    def __repr__(self) -> str:
        return f"HandlerFailure({self.value!r})"


def as_exception(failure: Any) -> BaseException:
    """Return the failure itself if raisable, else wrap it in HandlerFailure.

    StopIteration and StopAsyncIteration cannot be set on a future, so they
    are carried like any other value.
    """
    if isinstance(failure, BaseException) and not isinstance(
        failure, (StopIteration, StopAsyncIteration)
    ):
        return failure
    return HandlerFailure(failure)
