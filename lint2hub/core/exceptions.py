"""Exceptions raised by lint2hub.

Soft errors concern a single comment and may be logged and skipped.
Every other ``Lint2HubError`` is hard and aborts the run.
"""


class Lint2HubError(Exception):
    """Base exception for all lint2hub errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class SoftCommentError(Lint2HubError):
    """A comment cannot be posted, but the run may continue."""


class ShaMismatchError(SoftCommentError):
    """The pull request head moved past the commit being linted."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(
            "latest pull request SHA does not match provided SHA",
            {"expected": expected, "actual": actual},
        )


class FileNotInDiffError(SoftCommentError):
    """The file was not touched by the pull request diff."""

    def __init__(self, file: str) -> None:
        super().__init__(f"file not found in diff: {file}", {"file": file})


class PositionNotInDiffError(SoftCommentError):
    """The line is not an added line of the pull request diff."""

    def __init__(self, file: str, line: int) -> None:
        super().__init__(
            f"position not found in diff: {file}:{line}",
            {"file": file, "line": line},
        )


class ConfigurationError(Lint2HubError):
    """Missing or conflicting command line options."""


class BatchInputError(Lint2HubError):
    """Malformed batch input or an unusable record pattern."""

    def __init__(self, message: str, line: str | None = None) -> None:
        super().__init__(message, {"line": line} if line is not None else None)


class ExternalServiceError(Lint2HubError):
    """External service (GitHub) error."""

    def __init__(self, service: str, message: str, status_code: int | None = None) -> None:
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service} error: {message}", {"status_code": status_code})


class SessionTimeoutError(Lint2HubError):
    """The session deadline passed before the run finished."""

    def __init__(self, timeout: float, operation: str) -> None:
        super().__init__(
            f"timed out after {timeout:g}s during {operation}",
            {"timeout": timeout, "operation": operation},
        )
