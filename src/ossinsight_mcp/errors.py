"""Error types for ossinsight-mcp.

All errors inherit from OSSInsightError for easy catching at the transport level.
"""

from __future__ import annotations


class OSSInsightError(Exception):
    """Base class for all ossinsight-mcp errors."""

    pass


class ValidationError(OSSInsightError):
    """Raised when operation arguments fail schema validation.

    Carries every offending field as a (path, reason) pair.
    """

    def __init__(self, issues: list[tuple[str, str]]) -> None:
        self.issues = issues
        details = ", ".join(f"{path}: {reason}" for path, reason in issues)
        super().__init__(f"Invalid arguments: {details}")


class InvalidInputError(OSSInsightError):
    """Raised when an argument passed schema checks but cannot be used."""

    def __init__(self, message: str, value: str | None = None) -> None:
        self.value = value
        super().__init__(message)


class ApiError(OSSInsightError):
    """Raised when the structured API answers with a non-2xx status."""

    def __init__(self, status: int, status_text: str, body: str, url: str | None = None) -> None:
        self.status = status
        self.status_text = status_text
        self.body = body
        self.url = url
        super().__init__(f"OSSInsight API error: {status} {status_text}\n{body}")


class MalformedResponseError(OSSInsightError):
    """Raised when a 2xx API body does not have a usable shape."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Malformed API response: {reason}")


class FetchError(OSSInsightError):
    """Raised when an HTML page cannot be fetched."""

    def __init__(self, url: str, status: int, status_text: str) -> None:
        self.url = url
        self.status = status
        self.status_text = status_text
        super().__init__(f"Failed to fetch web page: {status} {status_text}")


class UnknownOperationError(OSSInsightError):
    """Raised when an operation name is not found in the registry."""

    def __init__(self, operation_name: str, available_operations: list[str] | None = None) -> None:
        self.operation_name = operation_name
        self.available_operations = available_operations or []
        msg = f"Unknown tool: {operation_name}"
        if self.available_operations:
            msg += f". Available: {', '.join(self.available_operations)}"
        super().__init__(msg)


class MissingArgumentsError(OSSInsightError):
    """Raised when an operation is invoked without an arguments mapping."""

    def __init__(self, operation_name: str) -> None:
        self.operation_name = operation_name
        super().__init__("Arguments are required")
