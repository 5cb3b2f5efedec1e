"""ossinsight-mcp: OSSInsight GitHub analytics as MCP tools."""

# All errors (foundational)
from ossinsight_mcp.errors import (
    ApiError,
    FetchError,
    InvalidInputError,
    MalformedResponseError,
    MissingArgumentsError,
    OSSInsightError,
    UnknownOperationError,
    ValidationError,
)
from ossinsight_mcp.operations import OSSInsightService
from ossinsight_mcp.registry import OperationRegistry
from ossinsight_mcp.sources import ApiSource, PageSource

# Core types
from ossinsight_mcp.types import OSSInsightConfig, Operation, RepositoryRecord

__version__ = "0.1.0"

__all__ = [
    # Core
    "OSSInsightService",
    "OperationRegistry",
    "ApiSource",
    "PageSource",
    # Types
    "OSSInsightConfig",
    "Operation",
    "RepositoryRecord",
    # Errors
    "OSSInsightError",
    "ValidationError",
    "InvalidInputError",
    "ApiError",
    "MalformedResponseError",
    "FetchError",
    "UnknownOperationError",
    "MissingArgumentsError",
]
