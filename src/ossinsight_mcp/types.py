"""Core type definitions for ossinsight-mcp."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypedDict, Union

from pydantic import BaseModel

from ossinsight_mcp.errors import MalformedResponseError
from ossinsight_mcp.schemas import input_schema

DEFAULT_API_URL = "https://api.ossinsight.io/v1"
DEFAULT_REPO_API_URL = "https://api.ossinsight.io/gh"
DEFAULT_WEB_URL = "https://ossinsight.io"

# Envelopes are plain JSON-serializable dicts; their shape depends on the
# operation and on which source produced them.
Envelope = dict[str, Any]


class RepositoryOwner(TypedDict, total=False):
    login: str
    type: str
    html_url: str
    avatar_url: str


class RepositoryLicense(TypedDict):
    key: str
    name: str
    url: str


class RepositoryRecord(TypedDict, total=False):
    """Repository as returned by the OSSInsight GitHub API."""

    name: str
    full_name: str
    description: str | None
    html_url: str
    homepage: str | None
    created_at: str
    updated_at: str
    language: str | None
    license: RepositoryLicense | None
    topics: list[str]
    stargazers_count: int
    watchers_count: int
    forks_count: int
    open_issues_count: int
    size: int
    owner: RepositoryOwner


class WrappedRepository(TypedDict):
    data: RepositoryRecord


RepositoryResponse = Union[WrappedRepository, RepositoryRecord]


def unwrap_repository(body: Any) -> RepositoryRecord:
    """Return the repository record from either response shape.

    A body whose ``data`` value is a mapping is a WrappedRepository; any other
    mapping is taken to be the record itself.

    Raises:
        MalformedResponseError: If the body is not a JSON object.
    """
    if not isinstance(body, Mapping):
        raise MalformedResponseError(f"expected a JSON object, got {type(body).__name__}")
    data = body.get("data")
    if isinstance(data, Mapping):
        return data  # type: ignore[return-value]
    return body  # type: ignore[return-value]


@dataclass(frozen=True)
class OSSInsightConfig:
    """Endpoints used by the data sources and for building web links."""

    api_url: str = DEFAULT_API_URL
    repo_api_url: str = DEFAULT_REPO_API_URL
    web_url: str = DEFAULT_WEB_URL

    def __post_init__(self) -> None:
        """Normalize base URLs so paths can be appended directly."""
        object.__setattr__(self, "api_url", self.api_url.rstrip("/"))
        object.__setattr__(self, "repo_api_url", self.repo_api_url.rstrip("/"))
        object.__setattr__(self, "web_url", self.web_url.rstrip("/"))


OperationHandler = Callable[..., Awaitable[Envelope]]


@dataclass(frozen=True)
class Operation:
    """A named, schema-validated callable exposed to MCP clients.

    The handler is called with the validated fields of ``params_model`` as
    keyword arguments.
    """

    name: str
    description: str
    params_model: type[BaseModel]
    handler: OperationHandler

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON schema of the accepted arguments."""
        return input_schema(self.params_model)
