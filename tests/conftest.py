"""Test fixtures for ossinsight-mcp."""

from collections.abc import Callable, Mapping
from json import dumps
from typing import Any
from unittest.mock import AsyncMock

import pytest

from ossinsight_mcp import OperationRegistry, OSSInsightConfig, OSSInsightService
from ossinsight_mcp.errors import FetchError

# =============================================================================
# Sample payloads
# =============================================================================

REPO_RECORD: dict[str, Any] = {
    "name": "tidb",
    "full_name": "pingcap/tidb",
    "description": "TiDB is an open-source, cloud-native, distributed SQL database.",
    "html_url": "https://github.com/pingcap/tidb",
    "homepage": "https://pingcap.com",
    "created_at": "2015-09-06T04:01:52Z",
    "updated_at": "2024-01-15T10:30:00Z",
    "language": "Go",
    "license": {
        "key": "apache-2.0",
        "name": "Apache License 2.0",
        "url": "https://api.github.com/licenses/apache-2.0",
    },
    "topics": ["database", "distributed-database", "sql"],
    "stargazers_count": 35000,
    "watchers_count": 35000,
    "forks_count": 5600,
    "open_issues_count": 4100,
    "size": 520000,
    "owner": {
        "login": "pingcap",
        "type": "Organization",
        "html_url": "https://github.com/pingcap",
        "avatar_url": "https://avatars.githubusercontent.com/u/11855343?v=4",
    },
}


# =============================================================================
# Collaborator stubs
# =============================================================================


class RecordingSink:
    """DiagnosticSink that keeps every record in memory."""

    def __init__(self) -> None:
        self.records: list[tuple[str, BaseException | None]] = []

    def record(self, message: str, error: BaseException | None = None) -> None:
        self.records.append((message, error))


class FakeApi:
    """Stand-in for ApiSource with canned responses per endpoint.

    A response that is an exception instance is raised instead of returned.
    """

    def __init__(self, config: OSSInsightConfig | None = None) -> None:
        self.config = config or OSSInsightConfig()
        self.calls: list[tuple[str, dict[str, Any] | None, bool]] = []
        self._responses: dict[str, Any] = {}

    def set_response(self, endpoint: str, response: Any) -> None:
        self._responses[endpoint] = response

    async def request(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        use_repo_api: bool = True,
    ) -> Any:
        self.calls.append((endpoint, dict(params) if params else None, use_repo_api))
        if endpoint not in self._responses:
            raise AssertionError(f"Unexpected API request: {endpoint}")
        response = self._responses[endpoint]
        if isinstance(response, BaseException):
            raise response
        return response


class FakePages:
    """Stand-in for PageSource.

    Scrapes return the configured text per key, "" for keys without text.
    URLs listed in ``failing`` raise FetchError.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, str]]] = []
        self.texts: dict[str, str] = {}
        self.failing: dict[str, int] = {}

    def fail(self, url: str, status: int = 503) -> None:
        self.failing[url] = status

    async def scrape(self, url: str, selectors: Mapping[str, str]) -> dict[str, str]:
        self.calls.append((url, dict(selectors)))
        if url in self.failing:
            raise FetchError(url, self.failing[url], "Service Unavailable")
        return {key: self.texts.get(key, "") for key in selectors}


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def config() -> OSSInsightConfig:
    return OSSInsightConfig()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def fake_api(config: OSSInsightConfig) -> FakeApi:
    return FakeApi(config)


@pytest.fixture
def fake_pages() -> FakePages:
    return FakePages()


@pytest.fixture
def service(
    fake_api: FakeApi,
    fake_pages: FakePages,
    sink: RecordingSink,
    config: OSSInsightConfig,
) -> OSSInsightService:
    return OSSInsightService(fake_api, fake_pages, sink=sink, config=config)  # type: ignore[arg-type]


@pytest.fixture
def registry(service: OSSInsightService) -> OperationRegistry:
    return OperationRegistry.default(service)


@pytest.fixture
def repo_record() -> dict[str, Any]:
    return {**REPO_RECORD, "owner": dict(REPO_RECORD["owner"])}


@pytest.fixture
def make_session() -> Callable[..., AsyncMock]:
    """Build a mock aiohttp.ClientSession returning one canned response.

    Usage:
        with patch("aiohttp.ClientSession") as client_session:
            session = make_session(status=200, json={"ok": True})
            client_session.return_value = session
    """

    def _make(
        status: int = 200,
        reason: str = "OK",
        json: Any = None,
        text: str = "",
    ) -> AsyncMock:
        mock_response = AsyncMock()
        mock_response.status = status
        mock_response.reason = reason
        if json is not None and not text:
            text = dumps(json)
        mock_response.text = AsyncMock(return_value=text)

        mock_session = AsyncMock()
        mock_session.request = AsyncMock(return_value=mock_response)
        mock_session.__aenter__ = AsyncMock(return_value=mock_session)
        mock_session.__aexit__ = AsyncMock(return_value=None)
        return mock_session

    return _make
