"""OSSInsight retrieval operations.

Every operation tries the structured API first. When it fails, the failure is
recorded on the diagnostic sink and the operation degrades to scraping the
matching ossinsight.io page (or, for the collection listing, to a plain
message). Envelope shapes differ between the two paths; callers have to look
at the keys to tell which one produced the result.

A FetchError while scraping inside a fallback is not caught.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from urllib.parse import quote

import aiohttp

from ossinsight_mcp.diagnostics import DiagnosticSink, LoggingSink
from ossinsight_mcp.errors import (
    ApiError,
    FetchError,
    InvalidInputError,
    MalformedResponseError,
)
from ossinsight_mcp.schemas import split_owner_repo
from ossinsight_mcp.sources.api import ApiSource
from ossinsight_mcp.sources.pages import PageSource
from ossinsight_mcp.types import (
    Envelope,
    OSSInsightConfig,
    RepositoryRecord,
    unwrap_repository,
)

logger = logging.getLogger(__name__)

# Everything that counts as "the API did not give us usable data".
# ValueError covers undecodable JSON bodies.
API_FAILURES: tuple[type[BaseException], ...] = (
    ApiError,
    MalformedResponseError,
    aiohttp.ClientError,
    asyncio.TimeoutError,
    ValueError,
)

REPO_SELECTORS = {
    "title": "h1",
    "stars": ".stars-count",
    "forks": ".forks-count",
    "open_issues": ".issues-count",
}
USER_SELECTORS = {
    "name": "h1",
    "bio": ".user-bio",
    "repos": ".repos-count",
}
COLLECTION_SELECTORS = {
    "title": "h1",
    "description": ".collection-description",
}
COLLECTION_FALLBACK_SELECTORS = {
    **COLLECTION_SELECTORS,
    "repos_count": ".repos-count",
}

REPO_FALLBACK_MESSAGE = "API request failed. Falling back to web scraping."
COLLECTIONS_FALLBACK_MESSAGE = (
    "API request failed. Please visit the web URL to browse collections."
)
NL_QUERY_MESSAGE = (
    "Natural language queries are best handled through the OSSInsight web interface."
)

# Characters JavaScript's encodeURIComponent leaves unescaped.
_URI_COMPONENT_SAFE = "!'()*-._~"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


class OSSInsightService:
    """The five OSSInsight lookups exposed as MCP tools.

    Usage:
        service = OSSInsightService(ApiSource(), PageSource())
        analysis = await service.get_repo_analysis("pingcap/tidb")
    """

    def __init__(
        self,
        api: ApiSource,
        pages: PageSource,
        sink: DiagnosticSink | None = None,
        config: OSSInsightConfig | None = None,
    ) -> None:
        self.api = api
        self.pages = pages
        self.sink = sink or LoggingSink()
        self.config = config or api.config

    # Web links

    def repo_web_url(self, owner: str, repo: str) -> str:
        return f"{self.config.web_url}/analyze/{owner}/{repo}"

    def user_web_url(self, username: str) -> str:
        return f"{self.config.web_url}/analyze/user/{username}"

    def collection_web_url(self, collection_id: str) -> str:
        return f"{self.config.web_url}/collections/{collection_id}"

    def collections_web_url(self) -> str:
        return f"{self.config.web_url}/collections"

    def chat_web_url(self, question: str) -> str:
        return f"{self.config.web_url}/chat?question={encode_uri_component(question)}"

    # Operations

    async def get_repo_analysis(self, owner_repo: str, time_period: str | None = None) -> Envelope:
        """Analyze a repository given as 'owner/repo'.

        Raises:
            InvalidInputError: If owner_repo is not exactly two non-empty segments.
            FetchError: If the API failed and the analysis page is unreachable.
        """
        segments = split_owner_repo(owner_repo)
        if segments is None:
            raise InvalidInputError('Invalid repository format. Use "owner/repo"', owner_repo)
        owner, repo = segments
        web_url = self.repo_web_url(owner, repo)

        if time_period is not None:
            # TODO: forward time_period once the /gh/repo endpoint documents a query param for it
            logger.debug("time_period=%s accepted but not sent to the API", time_period)

        try:
            body = await self.api.request(f"/repo/{owner}/{repo}")
            record = unwrap_repository(body)
            return project_repository(record, web_url)
        except API_FAILURES as e:
            self.sink.record("API request failed, falling back to web scraping", e)

        return {
            "message": REPO_FALLBACK_MESSAGE,
            "web_data": await self.pages.scrape(web_url, REPO_SELECTORS),
            "web_url": web_url,
        }

    async def get_developer_analysis(self, username: str) -> Envelope:
        """Look up a GitHub user, falling back to the user analysis page."""
        try:
            user_data = await self.api.request(f"/users/{username}")
            return {"user_data": user_data}
        except API_FAILURES as e:
            self.sink.record("API request failed, falling back to web scraping", e)

        web_url = self.user_web_url(username)
        return {
            "web_data": await self.pages.scrape(web_url, USER_SELECTORS),
            "web_url": web_url,
        }

    async def get_collection(self, collection_id: str) -> Envelope:
        """Fetch a collection from the API and its web page.

        Unlike the other lookups, the page is scraped on success too. If either
        step fails, the page is scraped again with a wider selector set and the
        API data is left out.
        """
        web_url = self.collection_web_url(collection_id)
        try:
            collection_data = await self.api.request(
                f"/collections/{collection_id}", use_repo_api=False
            )
            web_data = await self.pages.scrape(web_url, COLLECTION_SELECTORS)
            return {
                "collection_data": collection_data,
                "web_data": web_data,
                "web_url": web_url,
            }
        except (*API_FAILURES, FetchError) as e:
            self.sink.record("API request failed, falling back to web scraping", e)

        return {
            "web_data": await self.pages.scrape(web_url, COLLECTION_FALLBACK_SELECTORS),
            "web_url": web_url,
        }

    async def list_collections(self, page: int = 1, per_page: int = 20) -> Envelope:
        """List collections. There is no scrape fallback for the listing."""
        web_url = self.collections_web_url()
        try:
            collections = await self.api.request(
                "/collections", {"page": page, "per_page": per_page}, use_repo_api=False
            )
        except API_FAILURES as e:
            self.sink.record("API request failed", e)
            return {"message": COLLECTIONS_FALLBACK_MESSAGE, "web_url": web_url}

        return {"collections": collections, "web_url": web_url}

    async def natural_language_query(self, query: str) -> Envelope:
        """Redirect a natural-language question to the OSSInsight chat page.

        The API has no natural-language endpoint, so no request is made.
        """
        return {"message": NL_QUERY_MESSAGE, "web_url": self.chat_web_url(query)}


def project_repository(record: RepositoryRecord, web_url: str) -> Envelope:
    """Group a repository record into basic_info, statistics and owner.

    Absent fields become None.
    """
    owner = record.get("owner")
    if not isinstance(owner, Mapping):
        owner = {}

    return {
        "basic_info": {
            "name": record.get("name"),
            "full_name": record.get("full_name"),
            "description": record.get("description"),
            "html_url": record.get("html_url"),
            "homepage": record.get("homepage"),
            "created_at": record.get("created_at"),
            "updated_at": record.get("updated_at"),
            "language": record.get("language"),
            "license": record.get("license"),
            "topics": record.get("topics"),
        },
        "statistics": {
            "stars": record.get("stargazers_count"),
            "watchers": record.get("watchers_count"),
            "forks": record.get("forks_count"),
            "open_issues": record.get("open_issues_count"),
            "size": record.get("size"),
        },
        "owner": {
            "login": owner.get("login"),
            "type": owner.get("type"),
            "html_url": owner.get("html_url"),
            "avatar_url": owner.get("avatar_url"),
        },
        "web_url": web_url,
    }
