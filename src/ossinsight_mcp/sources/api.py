"""Client for the OSSInsight structured JSON API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from ossinsight_mcp.errors import ApiError
from ossinsight_mcp.types import OSSInsightConfig

logger = logging.getLogger(__name__)


class ApiSource:
    """Issues GET requests against one of the two OSSInsight API hosts.

    Usage:
        api = ApiSource(OSSInsightConfig())
        repo = await api.request("/repo/pingcap/tidb")
        collections = await api.request(
            "/collections", {"page": 1, "per_page": 20}, use_repo_api=False
        )
    """

    def __init__(
        self,
        config: OSSInsightConfig | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize with endpoint config.

        Args:
            config: API hosts to use. Defaults to the public OSSInsight hosts.
            headers: Optional extra headers sent with every request.
        """
        self.config = config or OSSInsightConfig()
        self.headers = {"Accept": "application/json", **(headers or {})}

    def build_url(self, endpoint: str, use_repo_api: bool = True) -> str:
        """Join an endpoint path onto the selected API host."""
        base_url = self.config.repo_api_url if use_repo_api else self.config.api_url
        return f"{base_url}{endpoint}"

    @staticmethod
    def build_params(params: Mapping[str, Any] | None) -> list[tuple[str, str]]:
        """Convert query params to string pairs, dropping None values.

        Insertion order is preserved.
        """
        if not params:
            return []
        return [(key, str(value)) for key, value in params.items() if value is not None]

    async def request(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        use_repo_api: bool = True,
    ) -> Any:
        """GET an API endpoint and return its decoded JSON body.

        Args:
            endpoint: Path below the API host, e.g. "/repo/owner/name".
            params: Query parameters; None values are omitted.
            use_repo_api: Use the GitHub-specific host instead of the general one.

        Returns:
            The parsed JSON body, unmodified.

        Raises:
            ApiError: If the API answers with a non-2xx status.
            aiohttp.ClientError: If the request cannot be completed.
            ValueError: If the body is empty or not valid JSON.
        """
        url = self.build_url(endpoint, use_repo_api)
        query = self.build_params(params)

        logger.debug("GET %s params=%s", url, query)
        async with aiohttp.ClientSession(headers=self.headers) as session:
            response = await session.request("GET", url, params=query or None)

            if not 200 <= response.status < 300:
                error_text = await response.text()
                raise ApiError(response.status, response.reason or "", error_text, url=url)

            # An empty body is a decode error, not null.
            return json.loads(await response.text())
