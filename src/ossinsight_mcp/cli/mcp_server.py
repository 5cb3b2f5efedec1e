"""MCP server exposing OSSInsight GitHub analytics to MCP clients.

Usage:
    # Public OSSInsight endpoints
    ossinsight-mcp

    # Debug logging (written to stderr, stdout carries the protocol)
    ossinsight-mcp --log-level DEBUG

    # With Claude Code
    claude mcp add ossinsight -- ossinsight-mcp
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from ossinsight_mcp.diagnostics import LoggingSink
from ossinsight_mcp.operations import OSSInsightService
from ossinsight_mcp.registry import OperationRegistry
from ossinsight_mcp.server import serve
from ossinsight_mcp.sources import ApiSource, PageSource
from ossinsight_mcp.types import (
    DEFAULT_API_URL,
    DEFAULT_REPO_API_URL,
    DEFAULT_WEB_URL,
    OSSInsightConfig,
)

logger = logging.getLogger("ossinsight_mcp")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="MCP server for OSSInsight GitHub analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run against the public endpoints
  ossinsight-mcp

  # Add to Claude Code
  claude mcp add ossinsight -- ossinsight-mcp
        """,
    )
    parser.add_argument(
        "--api-url",
        default=DEFAULT_API_URL,
        help=f"General analytics API base URL (default: {DEFAULT_API_URL})",
    )
    parser.add_argument(
        "--repo-api-url",
        default=DEFAULT_REPO_API_URL,
        help=f"GitHub data API base URL (default: {DEFAULT_REPO_API_URL})",
    )
    parser.add_argument(
        "--web-url",
        default=DEFAULT_WEB_URL,
        help=f"Web origin for pages and links (default: {DEFAULT_WEB_URL})",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for stderr output (default: INFO)",
    )
    return parser


def create_registry(args: argparse.Namespace) -> OperationRegistry:
    """Wire sources, service and registry from CLI args."""
    config = OSSInsightConfig(
        api_url=args.api_url,
        repo_api_url=args.repo_api_url,
        web_url=args.web_url,
    )
    service = OSSInsightService(
        api=ApiSource(config),
        pages=PageSource(),
        sink=LoggingSink(),
        config=config,
    )
    return OperationRegistry.default(service)


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    # stdout is the MCP channel
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    registry = create_registry(args)
    try:
        asyncio.run(serve(registry))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.error("Fatal error in main(): %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
