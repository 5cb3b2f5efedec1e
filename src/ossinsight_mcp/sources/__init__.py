"""Data sources: the structured API and the rendered web pages."""

from ossinsight_mcp.sources.api import ApiSource
from ossinsight_mcp.sources.pages import PageSource, extract, extract_all

__all__ = ["ApiSource", "PageSource", "extract", "extract_all"]
