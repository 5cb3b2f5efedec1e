"""Operation registry: maps tool names to schemas and handlers."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from ossinsight_mcp.errors import MissingArgumentsError, UnknownOperationError
from ossinsight_mcp.operations import OSSInsightService
from ossinsight_mcp.schemas import (
    GetCollectionParams,
    GetDeveloperAnalysisParams,
    GetRepoAnalysisParams,
    ListCollectionsParams,
    NaturalLanguageQueryParams,
    validate_arguments,
)
from ossinsight_mcp.types import Envelope, Operation

logger = logging.getLogger(__name__)


class OperationRegistry:
    """Registry of named operations.

    Usage:
        registry = OperationRegistry.default(service)
        for op in registry.list_operations():
            print(op.name, op.input_schema)

        text = await registry.invoke("get_repo_analysis", {"owner_repo": "pingcap/tidb"})
    """

    def __init__(self) -> None:
        self._operations: dict[str, Operation] = {}

    @classmethod
    def default(cls, service: OSSInsightService) -> OperationRegistry:
        """Create a registry holding the five OSSInsight operations."""
        registry = cls()
        registry.register(
            Operation(
                name="get_repo_analysis",
                description=(
                    "Get detailed analysis of a GitHub repository, including activity, "
                    "stars, issues, and other metrics."
                ),
                params_model=GetRepoAnalysisParams,
                handler=service.get_repo_analysis,
            )
        )
        registry.register(
            Operation(
                name="get_developer_analysis",
                description=(
                    "Get detailed analysis of a GitHub developer, including their "
                    "activity and contributions."
                ),
                params_model=GetDeveloperAnalysisParams,
                handler=service.get_developer_analysis,
            )
        )
        registry.register(
            Operation(
                name="get_collection",
                description="Get information about a specific collection of repositories",
                params_model=GetCollectionParams,
                handler=service.get_collection,
            )
        )
        registry.register(
            Operation(
                name="list_collections",
                description="List all available repository collections",
                params_model=ListCollectionsParams,
                handler=service.list_collections,
            )
        )
        registry.register(
            Operation(
                name="natural_language_query",
                description=(
                    "Query GitHub data using natural language through the OSSInsight "
                    "chat interface"
                ),
                params_model=NaturalLanguageQueryParams,
                handler=service.natural_language_query,
            )
        )
        return registry

    def register(self, operation: Operation) -> None:
        """Add an operation.

        Raises:
            ValueError: If an operation with the same name is already registered.
        """
        if operation.name in self._operations:
            raise ValueError(f"Operation '{operation.name}' is already registered")
        self._operations[operation.name] = operation

    def get(self, name: str) -> Operation:
        """Look up an operation by name.

        Raises:
            UnknownOperationError: If no operation has that name.
        """
        operation = self._operations.get(name)
        if operation is None:
            raise UnknownOperationError(name, list(self._operations))
        return operation

    def list_operations(self) -> list[Operation]:
        """Return all operations in registration order."""
        return list(self._operations.values())

    async def call(self, name: str, arguments: Mapping[str, Any] | None) -> Envelope:
        """Validate arguments and run an operation, returning its envelope.

        Raises:
            MissingArgumentsError: If arguments is None.
            UnknownOperationError: If the operation is not registered.
            ValidationError: If the arguments do not match the schema.
        """
        if arguments is None:
            raise MissingArgumentsError(name)

        operation = self.get(name)
        params = validate_arguments(operation.params_model, arguments)

        logger.info("Invoking %s", name)
        return await operation.handler(**params.model_dump())

    async def invoke(self, name: str, arguments: Mapping[str, Any] | None) -> str:
        """Run an operation and serialize its envelope as indented JSON."""
        envelope = await self.call(name, arguments)
        return json.dumps(envelope, indent=2, ensure_ascii=False)
