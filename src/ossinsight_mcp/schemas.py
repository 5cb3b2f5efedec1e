"""Argument schemas for the OSSInsight operations.

Each operation accepts a pydantic model. Models are strict, so a string is
never coerced into a number, and unknown keys are ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from ossinsight_mcp.errors import ValidationError

TimePeriod = Literal["last_28_days", "last_90_days", "last_year", "all_time"]

ModelT = TypeVar("ModelT", bound=BaseModel)


class _Params(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)


def split_owner_repo(owner_repo: str) -> tuple[str, str] | None:
    """Split 'owner/repo' into its two segments, or None if malformed."""
    parts = owner_repo.split("/")
    if len(parts) != 2 or not all(parts):
        return None
    return parts[0], parts[1]


class GetRepoAnalysisParams(_Params):
    owner_repo: str = Field(description="Repository name in the format 'owner/repo'")
    time_period: TimePeriod | None = Field(
        default=None, description="Time range for analysis (optional)"
    )

    @field_validator("owner_repo")
    @classmethod
    def check_owner_repo(cls, value: str) -> str:
        if split_owner_repo(value) is None:
            raise ValueError('Invalid repository format. Use "owner/repo"')
        return value


class GetDeveloperAnalysisParams(_Params):
    username: str = Field(description="GitHub username")


class GetCollectionParams(_Params):
    collection_id: str = Field(description="Collection ID, e.g., 'open-source-database'")


class ListCollectionsParams(_Params):
    page: PositiveInt = Field(default=1, description="Page number, starting from 1")
    per_page: PositiveInt = Field(
        default=20, description="Number of results per page, default is 20"
    )


class NaturalLanguageQueryParams(_Params):
    query: str = Field(
        description=(
            "Natural language query, e.g., "
            "'Which repositories gained the most stars in 2023?'"
        )
    )


def validate_arguments(model: type[ModelT], arguments: Any) -> ModelT:
    """Validate raw arguments against an operation schema.

    Raises:
        ValidationError: Listing every offending field path and reason.
    """
    if isinstance(arguments, Mapping):
        arguments = dict(arguments)
    try:
        return model.model_validate(arguments)
    except pydantic.ValidationError as e:
        issues = [
            (".".join(str(part) for part in error["loc"]) or "arguments", error["msg"])
            for error in e.errors()
        ]
        raise ValidationError(issues) from e


def input_schema(model: type[BaseModel]) -> dict[str, Any]:
    """Render a schema model as a JSON Schema object for tool listings."""
    schema = model.model_json_schema()
    schema.pop("title", None)
    for prop in schema.get("properties", {}).values():
        prop.pop("title", None)
    return schema
