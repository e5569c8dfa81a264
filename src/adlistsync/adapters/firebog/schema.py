"""Pydantic model describing one row of the firebog CSV feed."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from collections.abc import Sequence

FEED_COLUMNS: Final[tuple[str, ...]] = (
    "category",
    "tick_type",
    "source_repo",
    "description",
    "source_url",
)


class FeedBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class FeedRow(FeedBaseModel):
    # values are kept verbatim; the tag depends on exact whitespace and casing
    category: str
    tick_type: str
    source_repo: str
    description: str
    source_url: str = Field(min_length=1)

    @classmethod
    def from_columns(cls, columns: Sequence[str]) -> FeedRow:
        return cls.model_validate(dict(zip(FEED_COLUMNS, columns, strict=True)))
