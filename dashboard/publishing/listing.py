"""Filter, sort and paginate a collection of assets for display."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, FrozenSet, Iterable, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .aggregate import aggregate
from .models import Asset, AssetAggregateState
from .settings import DEFAULT_PAGE_SIZE, DEFAULT_SORT_DIR, DEFAULT_SORT_KEY, PAGE_SIZE_OPTIONS
from .utils import resolve_now

SortKey = Literal["createdAt", "publishTime", "title"]
SortDir = Literal["asc", "desc"]
StatusFilter = Literal["all", "pending", "scheduled", "processing", "published", "failed"]


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.title() for part in parts[1:])


class ListingQuery(BaseModel):
    """Immutable description of what the listing should show."""

    model_config = ConfigDict(alias_generator=_to_camel, populate_by_name=True, frozen=True)

    search: str = ""
    status: StatusFilter = "all"
    sort_key: SortKey = DEFAULT_SORT_KEY
    sort_dir: SortDir = DEFAULT_SORT_DIR
    page: int = Field(default=1, ge=1)
    per_page: int = DEFAULT_PAGE_SIZE
    hidden_ids: FrozenSet[str] = Field(default_factory=frozenset)

    @field_validator("search")
    @classmethod
    def _strip_search(cls, value: str) -> str:
        return value.strip()

    @field_validator("per_page")
    @classmethod
    def _known_page_size(cls, value: int) -> int:
        if value not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"per_page must be one of {list(PAGE_SIZE_OPTIONS)}")
        return value

    @field_validator("hidden_ids", mode="before")
    @classmethod
    def _split_hidden_ids(cls, value: Any) -> Any:
        if isinstance(value, str):
            return frozenset(part.strip() for part in value.split(",") if part.strip())
        return value

    def _evolve(self, **changes: Any) -> "ListingQuery":
        return type(self)(**{**self.model_dump(), **changes})

    def hide(self, asset_id: str) -> "ListingQuery":
        return self._evolve(hidden_ids=self.hidden_ids | {asset_id})

    def unhide_all(self) -> "ListingQuery":
        return self._evolve(hidden_ids=frozenset())

    def with_page(self, page: int) -> "ListingQuery":
        return self._evolve(page=page)

    def with_per_page(self, per_page: int) -> "ListingQuery":
        return self._evolve(per_page=per_page, page=1)

    def toggle_sort_dir(self) -> "ListingQuery":
        return self._evolve(sort_dir="asc" if self.sort_dir == "desc" else "desc")


@dataclass(frozen=True)
class AssetRow:
    asset: Asset
    status: AssetAggregateState


@dataclass(frozen=True)
class ListingPage:
    rows: List[AssetRow]
    total: int
    filtered: int
    hidden: int
    page: int
    per_page: int
    total_pages: int


def _sort_value(asset: Asset, key: str) -> Tuple[int, Any]:
    if key == "title":
        value: Any = asset.title or None
    elif key == "publishTime":
        value = asset.publish_time
    else:
        value = asset.created_at
    # Missing values order before present ones.
    return (0, "") if value is None else (1, value)


def _matches_search(asset: Asset, needle: str) -> bool:
    lowered = needle.lower()
    return lowered in asset.title.lower() or lowered in asset.description.lower()


def list_assets(
    assets: Iterable[Asset],
    query: ListingQuery,
    *,
    now: Optional[datetime] = None,
) -> ListingPage:
    moment = resolve_now(now)
    collection = list(assets)

    visible = [asset for asset in collection if asset.id not in query.hidden_ids]
    hidden = len(collection) - len(visible)
    if query.search:
        visible = [asset for asset in visible if _matches_search(asset, query.search)]

    rows = [AssetRow(asset=asset, status=aggregate(asset, now=moment)) for asset in visible]
    if query.status != "all":
        rows = [row for row in rows if row.status.value == query.status]

    rows.sort(
        key=lambda row: _sort_value(row.asset, query.sort_key),
        reverse=query.sort_dir == "desc",
    )

    start = (query.page - 1) * query.per_page
    return ListingPage(
        rows=rows[start : start + query.per_page],
        total=len(collection),
        filtered=len(rows),
        hidden=hidden,
        page=query.page,
        per_page=query.per_page,
        total_pages=math.ceil(len(rows) / query.per_page),
    )
