from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import ValidationError

from dashboard.publishing import (
    Asset,
    AssetAggregateState as Aggregate,
    ListingQuery,
    list_assets,
)


def _asset(asset_id: str, **payload) -> Asset:
    return Asset.from_dict({"_id": asset_id, **payload})


@pytest.fixture()
def library(now):
    return [
        _asset(
            "1",
            title="Morning vlog",
            description="Coffee and code",
            createdAt=(now - timedelta(days=3)).isoformat(),
            platforms={"youtube": True},
            platformStatus={"youtube": {"videoId": "v1"}},
        ),
        _asset(
            "2",
            title="Launch trailer",
            description="Product launch",
            createdAt=(now - timedelta(days=1)).isoformat(),
            platforms={"tiktok": True},
            platformStatus={"tiktok": {"status": "processing"}},
        ),
        _asset(
            "3",
            title="Behind the scenes",
            description="A MORNING at the studio",
            createdAt=(now - timedelta(days=2)).isoformat(),
            scheduledFor=(now + timedelta(days=2)).isoformat(),
            platforms={"instagram": True},
        ),
        _asset("4", title="Draft", platforms={}),
    ]


def _ids(page) -> list[str]:
    return [row.asset.id for row in page.rows]


def test_defaults_sort_newest_first(library, now) -> None:
    page = list_assets(library, ListingQuery(), now=now)
    # Missing createdAt sorts last when descending.
    assert _ids(page) == ["2", "3", "1", "4"]
    assert page.total == 4
    assert page.filtered == 4
    assert page.total_pages == 1


def test_rows_carry_aggregate_status(library, now) -> None:
    page = list_assets(library, ListingQuery(), now=now)
    statuses = {row.asset.id: row.status for row in page.rows}
    assert statuses == {
        "1": Aggregate.PUBLISHED,
        "2": Aggregate.PROCESSING,
        "3": Aggregate.SCHEDULED,
        "4": Aggregate.PENDING,
    }


def test_search_matches_title_or_description_case_insensitively(library, now) -> None:
    page = list_assets(library, ListingQuery(search="morning"), now=now)
    assert sorted(_ids(page)) == ["1", "3"]


def test_status_filter_uses_derived_state(library, now) -> None:
    page = list_assets(library, ListingQuery(status="scheduled"), now=now)
    assert _ids(page) == ["3"]


def test_search_and_status_combine(library, now) -> None:
    query = ListingQuery(search="morning", status="published")
    assert _ids(list_assets(library, query, now=now)) == ["1"]


def test_hidden_ids_are_excluded(library, now) -> None:
    query = ListingQuery().hide("2").hide("4")
    page = list_assets(library, query, now=now)
    assert _ids(page) == ["3", "1"]
    assert page.hidden == 2
    assert list_assets(library, query.unhide_all(), now=now).hidden == 0


def test_sort_by_title_ascending(library, now) -> None:
    query = ListingQuery(sort_key="title", sort_dir="asc")
    assert _ids(list_assets(library, query, now=now)) == ["3", "4", "2", "1"]
    assert _ids(list_assets(library, query.toggle_sort_dir(), now=now)) == ["1", "2", "4", "3"]


def test_pagination(library, now) -> None:
    query = ListingQuery(per_page=5)
    assert list_assets(library, query, now=now).total_pages == 1

    many = [_asset(str(index), title=f"Clip {index:02d}") for index in range(12)]
    query = ListingQuery(sort_key="title", sort_dir="asc", per_page=5)
    first = list_assets(many, query, now=now)
    assert first.total_pages == 3
    assert _ids(first) == ["0", "1", "2", "3", "4"]
    last = list_assets(many, query.with_page(3), now=now)
    assert _ids(last) == ["10", "11"]
    assert list_assets(many, query.with_page(4), now=now).rows == []


def test_changing_page_size_resets_page() -> None:
    query = ListingQuery(page=3).with_per_page(20)
    assert query.page == 1
    assert query.per_page == 20


def test_query_is_immutable() -> None:
    query = ListingQuery()
    with pytest.raises(ValidationError):
        query.page = 2  # type: ignore[misc]
    hidden = query.hide("x")
    assert query.hidden_ids == frozenset()
    assert hidden.hidden_ids == frozenset({"x"})


def test_query_accepts_camel_case_aliases() -> None:
    query = ListingQuery.model_validate(
        {"sortKey": "publishTime", "sortDir": "asc", "perPage": "20", "hiddenIds": "a, b"}
    )
    assert query.sort_key == "publishTime"
    assert query.per_page == 20
    assert query.hidden_ids == frozenset({"a", "b"})


@pytest.mark.parametrize(
    "values",
    [{"page": 0}, {"per_page": 7}, {"sort_key": "views"}, {"status": "uploaded"}],
)
def test_query_rejects_invalid_values(values) -> None:
    with pytest.raises(ValidationError):
        ListingQuery(**values)
