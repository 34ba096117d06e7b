from __future__ import annotations

from datetime import timedelta

from dashboard.publishing import (
    Asset,
    AssetAggregateState as Aggregate,
    PlatformLifecycleState as State,
    aggregate,
    breakdown,
    resolve_state,
)


def _asset(**payload) -> Asset:
    return Asset.from_dict({"id": "a1", **payload})


def test_scenario_a_single_youtube_published(now) -> None:
    asset = _asset(platforms={"youtube": True}, platformStatus={"youtube": {"videoId": "v1"}})
    assert resolve_state(asset, "youtube", now=now) is State.PUBLISHED
    assert aggregate(asset, now=now) is Aggregate.PUBLISHED


def test_scenario_b_instagram_processing(now) -> None:
    asset = _asset(
        platforms={"instagram": True},
        platformStatus={"instagram": {"status": "processing"}},
    )
    assert aggregate(asset, now=now) is Aggregate.PROCESSING


def test_scenario_c_partial_success_reports_published(now) -> None:
    asset = _asset(
        platforms={"youtube": True, "facebook": True},
        platformStatus={
            "youtube": {"videoId": "v1", "uploadStatus": "failed"},
            "facebook": {"postId": "p1"},
        },
    )
    assert resolve_state(asset, "youtube", now=now) is State.PUBLISHED_WITH_ERRORS
    assert resolve_state(asset, "facebook", now=now) is State.PUBLISHED
    assert aggregate(asset, now=now) is Aggregate.PUBLISHED


def test_scenario_d_future_schedule(now) -> None:
    asset = _asset(
        scheduledFor=(now + timedelta(days=1)).isoformat(),
        platforms={"tiktok": True},
        platformStatus={"tiktok": {"videoId": "t1"}},
    )
    assert aggregate(asset, now=now) is Aggregate.SCHEDULED


def test_scenario_e_nothing_selected(now) -> None:
    assert aggregate(_asset(platforms={}), now=now) is Aggregate.PENDING


def test_no_true_entries_is_pending_even_with_records(now) -> None:
    asset = _asset(
        platforms={"youtube": False},
        scheduledFor=(now + timedelta(days=1)).isoformat(),
        platformStatus={"youtube": {"videoId": "v1"}, "tiktok": {"status": "failed"}},
    )
    assert aggregate(asset, now=now) is Aggregate.PENDING
    assert aggregate(_asset(youtubeVideoId="v1"), now=now) is Aggregate.PENDING


def test_selected_but_untouched_is_pending(now) -> None:
    asset = _asset(platforms={"youtube": True, "tiktok": True})
    assert aggregate(asset, now=now) is Aggregate.PENDING


def test_processing_beats_partial_success(now) -> None:
    asset = _asset(
        platforms={"youtube": True, "tiktok": True},
        platformStatus={
            "youtube": {"videoId": "v1"},
            "tiktok": {"status": "uploading"},
        },
    )
    assert aggregate(asset, now=now) is Aggregate.PROCESSING


def test_published_among_failed_and_pending(now) -> None:
    asset = _asset(
        platforms={"youtube": True, "tiktok": True, "facebook": True},
        platformStatus={
            "youtube": {"uploadStatus": "failed"},
            "tiktok": {"videoId": "t1"},
        },
    )
    assert aggregate(asset, now=now) is Aggregate.PUBLISHED


def test_all_failed(now) -> None:
    asset = _asset(
        platforms={"youtube": True, "instagram": True},
        platformStatus={
            "youtube": {"uploadStatus": "failed"},
            "instagram": {"status": "error"},
        },
    )
    assert aggregate(asset, now=now) is Aggregate.FAILED


def test_engaged_but_all_pending(now) -> None:
    asset = _asset(
        platforms={"instagram": True, "facebook": True},
        platformStatus={
            "instagram": {"status": "queued"},
            "facebook": {"status": "waiting"},
        },
    )
    assert aggregate(asset, now=now) is Aggregate.PENDING


def test_mixed_pending_and_failed_is_still_settling(now) -> None:
    asset = _asset(
        platforms={"instagram": True, "facebook": True},
        platformStatus={"instagram": {"status": "failed"}},
    )
    assert aggregate(asset, now=now) is Aggregate.PROCESSING


def test_all_published_with_errors_is_published(now) -> None:
    asset = _asset(
        platforms={"youtube": True, "tiktok": True},
        platformStatus={
            "youtube": {"videoId": "v", "uploadStatus": "failed"},
            "tiktok": {"videoId": "t", "status": "error"},
        },
    )
    assert aggregate(asset, now=now) is Aggregate.PUBLISHED


def test_breakdown_lists_every_supported_platform(now) -> None:
    asset = _asset(
        platforms={"youtube": True, "vimeo": True},
        platformStatus={"youtube": {"uploadStatus": "failed", "error": "quota"}},
    )
    report = breakdown(asset, now=now)
    assert report.status is Aggregate.PROCESSING
    by_platform = {entry.platform: entry for entry in report.platforms}
    assert list(by_platform) == ["youtube", "instagram", "facebook", "tiktok", "vimeo"]
    assert by_platform["youtube"].state is State.FAILED
    assert by_platform["youtube"].error == "quota"
    assert by_platform["youtube"].label == "YouTube"
    assert by_platform["instagram"].state is State.NOT_SELECTED
    assert by_platform["vimeo"].selected is True
    assert by_platform["vimeo"].label == "vimeo"

    payload = report.to_dict()
    assert payload["id"] == "a1"
    assert payload["platforms"][0] == {
        "platform": "youtube",
        "label": "YouTube",
        "selected": True,
        "state": "failed",
        "error": "quota",
    }
