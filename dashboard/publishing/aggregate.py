"""Combine per-platform lifecycle states into one asset status."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from .models import Asset, AssetAggregateState, PlatformLifecycleState
from .normalize import has_progress, normalize
from .platforms import find_profile, supported_platforms
from .resolver import resolve_state
from .selection import is_selected, selected_platforms
from .utils import resolve_now

State = PlatformLifecycleState
Aggregate = AssetAggregateState

PUBLISHED_STATES = frozenset({State.PUBLISHED, State.PUBLISHED_WITH_ERRORS})


def aggregate(asset: Asset, *, now: Optional[datetime] = None) -> AssetAggregateState:
    """Return the overall status of ``asset`` across its selected platforms.

    A single published platform among failed or pending ones still reports the
    asset as published.
    """

    selected = selected_platforms(asset)
    if not selected:
        return Aggregate.PENDING

    moment = resolve_now(now)
    if asset.is_scheduled(moment):
        return Aggregate.SCHEDULED

    if not any(has_progress(asset, platform) for platform in selected):
        return Aggregate.PENDING

    states = [resolve_state(asset, platform, now=moment) for platform in selected]
    counts = Counter(states)
    total = len(states)
    published = sum(counts[state] for state in PUBLISHED_STATES)

    if published == total:
        return Aggregate.PUBLISHED
    if counts[State.PROCESSING] > 0:
        return Aggregate.PROCESSING
    if published > 0:
        return Aggregate.PUBLISHED
    if counts[State.FAILED] == total:
        return Aggregate.FAILED
    if counts[State.PENDING] == total:
        return Aggregate.PENDING
    return Aggregate.PROCESSING


@dataclass(frozen=True)
class PlatformReport:
    platform: str
    label: str
    selected: bool
    state: PlatformLifecycleState
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "platform": self.platform,
            "label": self.label,
            "selected": self.selected,
            "state": self.state.value,
            "error": self.error,
        }


@dataclass(frozen=True)
class AssetStatusReport:
    asset_id: str
    status: AssetAggregateState
    platforms: List[PlatformReport]

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.asset_id,
            "status": self.status.value,
            "platforms": [report.to_dict() for report in self.platforms],
        }


def breakdown(asset: Asset, *, now: Optional[datetime] = None) -> AssetStatusReport:
    """Per-platform detail for ``asset`` plus its aggregate status."""

    moment = resolve_now(now)
    names: List[str] = list(supported_platforms())
    for extra in list(asset.platforms or {}) + list(asset.platform_status):
        if extra not in names:
            names.append(extra)

    reports: List[PlatformReport] = []
    for name in names:
        profile = find_profile(name)
        reports.append(
            PlatformReport(
                platform=name,
                label=profile.label if profile else name,
                selected=is_selected(asset, name),
                state=resolve_state(asset, name, now=moment),
                error=normalize(asset, name).error,
            )
        )
    return AssetStatusReport(
        asset_id=asset.id,
        status=aggregate(asset, now=moment),
        platforms=reports,
    )
