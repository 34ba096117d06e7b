"""Decide whether a platform was a publishing target for an asset.

Older backend records omit the explicit ``platforms`` map, so selection is resolved
by an ordered list of strategies: the first one that returns a verdict wins.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple

from .models import Asset
from .normalize import has_progress

SelectionStrategy = Callable[[Asset, str], Optional[bool]]


def explicit_selection(asset: Asset, platform: str) -> Optional[bool]:
    if asset.platforms is None:
        return None
    key = platform.lower()
    if key not in asset.platforms:
        return None
    return asset.platforms[key]


def inferred_selection(asset: Asset, platform: str) -> Optional[bool]:
    # Any backend engagement implies the platform was targeted.
    if has_progress(asset, platform):
        return True
    return None


SELECTION_STRATEGIES: Tuple[SelectionStrategy, ...] = (
    explicit_selection,
    inferred_selection,
)


def is_selected(
    asset: Asset,
    platform: str,
    strategies: Sequence[SelectionStrategy] = SELECTION_STRATEGIES,
) -> bool:
    for strategy in strategies:
        verdict = strategy(asset, platform)
        if verdict is not None:
            return verdict
    return False


def selected_platforms(asset: Asset) -> Tuple[str, ...]:
    """Platforms named in the explicit selection map that resolve as selected."""

    if not asset.platforms:
        return ()
    return tuple(name for name in asset.platforms if is_selected(asset, name))
