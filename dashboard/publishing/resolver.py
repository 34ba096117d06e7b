"""Resolve the lifecycle state of one platform for one asset."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, Optional

from .models import Asset, PlatformFamily, PlatformLifecycleState, PlatformSignal
from .normalize import normalize
from .platforms import find_profile
from .selection import is_selected
from .utils import resolve_now

logger = logging.getLogger(__name__)

State = PlatformLifecycleState

PIPELINE_DONE = frozenset({"processed", "success", "published", "uploaded"})
PIPELINE_IN_PROGRESS = frozenset({"processing", "uploaded"})
SIMPLE_IN_PROGRESS = frozenset({"processing", "uploading"})
FAILED_TOKENS = frozenset({"failed", "error"})

FamilyResolver = Callable[[PlatformSignal], PlatformLifecycleState]


def _resolve_upload_pipeline(signal: PlatformSignal) -> PlatformLifecycleState:
    token = signal.upload_status
    if signal.id:
        if token is None or token in PIPELINE_DONE:
            return State.PUBLISHED
        if token in PIPELINE_IN_PROGRESS:
            return State.PROCESSING
        if token == "failed":
            # The asset landed; a later pipeline stage reported the failure.
            return State.PUBLISHED_WITH_ERRORS
        logger.debug("Unrecognised upload status %r; treating as processing", token)
        return State.PROCESSING
    if token in PIPELINE_IN_PROGRESS:
        return State.PROCESSING
    if token == "failed":
        return State.FAILED
    return State.PENDING


def _resolve_simple_publish(signal: PlatformSignal) -> PlatformLifecycleState:
    token = signal.status
    if signal.id:
        if token in FAILED_TOKENS:
            return State.PUBLISHED_WITH_ERRORS
        return State.PUBLISHED
    if token in SIMPLE_IN_PROGRESS:
        return State.PROCESSING
    if token in FAILED_TOKENS:
        return State.FAILED
    return State.PENDING


FAMILY_RESOLVERS: Dict[PlatformFamily, FamilyResolver] = {
    PlatformFamily.UPLOAD_PIPELINE: _resolve_upload_pipeline,
    PlatformFamily.SIMPLE_PUBLISH: _resolve_simple_publish,
}

_missing = set(PlatformFamily) - set(FAMILY_RESOLVERS)
if _missing:  # pragma: no cover - guards against adding a family without a resolver
    raise RuntimeError(f"No resolver registered for {sorted(f.value for f in _missing)}")


def resolve_state(
    asset: Asset, platform: str, *, now: Optional[datetime] = None
) -> PlatformLifecycleState:
    """Return the lifecycle state of ``platform`` for ``asset``.

    Rules are evaluated in order: selection, schedule, absence of any backend
    signal, then the platform family's own vocabulary.
    """

    if not is_selected(asset, platform):
        return State.NOT_SELECTED
    if asset.is_scheduled(resolve_now(now)):
        return State.SCHEDULED

    signal = normalize(asset, platform)
    if signal.is_empty:
        return State.PENDING

    profile = find_profile(platform)
    if profile is None:
        return State.PENDING
    return FAMILY_RESOLVERS[profile.family](signal)
