"""Map heterogeneous per-platform status records onto :class:`PlatformSignal`."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from .models import Asset, PlatformSignal
from .platforms import find_profile
from .settings import ERROR_KEYS, IDENTIFIER_KEYS, STATUS_KEYS, UPLOAD_STATUS_KEYS


def _first_present(raw: Mapping[str, Any], keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        value = raw.get(key)
        if value is None or isinstance(value, (Mapping, list, bool)):
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def _token(raw: Mapping[str, Any], keys: Sequence[str]) -> Optional[str]:
    value = _first_present(raw, keys)
    return value.lower() if value else None


def convenience_id(asset: Asset, platform: str) -> Optional[str]:
    """Return the top-level identifier the backend duplicates for ``platform``."""

    profile = find_profile(platform)
    if profile is None or not profile.convenience_id:
        return None
    value = asset.lookup(profile.convenience_id)
    if value is None or isinstance(value, (Mapping, list, bool)):
        return None
    text = str(value).strip()
    return text or None


def normalize(asset: Asset, platform: str) -> PlatformSignal:
    """Return the canonical signal for ``platform`` on ``asset``.

    Status and upload status fall back to each other so that platforms which only
    report one of them still produce both tokens.
    """

    raw = asset.raw_record(platform)
    return PlatformSignal(
        id=_first_present(raw, IDENTIFIER_KEYS) or convenience_id(asset, platform),
        status=_token(raw, STATUS_KEYS),
        upload_status=_token(raw, UPLOAD_STATUS_KEYS),
        error=_first_present(raw, ERROR_KEYS),
    )


def has_progress(asset: Asset, platform: str) -> bool:
    """True when the backend has engaged ``platform`` for ``asset`` at all."""

    raw = asset.raw_record(platform)
    if convenience_id(asset, platform):
        return True
    if _first_present(raw, IDENTIFIER_KEYS):
        return True
    return _first_present(raw, STATUS_KEYS) is not None
