from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .utils import parse_timestamp


class PlatformLifecycleState(str, Enum):
    """Publishing progress of one asset on one platform."""

    NOT_SELECTED = "not_selected"
    PENDING = "pending"
    SCHEDULED = "scheduled"
    PROCESSING = "processing"
    PUBLISHED = "published"
    PUBLISHED_WITH_ERRORS = "published_with_errors"
    FAILED = "failed"


class AssetAggregateState(str, Enum):
    """Overall publishing progress of one asset across its platforms."""

    PENDING = "pending"
    SCHEDULED = "scheduled"
    PROCESSING = "processing"
    PUBLISHED = "published"
    FAILED = "failed"


class PlatformFamily(str, Enum):
    UPLOAD_PIPELINE = "upload_pipeline"
    SIMPLE_PUBLISH = "simple_publish"


@dataclass(frozen=True)
class PlatformProfile:
    name: str
    label: str
    family: PlatformFamily
    convenience_id: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PlatformSignal:
    """Canonical view of a raw per-platform status record."""

    id: Optional[str] = None
    status: Optional[str] = None
    upload_status: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not (self.id or self.status or self.upload_status)


def _coerce_str(value: object) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_flag(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


@dataclass(frozen=True)
class Asset:
    """Read-only snapshot of one backend asset record."""

    id: str
    title: str = ""
    description: str = ""
    tags: Tuple[str, ...] = ()
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    scheduled_for: Optional[datetime] = None
    publish_time: Optional[datetime] = None
    platforms: Optional[Mapping[str, bool]] = None
    platform_status: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    extra: Mapping[str, Any] = field(default_factory=dict)
    thumbnail_url: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Asset":
        if not isinstance(payload, Mapping):
            payload = {}

        platforms: Optional[Dict[str, bool]] = None
        raw_platforms = payload.get("platforms")
        if isinstance(raw_platforms, Mapping):
            platforms = {
                str(name).lower(): _coerce_flag(flag)
                for name, flag in raw_platforms.items()
            }

        platform_status: Dict[str, Mapping[str, Any]] = {}
        raw_status = payload.get("platformStatus")
        if isinstance(raw_status, Mapping):
            for name, record in raw_status.items():
                if isinstance(record, Mapping):
                    platform_status[str(name).lower()] = dict(record)

        raw_tags = payload.get("tags")
        tags: Tuple[str, ...] = ()
        if isinstance(raw_tags, (list, tuple)):
            tags = tuple(tag for tag in raw_tags if isinstance(tag, str))

        extra = {
            key: payload[key]
            for key in ("youtubeVideoId", "facebookPostId", "instagramData")
            if key in payload
        }

        return cls(
            id=_coerce_str(payload.get("id")) or _coerce_str(payload.get("_id")) or "",
            title=_coerce_str(payload.get("title")) or "",
            description=_coerce_str(payload.get("description")) or "",
            tags=tags,
            status=_coerce_str(payload.get("status")),
            created_at=parse_timestamp(payload.get("createdAt")),
            scheduled_for=parse_timestamp(payload.get("scheduledFor")),
            publish_time=parse_timestamp(payload.get("publishTime")),
            platforms=platforms,
            platform_status=platform_status,
            extra=extra,
            thumbnail_url=_coerce_str(payload.get("youtubeThumbnailUrl"))
            or _coerce_str(payload.get("thumbnailUrl")),
        )

    def raw_record(self, platform: str) -> Mapping[str, Any]:
        return self.platform_status.get(platform.lower()) or {}

    def lookup(self, path: Tuple[str, ...]) -> object:
        """Follow ``path`` through the convenience fields, ``None`` when missing."""

        current: object = self.extra
        for key in path:
            if not isinstance(current, Mapping):
                return None
            current = current.get(key)
        return current

    def is_scheduled(self, now: datetime) -> bool:
        return self.scheduled_for is not None and self.scheduled_for > now
