from __future__ import annotations

from typing import Dict, Optional, Tuple

from .exceptions import UnsupportedPlatformError
from .models import PlatformFamily, PlatformProfile

_PROFILES: Dict[str, PlatformProfile] = {
    profile.name: profile
    for profile in (
        PlatformProfile(
            name="youtube",
            label="YouTube",
            family=PlatformFamily.UPLOAD_PIPELINE,
            convenience_id=("youtubeVideoId",),
        ),
        PlatformProfile(
            name="instagram",
            label="Instagram",
            family=PlatformFamily.SIMPLE_PUBLISH,
            convenience_id=("instagramData", "creationId"),
        ),
        PlatformProfile(
            name="facebook",
            label="Facebook",
            family=PlatformFamily.SIMPLE_PUBLISH,
            convenience_id=("facebookPostId",),
        ),
        PlatformProfile(
            name="tiktok",
            label="TikTok",
            family=PlatformFamily.SIMPLE_PUBLISH,
        ),
    )
}


def find_profile(platform: str) -> Optional[PlatformProfile]:
    return _PROFILES.get(platform.lower())


def get_profile(platform: str) -> PlatformProfile:
    profile = find_profile(platform)
    if profile is None:
        raise UnsupportedPlatformError(f"Unsupported platform: {platform}")
    return profile


def supported_platforms() -> Tuple[str, ...]:
    return tuple(_PROFILES.keys())
