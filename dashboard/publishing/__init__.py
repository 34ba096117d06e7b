from .aggregate import AssetStatusReport, PlatformReport, aggregate, breakdown
from .exceptions import UnsupportedPlatformError
from .listing import AssetRow, ListingPage, ListingQuery, list_assets
from .models import (
    Asset,
    AssetAggregateState,
    PlatformFamily,
    PlatformLifecycleState,
    PlatformProfile,
    PlatformSignal,
)
from .normalize import normalize
from .platforms import find_profile, get_profile, supported_platforms
from .refresh import should_poll
from .resolver import resolve_state
from .selection import is_selected, selected_platforms

__all__ = [
    "Asset",
    "AssetAggregateState",
    "AssetRow",
    "AssetStatusReport",
    "ListingPage",
    "ListingQuery",
    "PlatformFamily",
    "PlatformLifecycleState",
    "PlatformProfile",
    "PlatformReport",
    "PlatformSignal",
    "UnsupportedPlatformError",
    "aggregate",
    "breakdown",
    "find_profile",
    "get_profile",
    "is_selected",
    "list_assets",
    "normalize",
    "resolve_state",
    "selected_platforms",
    "should_poll",
    "supported_platforms",
]
