from __future__ import annotations

from typing import Iterable

from .models import Asset
from .settings import POLLING_STATUS


def should_poll(assets: Iterable[Asset]) -> bool:
    """True while any asset, or any of its platform records, is still processing."""

    for asset in assets:
        if asset.status == POLLING_STATUS:
            return True
        for record in asset.platform_status.values():
            if record.get("status") == POLLING_STATUS:
                return True
    return False
