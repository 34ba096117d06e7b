"""Flask routes exposing asset publishing status to the dashboard front-end."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from .backend import BackendClient
from .exceptions import BackendAuthError, BackendError
from .publishing import (
    Asset,
    AssetRow,
    ListingQuery,
    breakdown,
    find_profile,
    list_assets,
    resolve_state,
    should_poll,
    supported_platforms,
)
from .publishing.settings import POLL_INTERVAL_SECONDS
from .publishing.utils import format_timestamp, relative_time, utcnow

blueprint = Blueprint("publishing", __name__, url_prefix="/api/publishing")

_QUERY_PARAMS = ("search", "status", "sortKey", "sortDir", "page", "perPage", "hiddenIds")


def _backend() -> BackendClient:
    return current_app.config["PUBLISHING_BACKEND"]


def _serialise_asset(row: AssetRow, now: datetime) -> dict:
    asset = row.asset
    platforms: Dict[str, str] = {}
    for name in supported_platforms():
        platforms[name] = resolve_state(asset, name, now=now).value
    return {
        "id": asset.id,
        "title": asset.title or "Untitled",
        "description": asset.description,
        "tags": list(asset.tags),
        "status": row.status.value,
        "backendStatus": asset.status,
        "createdAt": format_timestamp(asset.created_at),
        "createdAgo": relative_time(asset.created_at, now),
        "scheduledFor": format_timestamp(asset.scheduled_for)
        if asset.scheduled_for
        else None,
        "thumbnailUrl": asset.thumbnail_url,
        "platforms": platforms,
    }


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _backend_error(exc: BackendError):
    if isinstance(exc, BackendAuthError):
        return _error(str(exc), 401)
    current_app.logger.warning("Backend request failed: %s", exc)
    return _error(str(exc), 502)


def _find_asset(asset_id: str) -> Optional[Asset]:
    for asset in _backend().fetch_assets():
        if asset.id == asset_id:
            return asset
    return None


@blueprint.get("/platforms")
def platforms():
    payload = []
    for name in supported_platforms():
        profile = find_profile(name)
        payload.append(
            {"platform": name, "label": profile.label, "family": profile.family.value}
        )
    return jsonify({"platforms": payload})


@blueprint.get("/assets")
def assets():
    raw = {key: request.args[key] for key in _QUERY_PARAMS if request.args.get(key)}
    try:
        query = ListingQuery.model_validate(raw)
    except ValidationError as exc:
        return _error(f"Invalid query: {exc.errors()[0].get('msg', 'invalid value')}", 400)

    try:
        collection = _backend().fetch_assets()
    except BackendError as exc:
        return _backend_error(exc)

    now = utcnow()
    page = list_assets(collection, query, now=now)
    return jsonify(
        {
            "items": [_serialise_asset(row, now) for row in page.rows],
            "meta": {
                "total": page.total,
                "filtered": page.filtered,
                "hidden": page.hidden,
                "page": page.page,
                "perPage": page.per_page,
                "totalPages": page.total_pages,
                "shouldPoll": should_poll(collection),
                "pollIntervalMs": int(POLL_INTERVAL_SECONDS * 1000),
            },
        }
    )


@blueprint.get("/assets/<asset_id>")
def asset_detail(asset_id: str):
    try:
        asset = _find_asset(asset_id)
    except BackendError as exc:
        return _backend_error(exc)
    if asset is None:
        return _error("Asset not found", 404)
    payload = breakdown(asset).to_dict()
    payload["title"] = asset.title or "Untitled"
    payload["scheduledFor"] = format_timestamp(asset.scheduled_for) if asset.scheduled_for else None
    return jsonify(payload)


@blueprint.delete("/assets/<asset_id>")
def delete_asset(asset_id: str):
    try:
        _backend().delete_asset(asset_id)
    except BackendError as exc:
        return _backend_error(exc)
    current_app.logger.info("Deleted asset %s", asset_id)
    return jsonify({"ok": True})
