"""HTTP client for the asset backend that performs the actual platform uploads."""

from __future__ import annotations

import logging
import time
from typing import Any, List, Optional
from urllib.parse import quote

import requests
from requests import Response, Session
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .exceptions import BackendAuthError, BackendError
from .publishing import Asset
from .settings import BackendSettings


def _build_session(settings: BackendSettings) -> Session:
    session = requests.Session()
    retry = Retry(
        total=settings.retries,
        backoff_factor=0.5,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET", "DELETE"),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({"Accept": "application/json"})
    if settings.token:
        session.headers["Authorization"] = f"Bearer {settings.token}"
    return session


def _error_message(response: Response, fallback: str) -> str:
    try:
        payload = response.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict):
        message = payload.get("error") or payload.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return fallback


class BackendClient:
    """Fetch and delete asset records on the backend."""

    def __init__(
        self,
        settings: BackendSettings,
        session: Optional[Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.settings = settings
        self.base_url = f"{settings.base_url}/api"
        self.session = session or _build_session(settings)
        self.logger = logger or logging.getLogger(__name__)

    def _request(self, method: str, path: str) -> Response:
        url = f"{self.base_url}{path}"
        start = time.perf_counter()
        try:
            response = self.session.request(
                method, url, timeout=self.settings.timeout_seconds
            )
        except requests.RequestException as exc:
            elapsed = time.perf_counter() - start
            self.logger.info(
                "backend %s url=%s error=%s elapsed=%.2fs", method, url, exc, elapsed
            )
            raise BackendError(f"Backend request failed: {exc}") from exc
        elapsed = time.perf_counter() - start
        self.logger.info(
            "backend %s url=%s status=%s elapsed=%.2fs",
            method,
            url,
            response.status_code,
            elapsed,
        )
        if response.status_code == 401:
            raise BackendAuthError(
                _error_message(response, "Not authenticated"), status=401
            )
        if not response.ok:
            raise BackendError(
                _error_message(response, f"HTTP {response.status_code}"),
                status=response.status_code,
            )
        return response

    def fetch_assets(self) -> List[Asset]:
        response = self._request("GET", "/uploads")
        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise BackendError("Backend returned invalid JSON") from exc
        if not isinstance(payload, list):
            raise BackendError("Backend returned an unexpected payload")
        return [Asset.from_dict(item) for item in payload if isinstance(item, dict)]

    def delete_asset(self, asset_id: str) -> None:
        if not asset_id:
            raise ValueError("asset_id is required")
        self._request("DELETE", f"/uploads/{quote(asset_id, safe='')}")
