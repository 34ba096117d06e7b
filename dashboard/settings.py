from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, List, Optional


@dataclass(frozen=True)
class BackendSettings:
    base_url: str
    token: Optional[str]
    timeout_seconds: float
    retries: int


@dataclass(frozen=True)
class CorsSettings:
    allow_origins: List[str]
    allow_methods: List[str]
    allow_headers: List[str]
    max_age: int


@dataclass(frozen=True)
class DashboardSettings:
    backend: BackendSettings
    cors: CorsSettings
    log_level: str


def _parse_csv(name: str, default: Iterable[str]) -> List[str]:
    raw = os.environ.get(name)
    if raw is None:
        return list(default)
    values = [item.strip() for item in raw.split(",") if item.strip()]
    return values or list(default)


def load_backend_settings(base_url: Optional[str] = None) -> BackendSettings:
    url = base_url or os.environ.get("PUBLISH_BACKEND_URL", "http://localhost:5000")
    return BackendSettings(
        base_url=url.rstrip("/"),
        token=os.environ.get("PUBLISH_BACKEND_TOKEN") or None,
        timeout_seconds=float(os.environ.get("PUBLISH_BACKEND_TIMEOUT_SECONDS", "10")),
        retries=int(os.environ.get("PUBLISH_BACKEND_RETRIES", "2")),
    )


def load_settings() -> DashboardSettings:
    cors = CorsSettings(
        allow_origins=_parse_csv("API_CORS_ALLOW_ORIGINS", ["*"]),
        allow_methods=_parse_csv("API_CORS_ALLOW_METHODS", ["GET", "DELETE", "OPTIONS"]),
        allow_headers=_parse_csv("API_CORS_ALLOW_HEADERS", ["Authorization", "Content-Type"]),
        max_age=int(os.environ.get("API_CORS_MAX_AGE", "600")),
    )
    return DashboardSettings(
        backend=load_backend_settings(),
        cors=cors,
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )
