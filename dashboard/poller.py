"""Background refresh loop that keeps the asset snapshot current while uploads run."""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional, Sequence

from .exceptions import BackendError
from .publishing import Asset, should_poll
from .publishing.settings import POLL_INTERVAL_SECONDS

Fetch = Callable[[], Sequence[Asset]]
UpdateCallback = Callable[[List[Asset]], None]
ErrorCallback = Callable[[BackendError], None]


class AssetPoller:
    """Refresh the asset collection on a fixed interval until nothing is processing.

    Each tick waits for the previous fetch to complete, so at most one fetch is in
    flight. :meth:`stop` cancels the loop; no callbacks fire afterwards.
    """

    def __init__(
        self,
        fetch: Fetch,
        *,
        interval: float = POLL_INTERVAL_SECONDS,
        on_update: Optional[UpdateCallback] = None,
        on_error: Optional[ErrorCallback] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._fetch = fetch
        self.interval = max(interval, 0.0)
        self._on_update = on_update
        self._on_error = on_error
        self.logger = logger or logging.getLogger(__name__)
        self._assets: List[Asset] = []
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.failure: Optional[BaseException] = None

    @property
    def assets(self) -> List[Asset]:
        with self._lock:
            return list(self._assets)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def refresh(self) -> bool:
        """Fetch once, replace the snapshot and report whether polling should go on."""

        assets = list(self._fetch())
        if self._stop.is_set():
            return False
        with self._lock:
            self._assets = assets
        if self._on_update:
            self._on_update(list(assets))
        return should_poll(assets)

    def _tick(self) -> bool:
        try:
            return self.refresh()
        except BackendError as exc:
            self.logger.warning("Asset refresh failed: %s", exc)
            if self._on_error and not self._stop.is_set():
                self._on_error(exc)
            return True

    def _run(self, delay: float) -> None:
        self.logger.info("Polling assets every %.1fs", self.interval)
        if delay > 0 and self._stop.wait(delay):
            return
        try:
            while not self._stop.is_set():
                if not self._tick():
                    self.logger.info("No assets processing; polling stopped")
                    break
                if self._stop.wait(self.interval):
                    break
        except Exception as exc:
            self.failure = exc
            self.logger.warning("Asset polling aborted: %s", exc, exc_info=True)

    def start(self, delay: float = 0.0) -> None:
        """Launch the loop; the first refresh happens after ``delay`` seconds."""

        if self.running:
            return
        self._stop.clear()
        self.failure = None
        self._thread = threading.Thread(
            target=self._run, args=(delay,), name="asset-poller", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None

    def join(self, timeout: Optional[float] = None) -> None:
        thread = self._thread
        if thread is not None:
            thread.join(timeout)

    def __enter__(self) -> "AssetPoller":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
