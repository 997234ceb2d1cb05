"""Requests a fresh API download at a fixed interval."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

__all__ = ["RUN_INTERVAL", "ApiDataDownloadRequiredEvent", "ApiDataScheduler"]

RUN_INTERVAL = timedelta(seconds=90)


@dataclass(frozen=True)
class ApiDataDownloadRequiredEvent:
    """Published when the API data should be downloaded again."""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ApiDataScheduler:
    """On each timer tick, requests a download if the interval has passed."""

    def __init__(
        self,
        publish: Callable[[Any], None],
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._publish = publish
        self._clock = clock or _utc_now
        self._last_run: datetime | None = None

    def on_event(self, event: Any = None) -> None:
        """Handle a timer tick."""
        now = self._clock()
        if self._last_run is None or self._last_run + RUN_INTERVAL < now:
            self._last_run = now
            self._publish(ApiDataDownloadRequiredEvent())