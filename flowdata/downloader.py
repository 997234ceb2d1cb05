"""Downloading of the plugin data from the API."""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, Callable

__all__ = [
    "PLUGIN_API_DATA_URL",
    "HttpResponse",
    "ApiDataDownloadedEvent",
    "ApiDataDownloader",
    "http_get",
]

logger = logging.getLogger(__name__)

PLUGIN_API_DATA_URL = "https://ecfmp.vatsim.net/api/v1/plugin?deleted=1"

_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class HttpResponse:
    """The status code and body of an HTTP response; status 0 means no response."""

    status_code: int
    body: str


@dataclass(frozen=True)
class ApiDataDownloadedEvent:
    """Published with the decoded JSON object after a successful download."""

    data: dict


def http_get(url: str) -> HttpResponse:
    """Perform a GET request, returning the response whatever its status."""
    request = urllib.request.Request(url, headers={"Accept": "application/json"})
    try:
        with urllib.request.urlopen(request, timeout=_TIMEOUT_SECONDS) as response:
            body = response.read().decode("utf-8", errors="replace")
            return HttpResponse(response.status, body)
    except urllib.error.HTTPError as error:
        body = error.read().decode("utf-8", errors="replace")
        return HttpResponse(error.code, body)
    except OSError as error:
        logger.warning("Request to %s failed: %s", url, error)
        return HttpResponse(0, "")


class ApiDataDownloader:
    """Downloads the API data and publishes it to listeners."""

    def __init__(
        self,
        http_get: Callable[[str], HttpResponse],
        publish: Callable[[Any], None],
    ) -> None:
        self._http_get = http_get
        self._publish = publish

    def on_event(self, event: Any) -> None:
        """Handle a download-required event by fetching and publishing the data."""
        logger.info("Downloading data")
        response = self._http_get(PLUGIN_API_DATA_URL)
        if response.status_code != 200:
            logger.error(
                "Failed to download data from ECFMP, status code was %d",
                response.status_code,
            )
            return

        try:
            parsed = json.loads(response.body)
        except ValueError:
            logger.error("Failed to parse data from ECFMP, was not valid JSON")
            return

        if not isinstance(parsed, dict):
            logger.error("Failed to parse data from ECFMP, was not a JSON object")
            return

        self._publish(ApiDataDownloadedEvent(parsed))