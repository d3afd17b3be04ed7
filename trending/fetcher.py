from __future__ import annotations

import logging
import os

import requests

from .logging_setup import LOGGER_NAME
from .scraper_observability import StepTimer, log_event

logger = logging.getLogger(LOGGER_NAME)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class FetchError(RuntimeError):
    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(f"HTTP error! status: {status_code}")
        self.url = url
        self.status_code = status_code


def _default_timeout() -> float:
    return float(os.getenv("FETCH_TIMEOUT_SECONDS", "20"))


def fetch_html(url: str, *, timeout: float | None = None, run_id: str | None = None) -> str:
    """GET ``url`` with a browser User-Agent and return the body text.

    Non-2xx responses raise FetchError. Network errors from requests are not
    caught here and there is no retry.
    """
    timer = StepTimer()
    r = requests.get(
        url,
        headers={"User-Agent": USER_AGENT},
        timeout=_default_timeout() if timeout is None else timeout,
    )
    log_event(
        "FETCH",
        run_id=run_id,
        url=url,
        status=r.status_code,
        bytes=len(r.content),
        latency_ms=timer.elapsed_ms(),
    )
    if not r.ok:
        raise FetchError(url, r.status_code)
    return r.text
