from __future__ import annotations

import json
import logging
import os
import time
import uuid
from datetime import datetime, timezone
from typing import Any

from .logging_setup import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


def scraper_dry_run_enabled() -> bool:
    return os.getenv("SCRAPER_DRY_RUN", "0").strip().lower() in {
        "1",
        "true",
        "yes",
        "on",
    }


def new_run_id() -> str:
    return str(uuid.uuid4())


def log_event(event: str, **payload: Any) -> None:
    logger.info(
        "SCRAPER_%s %s", event, json.dumps(payload, default=str, sort_keys=True)
    )


class StepTimer:
    def __init__(self) -> None:
        self.started = time.perf_counter()

    def elapsed_ms(self) -> int:
        return int((time.perf_counter() - self.started) * 1000)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    return utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_today_iso() -> str:
    return utc_now().date().isoformat()
