from __future__ import annotations

import logging
import re
from typing import Any, Dict, List

from bs4 import BeautifulSoup

from ..logging_setup import LOGGER_NAME
from ..scraper_observability import utc_now_iso
from ..types import TraktEntry

logger = logging.getLogger(LOGGER_NAME)

SOURCE_URL = "https://trakt.tv/movies/trending"
MAX_ITEMS = 8

_WHITESPACE = re.compile(r"\s+")
_NON_DIGIT = re.compile(r"\D")


def _title_text(heading, year_el) -> str:
    # The year lives in a span inside the heading; keep only the rest.
    parts = [
        s
        for s in heading.strings
        if year_el is None or not any(p is year_el for p in s.parents)
    ]
    return _WHITESPACE.sub(" ", "".join(parts)).strip()


def parse_watchers(text: str) -> int | None:
    """``"1,234 people watching"`` -> ``1234``; no digits -> None."""
    digits = _NON_DIGIT.sub("", text)
    return int(digits) if digits else None


def parse(html: str, now: str | None = None) -> List[Dict[str, Any]]:
    now = now or utc_now_iso()
    soup = BeautifulSoup(html, "html5lib")
    results: List[Dict[str, Any]] = []

    for item in soup.select(".grid-item")[:MAX_ITEMS]:
        heading = item.select_one(".titles h3")
        year_el = item.select_one(".titles .year")
        title = _title_text(heading, year_el) if heading is not None else ""
        year = year_el.get_text().strip() if year_el is not None else ""
        if title and year:
            title = f"{title} ({year})"

        watchers_el = item.select_one(".titles h4")
        watchers = parse_watchers(watchers_el.get_text()) if watchers_el else None
        if watchers is None:
            logger.debug("trakt item %r has no watcher count; skipped", title)
            continue

        results.append(TraktEntry(title=title, watchers=watchers, timestamp=now).to_dict())

    return results
