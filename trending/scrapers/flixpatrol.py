from __future__ import annotations

import logging
import re
from typing import Any, Dict, List

from bs4 import BeautifulSoup

from ..logging_setup import LOGGER_NAME
from ..scraper_observability import utc_today_iso
from ..types import FlixPatrolEntry

logger = logging.getLogger(LOGGER_NAME)

SOURCE_URL = "https://flixpatrol.com/top10/"

# Section ids on the top10 page, in output order
STREAMING_SERVICES = [
    "netflix-1",
    "hbo-1",
    "amazon-prime-1",
    "apple-tv-1",
]
ROWS_PER_SERVICE = 2

_YEAR_IN_URL = re.compile(r"-(\d{4})(?:/|$)")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_WHITESPACE = re.compile(r"\s+")


def _is_number(value: str) -> bool:
    try:
        float(value)
    except ValueError:
        return False
    return True


def platform_label(service: str) -> str:
    """``amazon-prime-1`` -> ``amazon prime``; ``netflix-1`` -> ``netflix``."""
    parts = service.split("-")
    label = parts[0]
    if len(parts) > 1 and parts[1] and not _is_number(parts[1]):
        label += " " + parts[1]
    return label


def year_from_url(url: str) -> str:
    m = _YEAR_IN_URL.search(url)
    return m.group(1) if m else ""


def parse_points(text: str) -> int | None:
    m = _LEADING_INT.match(text)
    return int(m.group(1)) if m else None


def parse(html: str, today: str | None = None) -> List[Dict[str, Any]]:
    today = today or utc_today_iso()
    soup = BeautifulSoup(html, "html5lib")
    results: List[Dict[str, Any]] = []

    for service in STREAMING_SERVICES:
        service_div = soup.select_one(f"#{service}")
        if service_div is None:
            logger.debug("flixpatrol section #%s not found", service)
            continue

        platform = platform_label(service)
        for index, row in enumerate(service_div.select("tbody tr")[:ROWS_PER_SERVICE]):
            link = row.select_one("td:nth-child(2) a")
            if link is not None:
                title_text = "".join(
                    d.get_text() for d in link.select("div:last-child")
                ).strip()
                title_url = link.get("href") or ""
            else:
                title_text = ""
                title_url = ""

            year = year_from_url(title_url)
            title = f"{title_text} ({year})" if year else title_text

            points_cell = row.select_one("td:nth-child(3)")
            points_text = points_cell.get_text().strip() if points_cell else ""

            entry = FlixPatrolEntry(
                rank=index + 1,
                title=_WHITESPACE.sub(" ", title),
                is_original=row.select_one('span[title*="original"]') is not None,
                points=parse_points(points_text),
                platform=platform,
                date=today,
            )
            results.append(entry.to_dict())

    return results
