from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


# Variant identifiers
VARIANT_FLIXPATROL = "flixpatrol"
VARIANT_TRAKT = "trakt"


@dataclass
class FlixPatrolEntry:
    rank: int
    title: str
    is_original: bool
    points: Optional[int]
    platform: str
    date: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rank": self.rank,
            "title": self.title,
            "isOriginal": self.is_original,
            "points": self.points,
            "platform": self.platform,
            "date": self.date,
        }


@dataclass
class TraktEntry:
    title: str
    watchers: Optional[int]
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "watchers": self.watchers,
            "timestamp": self.timestamp,
        }
