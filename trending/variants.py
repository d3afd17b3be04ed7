from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from .scrapers import flixpatrol, trakt
from .types import VARIANT_FLIXPATROL, VARIANT_TRAKT


@dataclass(frozen=True)
class Variant:
    name: str
    source_url: str
    api_path: str
    parse: Callable[[str], List[Dict[str, Any]]]
    # trakt keeps a rolling, de-duplicated list; flixpatrol replaces it
    merge_with_existing: bool
    # flixpatrol scrapes on a cold cache; trakt answers 404
    fetch_on_cold_cache: bool


VARIANTS: Dict[str, Variant] = {
    VARIANT_FLIXPATROL: Variant(
        name=VARIANT_FLIXPATROL,
        source_url=flixpatrol.SOURCE_URL,
        api_path="/api/trending",
        parse=flixpatrol.parse,
        merge_with_existing=False,
        fetch_on_cold_cache=True,
    ),
    VARIANT_TRAKT: Variant(
        name=VARIANT_TRAKT,
        source_url=trakt.SOURCE_URL,
        api_path="/api/trending-movies",
        parse=trakt.parse,
        merge_with_existing=True,
        fetch_on_cold_cache=False,
    ),
}


def get_variant(name: str) -> Variant:
    try:
        return VARIANTS[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown variant {name!r} (expected one of: {', '.join(VARIANTS)})"
        ) from None
