from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from .kv_store import KVStore
from .logging_setup import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

CACHE_KEY = "TRENDING_MOVIES"
MAX_ENTRIES = 8

Entry = Dict[str, Any]


def _same_entry(a: Entry, b: Entry) -> bool:
    return a.get("title") == b.get("title") and a.get("watchers") == b.get("watchers")


def merge_entries(fresh: List[Entry], existing: List[Entry]) -> List[Entry]:
    """Prepend entries not already stored and keep the first MAX_ENTRIES.

    An entry counts as already stored when an existing entry has the same
    title and the same watcher count.
    """
    new_entries = [e for e in fresh if not any(_same_entry(e, old) for old in existing)]
    merged = (new_entries + list(existing))[:MAX_ENTRIES]
    logger.info(
        "Merged %s new entries into %s existing (kept %s)",
        len(new_entries),
        len(existing),
        len(merged),
    )
    return merged


def load_raw(store: KVStore) -> Optional[str]:
    raw = store.get(CACHE_KEY)
    return raw or None


def load_snapshot(store: KVStore) -> Optional[List[Entry]]:
    raw = load_raw(store)
    if raw is None:
        return None
    return json.loads(raw)


def save_snapshot(store: KVStore, entries: List[Entry]) -> str:
    payload = json.dumps(entries)
    store.put(CACHE_KEY, payload)
    return payload
