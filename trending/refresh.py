from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

from .cache import load_snapshot, merge_entries, save_snapshot
from .fetcher import fetch_html
from .kv_store import KVStore, get_kv_store
from .logging_setup import LOGGER_NAME
from .scraper_observability import (
    StepTimer,
    log_event,
    new_run_id,
    scraper_dry_run_enabled,
    utc_now_iso,
)
from .variants import Variant

logger = logging.getLogger(LOGGER_NAME)


def refresh(
    variant: Variant,
    store: KVStore,
    *,
    dry_run: bool | None = None,
    run_id: str | None = None,
) -> List[Dict[str, Any]]:
    """Fetch, extract, optionally merge, and store. Returns the stored list."""
    dry_run = scraper_dry_run_enabled() if dry_run is None else dry_run
    run_id = run_id or new_run_id()
    scraper = variant.name

    log_event("START", scraper=scraper, run_id=run_id, dry_run=dry_run)
    try:
        html = fetch_html(variant.source_url, run_id=run_id)
        entries = variant.parse(html)
        log_event("PARSE", scraper=scraper, run_id=run_id, items_found=len(entries))

        if variant.merge_with_existing:
            existing = load_snapshot(store) or []
            entries = merge_entries(entries, existing)

        if dry_run:
            log_event(
                "WRITE",
                scraper=scraper,
                run_id=run_id,
                entries=len(entries),
                mode="dry-run",
            )
        else:
            write_timer = StepTimer()
            save_snapshot(store, entries)
            log_event(
                "WRITE",
                scraper=scraper,
                run_id=run_id,
                entries=len(entries),
                duration_ms=write_timer.elapsed_ms(),
            )
    except Exception as exc:
        log_event(
            "END",
            scraper=scraper,
            run_id=run_id,
            success=False,
            error_type=type(exc).__name__,
        )
        raise

    log_event("END", scraper=scraper, run_id=run_id, success=True, entries=len(entries))
    return entries


def run_scheduled(
    variant: Variant,
    store_factory: Callable[[], KVStore] = get_kv_store,
    *,
    dry_run: bool | None = None,
) -> Dict[str, Any]:
    """Timer entry point: same flow as a manual refresh, never raises."""
    try:
        store = store_factory()
        entries = refresh(variant, store, dry_run=dry_run)
        return {
            "success": True,
            "message": f"Successfully updated {len(entries)} movies",
            "timestamp": utc_now_iso(),
        }
    except Exception as exc:
        logger.exception("Error in scheduled task (variant=%s)", variant.name)
        return {
            "success": False,
            "message": "Scheduled task failed",
            "error": str(exc),
            "timestamp": utc_now_iso(),
        }
