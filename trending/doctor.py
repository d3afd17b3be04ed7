from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import timedelta

from .cache import CACHE_KEY, load_snapshot
from .db import _DB_URL_ALIASES, check_db_connectivity
from .kv_store import KVStore
from .logging_setup import LOGGER_NAME
from .scraper_observability import utc_now

logger = logging.getLogger(LOGGER_NAME)

STALE_AFTER = timedelta(hours=24)


@dataclass
class DoctorReport:
    ok: bool
    failures: list[str]
    warnings: list[str]


def _check_env() -> list[str]:
    failures: list[str] = []
    if not any(os.getenv(k) for k in _DB_URL_ALIASES):
        failures.append(
            "Missing KV store URL env (TRENDING_MOVIES_KV_URL or DATABASE_URL aliases)"
        )
    return failures


def _check_cache(store: KVStore) -> tuple[list[str], list[str]]:
    failures: list[str] = []
    warnings: list[str] = []

    try:
        entries = load_snapshot(store)
    except ValueError as exc:
        failures.append(f"Cached {CACHE_KEY} is not valid JSON: {exc}")
        return failures, warnings

    if entries is None:
        warnings.append(f"No cached {CACHE_KEY} yet (run `refresh`)")
        return failures, warnings
    if not entries:
        warnings.append(f"Cached {CACHE_KEY} is an empty list")

    try:
        updated_at = store.updated_at(CACHE_KEY)
    except ValueError as exc:
        failures.append(f"Cached {CACHE_KEY} has an unreadable timestamp: {exc}")
        return failures, warnings

    if updated_at is not None and utc_now() - updated_at > STALE_AFTER:
        warnings.append(f"Cache stale >24h (last write {updated_at.isoformat()})")

    return failures, warnings


def run_doctor(store: KVStore | None) -> DoctorReport:
    failures = _check_env()
    warnings: list[str] = []

    if store is None:
        report = DoctorReport(ok=False, failures=failures, warnings=warnings)
        _log_report(report)
        return report

    try:
        check_db_connectivity(store.engine)
    except Exception as exc:
        failures.append(f"KV store unreachable: {type(exc).__name__}: {exc}")
        report = DoctorReport(ok=False, failures=failures, warnings=warnings)
        _log_report(report)
        return report

    cache_failures, cache_warnings = _check_cache(store)
    failures.extend(cache_failures)
    warnings.extend(cache_warnings)

    report = DoctorReport(ok=not failures, failures=failures, warnings=warnings)
    _log_report(report)
    return report


def _log_report(report: DoctorReport) -> None:
    if report.ok:
        logger.info("Doctor OK")
    else:
        logger.error("Doctor FAIL")

    for item in report.failures:
        logger.error("DOCTOR_FAIL %s", item)
    for item in report.warnings:
        logger.warning("DOCTOR_WARN %s", item)
