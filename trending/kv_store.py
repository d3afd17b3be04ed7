"""Key-value store backed by a single SQL table.

Each namespace behaves like an independent bucket of string values. There is
no locking and no versioning: concurrent writers to the same key race and the
last write wins.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Engine

from .db import KV_NAMESPACE, get_engine
from .logging_setup import LOGGER_NAME
from .scraper_observability import utc_now_iso

logger = logging.getLogger(LOGGER_NAME)

KV_TABLE = "kv_entries"


def parse_utc(value) -> datetime | None:
    """Stored timestamps are UTC; naive values are read as UTC."""
    if value is None or value == "":
        return None
    if not isinstance(value, datetime):
        value = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def ensure_kv_table(engine: Engine) -> None:
    with engine.begin() as conn:
        conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {KV_TABLE} (
                  namespace text NOT NULL,
                  key text NOT NULL,
                  value text NOT NULL,
                  updated_at text NOT NULL,
                  PRIMARY KEY (namespace, key)
                )
                """
            )
        )


class KVStore:
    def __init__(self, engine: Engine, namespace: str = KV_NAMESPACE) -> None:
        self.engine = engine
        self.namespace = namespace
        self._ready = False

    def _ensure(self) -> None:
        if not self._ready:
            ensure_kv_table(self.engine)
            self._ready = True

    def get(self, key: str) -> str | None:
        self._ensure()
        with self.engine.begin() as conn:
            return conn.execute(
                sql_text(
                    f"SELECT value FROM {KV_TABLE} WHERE namespace = :ns AND key = :key"
                ),
                {"ns": self.namespace, "key": key},
            ).scalar_one_or_none()

    def put(self, key: str, value: str) -> None:
        self._ensure()
        with self.engine.begin() as conn:
            conn.execute(
                sql_text(
                    f"""
                    INSERT INTO {KV_TABLE} (namespace, key, value, updated_at)
                    VALUES (:ns, :key, :value, :updated_at)
                    ON CONFLICT (namespace, key) DO UPDATE SET
                      value = EXCLUDED.value,
                      updated_at = EXCLUDED.updated_at
                    """
                ),
                {
                    "ns": self.namespace,
                    "key": key,
                    "value": value,
                    "updated_at": utc_now_iso(),
                },
            )
        logger.debug("KV put %s/%s (%s bytes)", self.namespace, key, len(value))

    def updated_at(self, key: str) -> datetime | None:
        self._ensure()
        with self.engine.begin() as conn:
            raw = conn.execute(
                sql_text(
                    f"SELECT updated_at FROM {KV_TABLE} WHERE namespace = :ns AND key = :key"
                ),
                {"ns": self.namespace, "key": key},
            ).scalar_one_or_none()
        return parse_utc(raw)


def get_kv_store() -> KVStore:
    """Open the store for the configured namespace.

    Raises RuntimeError when no store URL is configured.
    """
    namespace = os.getenv("KV_NAMESPACE", "").strip() or KV_NAMESPACE
    return KVStore(get_engine(), namespace=namespace)
