import os
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from trending.kv_store import KVStore  # noqa: E402

FIXTURES = Path(__file__).parent / "fixtures"

_STORE_ENV = (
    "TRENDING_MOVIES_KV_URL",
    "DATABASE_URL",
    "DATABASE_PRIVATE_URL",
    "POSTGRES_URL",
    "POSTGRESQL_URL",
    "KV_NAMESPACE",
    "SCRAPER_DRY_RUN",
)


@pytest.fixture(autouse=True)
def _clean_store_env(monkeypatch):
    for key in _STORE_ENV:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def kv_url(tmp_path, monkeypatch):
    url = f"sqlite+pysqlite:///{tmp_path / 'kv.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    return url


@pytest.fixture()
def kv_store(kv_url):
    return KVStore(create_engine(kv_url, future=True))


@pytest.fixture()
def flixpatrol_html():
    return (FIXTURES / "flixpatrol_top10.html").read_text(encoding="utf-8")


@pytest.fixture()
def trakt_html():
    return (FIXTURES / "trakt_trending.html").read_text(encoding="utf-8")
