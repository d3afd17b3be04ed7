import json

import pytest

import trending.refresh as refresh_mod
from trending.cache import CACHE_KEY, load_snapshot, save_snapshot
from trending.fetcher import FetchError
from trending.refresh import refresh, run_scheduled
from trending.variants import get_variant


@pytest.fixture()
def serve_html(monkeypatch):
    pages = {}

    def fake_fetch(url, **kwargs):
        return pages[url]

    monkeypatch.setattr(refresh_mod, "fetch_html", fake_fetch)
    return pages


def test_flixpatrol_refresh_replaces_snapshot(kv_store, serve_html, flixpatrol_html):
    variant = get_variant("flixpatrol")
    serve_html[variant.source_url] = flixpatrol_html
    save_snapshot(kv_store, [{"title": "stale"}])

    entries = refresh(variant, kv_store)

    assert len(entries) == 4
    assert load_snapshot(kv_store) == entries


def test_trakt_refresh_merges_with_existing(kv_store, serve_html, trakt_html):
    variant = get_variant("trakt")
    serve_html[variant.source_url] = trakt_html
    old = {"title": "Older Film (2023)", "watchers": 3, "timestamp": "t0"}
    save_snapshot(kv_store, [old])

    entries = refresh(variant, kv_store)

    assert entries[-1] == old
    assert [e["title"] for e in entries[:2]] == ["Dune: Part Two (2024)", "Civil War (2024)"]
    assert load_snapshot(kv_store) == entries


def test_trakt_refresh_twice_keeps_snapshot(kv_store, serve_html, trakt_html):
    variant = get_variant("trakt")
    serve_html[variant.source_url] = trakt_html

    first = refresh(variant, kv_store)
    raw_before = kv_store.get(CACHE_KEY)
    second = refresh(variant, kv_store)

    assert second == first
    assert kv_store.get(CACHE_KEY) == raw_before


def test_dry_run_does_not_write(kv_store, serve_html, flixpatrol_html):
    variant = get_variant("flixpatrol")
    serve_html[variant.source_url] = flixpatrol_html

    entries = refresh(variant, kv_store, dry_run=True)

    assert len(entries) == 4
    assert load_snapshot(kv_store) is None


def test_dry_run_from_env(kv_store, serve_html, flixpatrol_html, monkeypatch):
    monkeypatch.setenv("SCRAPER_DRY_RUN", "1")
    variant = get_variant("flixpatrol")
    serve_html[variant.source_url] = flixpatrol_html

    refresh(variant, kv_store)

    assert load_snapshot(kv_store) is None


def test_run_scheduled_success(kv_url, serve_html, flixpatrol_html):
    variant = get_variant("flixpatrol")
    serve_html[variant.source_url] = flixpatrol_html

    result = run_scheduled(variant)

    assert result["success"] is True
    assert result["message"] == "Successfully updated 4 movies"
    assert "timestamp" in result


def test_run_scheduled_reports_missing_store():
    result = run_scheduled(get_variant("flixpatrol"))

    assert result["success"] is False
    assert result["message"] == "Scheduled task failed"
    assert "not configured" in result["error"]


def test_run_scheduled_reports_fetch_errors(kv_store, monkeypatch):
    def fail(url, **kwargs):
        raise FetchError(url, 502)

    monkeypatch.setattr(refresh_mod, "fetch_html", fail)

    result = run_scheduled(get_variant("trakt"), store_factory=lambda: kv_store)

    assert result == {
        "success": False,
        "message": "Scheduled task failed",
        "error": "HTTP error! status: 502",
        "timestamp": result["timestamp"],
    }
    assert kv_store.get(CACHE_KEY) is None


def test_snapshot_is_plain_json_array(kv_store, serve_html, trakt_html):
    variant = get_variant("trakt")
    serve_html[variant.source_url] = trakt_html
    refresh(variant, kv_store)
    assert isinstance(json.loads(kv_store.get(CACHE_KEY)), list)
