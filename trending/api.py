import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .cache import load_raw
from .kv_store import get_kv_store
from .logging_setup import LOGGER_NAME
from .refresh import refresh
from .scraper_observability import utc_now_iso
from .types import VARIANT_FLIXPATROL
from .variants import Variant, get_variant

logger = logging.getLogger(LOGGER_NAME)

VERSION = "1.0"

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


def _json(content, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


def create_app(variant: Variant) -> FastAPI:
    app = FastAPI(title=f"Trending Movies ({variant.name})", version=VERSION)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get("/")
    def update_movies():
        try:
            store = get_kv_store()
            entries = refresh(variant, store)
        except Exception as exc:
            logger.exception("Manual update failed (variant=%s)", variant.name)
            return _json(
                {
                    "success": False,
                    "message": "Failed to update movies",
                    "error": str(exc),
                    "timestamp": utc_now_iso(),
                },
                status_code=500,
            )
        return _json(
            {
                "success": True,
                "message": f"Successfully updated {len(entries)} movies",
                "data": entries,
                "timestamp": utc_now_iso(),
            }
        )

    @app.get(variant.api_path)
    def trending_movies():
        try:
            store = get_kv_store()
            raw = load_raw(store)
            if raw is None:
                if not variant.fetch_on_cold_cache:
                    return _json(
                        {"success": False, "message": "No trending movies cached yet"},
                        status_code=404,
                    )
                logger.info("Cold cache for %s; fetching now", variant.name)
                return _json(refresh(variant, store))
        except Exception as exc:
            logger.exception("Reading cached movies failed (variant=%s)", variant.name)
            return _json(
                {
                    "success": False,
                    "message": "Failed to fetch trending movies",
                    "error": str(exc),
                },
                status_code=500,
            )
        return Response(content=raw, media_type="application/json", headers=CORS_HEADERS)

    @app.get("/health")
    def health():
        return _json({"ok": True, "variant": variant.name, "version": VERSION})

    return app


app = create_app(get_variant(os.getenv("TRENDING_VARIANT", VARIANT_FLIXPATROL)))
