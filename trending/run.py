import argparse
import json
import logging
import os
import sys

from .logging_setup import LOGGER_NAME, setup_logging
from .types import VARIANT_FLIXPATROL
from .variants import VARIANTS, Variant, get_variant

logger = logging.getLogger(LOGGER_NAME)


def cmd_init():
    from .kv_store import ensure_kv_table, get_kv_store

    ensure_kv_table(get_kv_store().engine)
    logger.info("KV table ready")


def cmd_refresh(variant: Variant, dry_run: bool) -> dict:
    from .refresh import run_scheduled

    result = run_scheduled(variant, dry_run=dry_run or None)
    if result["success"]:
        logger.info("Scheduled refresh done: %s", result["message"])
    else:
        logger.error("Scheduled refresh failed: %s", result.get("error"))
    return result


def cmd_show() -> str | None:
    from .cache import load_raw
    from .kv_store import get_kv_store

    return load_raw(get_kv_store())


def cmd_serve(variant: Variant, port: int):
    import uvicorn

    from .api import create_app

    uvicorn.run(create_app(variant), host="0.0.0.0", port=port)


def cmd_doctor():
    from .doctor import run_doctor
    from .kv_store import get_kv_store

    try:
        store = get_kv_store()
    except RuntimeError as exc:
        logger.error("%s", exc)
        store = None
    return run_doctor(store)


def parse_args(argv=None):
    ap = argparse.ArgumentParser(prog="trending")
    ap.add_argument(
        "command",
        choices=["init", "refresh", "show", "serve", "doctor"],
    )
    ap.add_argument(
        "--variant",
        choices=sorted(VARIANTS),
        default=os.getenv("TRENDING_VARIANT", VARIANT_FLIXPATROL),
    )
    ap.add_argument(
        "--dry-run",
        action="store_true",
        help="Fetch and parse but do not write the cache",
    )
    ap.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    return ap.parse_args(argv)


def main(argv=None) -> int:
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))
    args = parse_args(argv)
    variant = get_variant(args.variant)

    if args.command == "init":
        cmd_init()
    elif args.command == "refresh":
        result = cmd_refresh(variant, dry_run=args.dry_run)
        return 0 if result["success"] else 1
    elif args.command == "show":
        raw = cmd_show()
        if raw is None:
            logger.warning("Cache is empty")
            return 1
        print(json.dumps(json.loads(raw), indent=2))
    elif args.command == "serve":
        cmd_serve(variant, port=args.port)
    elif args.command == "doctor":
        report = cmd_doctor()
        return 0 if report.ok else 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
