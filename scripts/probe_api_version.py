#!/usr/bin/env python3
"""
Probe which Coolify API version answers and print the first page of a listing.

Useful when pointing the bot at a new Coolify install: it runs the same
version-fallback negotiation the client uses at cold start and reports the
version that got pinned.
"""

import argparse
import json
from typing import List, Optional
import sys

from shared.config import get_settings
from shared.errors import AccessClientError
from shared.logging import configure_logging
from coolify_client import build_client


RESOURCES = ("applications", "deployments", "environments", "databases")


def probe(resource: str, page: int, per_page: int, api_version: Optional[str]) -> dict:
    """List one page of ``resource`` and return a JSON-friendly summary."""
    overrides = {"api_version": api_version} if api_version else {}
    settings = get_settings(**overrides)
    configure_logging("coolify", settings.log_level)

    with build_client(settings) as client:
        lister = getattr(client, f"list_{resource}")
        result = lister(page, per_page)
        return {
            "resource": resource,
            "pinned_version": client.api_version,
            "current_page": result.current_page,
            "total_pages": result.total_pages,
            "items": [item.model_dump() for item in result.items],
        }


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Probe the live Coolify API version.")
    parser.add_argument("resource", nargs="?", default="applications", choices=RESOURCES, help="Resource family to list")
    parser.add_argument("--page", type=int, default=1, help="Page number to request")
    parser.add_argument("--per-page", type=int, default=5, help="Items per page")
    parser.add_argument("--api-version", default=None, help="Primary version to try first (overrides API_VERSION)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        summary = probe(args.resource, args.page, args.per_page, args.api_version)
    except KeyboardInterrupt:
        return 130
    except AccessClientError as exc:
        print(f"[probe] failed: {exc.code}: {exc.message}", file=sys.stderr)
        return 1

    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
