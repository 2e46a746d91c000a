#!/usr/bin/env python3
"""
Call the upstream short drama API directly (no fallback) and report how each
operation fails, if it does. Useful to tell a down upstream from a slow one.

  python scripts/check_upstream.py
  python scripts/check_upstream.py --query 总裁 --video-id 42 -v
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass  # run without .env if python-dotenv not installed

from src.integrations.clients.real_http.shortdrama import ShortDramaClient, UpstreamFailure
from src.utils.config_loader import load_gateway_config


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


async def run_checks(client: ShortDramaClient, query: str, video_id: str) -> int:
    checks = [
        ("categories", client.get_categories()),
        ("search", client.search(query)),
        ("latest", client.get_latest()),
        ("parse single", client.parse_single(video_id, "1")),
    ]
    failures = 0
    for label, call in checks:
        try:
            data = await call
            size = len(data) if isinstance(data, (list, dict)) else 0
            print(f"ok    {label}: {type(data).__name__} with {size} top-level entries")
        except UpstreamFailure as e:
            failures += 1
            status = f" status={e.status_code}" if e.status_code else ""
            print(f"FAIL  {label}: {e.reason.value}{status} - {e}")
    return failures


def main() -> int:
    parser = argparse.ArgumentParser(description="Probe the upstream short drama API")
    parser.add_argument("--config", type=Path, default=None, help="Path to gateway_config.yml")
    parser.add_argument("--query", default="总裁", help="Search term")
    parser.add_argument("--video-id", default="1", help="Video id for the parse probe")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(args.verbose)
    cfg = load_gateway_config(args.config)
    print(f"Upstream: {cfg.upstream.base_url} (timeout {cfg.upstream.timeout_seconds}s)\n")

    failures = asyncio.run(run_checks(ShortDramaClient(cfg.upstream), args.query, args.video_id))
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
