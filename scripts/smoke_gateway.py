#!/usr/bin/env python3
"""
Smoke test for a running gateway: every short drama route, the theme routes
and the WebSocket probe.

Start the API first (in another terminal):
  uvicorn src.api.main:app --host 127.0.0.1 --port 8000

Then run this script:
  python scripts/smoke_gateway.py
  python scripts/smoke_gateway.py --base-url http://127.0.0.1:8000 --query 总裁

A 200 with fallback data is expected when the upstream is unreachable.
"""

from __future__ import annotations

import argparse
import sys
from typing import Dict, List, Optional, Tuple

import requests

# (label, path, params, expected status)
Check = Tuple[str, str, Optional[Dict[str, str]], int]


def build_checks(query: str, video_id: str) -> List[Check]:
    return [
        ("categories", "/api/shortdrama/categories", None, 200),
        ("search", "/api/shortdrama/search", {"name": query}, 200),
        ("search without name", "/api/shortdrama/search", None, 400),
        ("list", "/api/shortdrama/list", {"categoryId": "1"}, 200),
        ("latest", "/api/shortdrama/latest", None, 200),
        ("recommend", "/api/shortdrama/recommend", {"size": "5"}, 200),
        ("parse single", "/api/shortdrama/parse/single", {"id": video_id, "episode": "1"}, 200),
        ("parse single without id", "/api/shortdrama/parse/single", None, 400),
        ("parse batch", "/api/shortdrama/parse/batch", {"id": video_id}, 200),
        ("theme", "/api/theme", None, 200),
        ("theme script", "/theme-init.js", None, 200),
        ("websocket info", "/api/websocket", None, 200),
        ("websocket upgrade", "/api/websocket", {"upgrade": "websocket"}, 426),
    ]


def main() -> int:
    parser = argparse.ArgumentParser(description="Smoke test the short drama gateway")
    parser.add_argument("--base-url", default="http://localhost:8000", help="API base URL")
    parser.add_argument("--query", default="总裁", help="Search term")
    parser.add_argument("--video-id", default="1", help="Video id used by the parse routes")
    args = parser.parse_args()
    base = args.base_url.rstrip("/")

    print("=== Short drama gateway smoke test ===\n")
    print(f"Base URL: {base}\n")

    failures = 0
    for label, path, params, expected in build_checks(args.query, args.video_id):
        try:
            r = requests.get(f"{base}{path}", params=params, timeout=70)
        except requests.RequestException as e:
            print(f"   FAIL {label}: {e}")
            if "Connection refused" in str(e) or "Failed to establish" in str(e):
                print("   → Start the API first: uvicorn src.api.main:app --host 127.0.0.1 --port 8000")
            return 1

        ok = r.status_code == expected
        failures += 0 if ok else 1
        marker = "ok  " if ok else "FAIL"
        fallback = " (fallback)" if r.headers.get("X-Fallback-Data") else ""
        print(f"   {marker} {label}: {r.status_code} (expected {expected}){fallback}")

    print(f"\n{failures} failure(s)")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
