#!/usr/bin/env python3
"""
Smoke run against a live premium API: health, load, check, one quote.

Start the API first (in another terminal):
  uvicorn src.api.main:app --host 127.0.0.1 --port 8000

Then run this script:
  python scripts/smoke_premium_api.py
  python scripts/smoke_premium_api.py --base-url http://127.0.0.1:8000 --code 1A --sum-insured 100000
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Dict

import requests

JSON_HEADERS = {"Content-Type": "application/json"}


def post_json(url: str, data: Dict[str, Any], timeout: int = 30) -> requests.Response:
    return requests.post(url, json=data, headers=JSON_HEADERS, timeout=timeout)


def main() -> int:
    parser = argparse.ArgumentParser(description="Smoke test the premium API")
    parser.add_argument("--base-url", default="http://localhost:8000", help="API base URL")
    parser.add_argument("--code", default="1A", help="Product code")
    parser.add_argument("--sum-insured", default="100000", help="Insured-sum band")
    parser.add_argument("--date-of-birth", default="1990-06-07", help="YYYY-MM-DD")
    parser.add_argument("--skip-load", action="store_true", help="Do not call the load endpoint")
    args = parser.parse_args()
    base = args.base_url.rstrip("/")
    premiums = f"{base}/api/v1/healths/premiums"

    print(f"=== Premium API smoke test ({base}) ===\n")

    try:
        r = requests.get(f"{base}/", timeout=10)
    except requests.ConnectionError:
        print("   -> Start the API first: uvicorn src.api.main:app --host 127.0.0.1 --port 8000")
        return 1
    print(f"1) GET /            -> {r.status_code}")

    if not args.skip_load:
        r = post_json(f"{premiums}/loads", {})
        print(f"2) POST loads       -> {r.status_code} {r.text}")
        if r.status_code != 200:
            return 1

    r = requests.get(f"{premiums}/checks", timeout=10)
    print(f"3) GET checks       -> {r.status_code} {r.text}")

    payload = {"code": args.code, "sumInsured": args.sum_insured, "dateOfBirth": args.date_of_birth}
    r = post_json(premiums, payload)
    result = r.json() if r.status_code == 200 else r.text
    print(f"4) POST premiums    -> {r.status_code} {result}")
    return 0 if r.status_code == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
