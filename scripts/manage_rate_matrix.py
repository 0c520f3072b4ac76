#!/usr/bin/env python3
"""
Load, unload or check the premium rate matrix without going through the API.

Uses the same configuration (config/premium_config.yml, REDIS_URL / REDIS_SVC,
RATE_MATRIX_PATH) and the same store selection as the API.

  python scripts/manage_rate_matrix.py load --path premium_tables.xlsx
  python scripts/manage_rate_matrix.py check
  python scripts/manage_rate_matrix.py unload --yes
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv()

from src.database import create_rate_store
from src.premium.errors import PremiumError
from src.premium.loader import RateLoader
from src.premium.service import PremiumService
from src.utils.config_loader import load_premium_config

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Manage the premium rate matrix in the rate store.")
    p.add_argument("--config", type=Path, default=None, help="Path to premium_config.yml")
    sub = p.add_subparsers(dest="command", required=True)

    load = sub.add_parser("load", help="Load the rate matrix workbook into the store")
    load.add_argument("--path", type=str, default=None, help="Workbook path (default: matrix.path from config)")
    load.add_argument("--sheet", type=str, default=None, help="Worksheet name (default: matrix.sheet from config)")

    unload = sub.add_parser("unload", help="Remove every key from the store")
    unload.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    sub.add_parser("check", help="Report whether the store holds any rates")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    cfg = load_premium_config(args.config)
    store = create_rate_store(cfg.store)
    service = PremiumService(store, cfg.quote)

    try:
        if args.command == "load":
            loaded = RateLoader(store, cfg.matrix).load_workbook(args.path, args.sheet)
            print(f"[OK] Loaded {loaded} rate entries")
            return 0

        if args.command == "unload":
            if not args.yes:
                confirm = input("Clear every key in the rate store? [y/N]: ")
                if confirm.strip().lower() != "y":
                    print("Aborted.")
                    return 0
            service.unload()
            print("[OK] Rate store cleared")
            return 0

        if service.keys_exist():
            print("[OK] Rate store holds rates")
            return 0
        print("Rate store is empty", file=sys.stderr)
        return 1
    except PremiumError as e:
        print(f"Failed ({e.code}): {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
