from __future__ import annotations

import argparse
from pathlib import Path

from stock_advisor.config import compute_config_hash, freeze_config, load_config, verify_config_lock


def main() -> None:
    parser = argparse.ArgumentParser(description="Pin an advisor config with a SHA-256 lock file")
    parser.add_argument("config")
    parser.add_argument("--lock", default=None, help="Lock path (defaults to <config>.lock.json)")
    parser.add_argument("--check", action="store_true", help="Only verify an existing lock")
    args = parser.parse_args()

    path = Path(args.config)
    # refuse to pin a config the loader would reject
    config = load_config(path)

    if args.check:
        if not verify_config_lock(path, args.lock):
            raise SystemExit(f"{path} does not match its lock")
        print(f"{config.name} v{config.version} matches its lock")
        return

    lock_path = freeze_config(path, args.lock)
    print(f"Froze {config.name} v{config.version} ({compute_config_hash(path)[:12]}) -> {lock_path}")


if __name__ == "__main__":
    main()
