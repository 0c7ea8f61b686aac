r"""KV store smoke test script

Usage:
    ENVIRONMENT=prd KV_URL=rediss://default@host:6379 KV_TOKEN=... python scripts/kv_smoke_test.py --key smoke-test

The script will:
- select the store for ENVIRONMENT via `blog_backend.stores.select_store`
- read, set and increment the `views` field of a scratch key
- print each result, exiting non-zero if the store cannot be reached

Notes:
- Use a scratch key; the script overwrites its `views` field.
- With ENVIRONMENT unset the in-memory store is used, which only checks the wiring.
"""
from __future__ import annotations

import argparse
import asyncio
import pathlib
import sys

# Ensure the repository root is on sys.path so `blog_backend` imports resolve when
# running the script from the repo root.
ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from blog_backend.settings import se
from blog_backend.stores import VIEWS_FIELD, StoreError, select_store


def parse_args():
    p = argparse.ArgumentParser(description="KV smoke test: read, set and increment a scratch counter")
    p.add_argument("--key", default="smoke-test", help="Scratch resource key (default: smoke-test)")
    p.add_argument("--start", type=int, default=0, help="Value to set before incrementing")
    return p.parse_args()


async def run(key: str, start: int) -> None:
    store = select_store(se.environment, se.kv)
    print(f"Using {store.name} store (ENVIRONMENT={se.environment!r})")
    print(f"get {key}.{VIEWS_FIELD} -> {await store.get(key, VIEWS_FIELD)}")
    await store.set(key, VIEWS_FIELD, start)
    print(f"set {key}.{VIEWS_FIELD} = {start}")
    print(f"increment {key}.{VIEWS_FIELD} -> {await store.increment(key, VIEWS_FIELD, 1)}")


def main():
    args = parse_args()
    try:
        asyncio.run(run(args.key, args.start))
    except StoreError as e:
        print("Store operation failed:", e)
        sys.exit(2)


if __name__ == "__main__":
    main()
