"""Process-local operational counters for the stores and the API.

These track how often the store and endpoints are exercised (``kv_get``,
``views_page_hit``, ``store_error``...), not visitor counts, which live in
the store itself. Counts reset with the process.
"""
from __future__ import annotations

import threading
from collections import Counter
from typing import Dict

_c: Counter = Counter()
_lock = threading.Lock()


def inc(name: str, n: int = 1) -> None:
    with _lock:
        _c[name] += n


def get(name: str) -> int:
    with _lock:
        return _c[name]


def get_all() -> Dict[str, int]:
    with _lock:
        return dict(_c)


def reset_all() -> None:
    with _lock:
        _c.clear()
