from __future__ import annotations

from collections import Counter
from typing import Dict

# Named counters (custom)
_NAMED = Counter()


def reset_metrics() -> None:
    """
    Test helper: clears all counters to avoid cross-test leakage.
    Safe to call multiple times.
    """
    _NAMED.clear()


def inc_named(name: str, value: int = 1) -> None:
    """
    Increment a named counter (used by health and spec endpoints).
    """
    if not name:
        return
    _NAMED[name] += int(value)


def snapshot_named() -> Dict[str, int]:
    return dict(_NAMED)
