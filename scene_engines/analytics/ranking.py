from __future__ import annotations

from typing import Any, List, Tuple

DEFAULT_TOP_K = 5
UNKNOWN_TITLE = "Unknown"


def _views_or_zero(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return 0


def top_k(totals: Any, k: int = DEFAULT_TOP_K) -> Tuple[List[str], List[int]]:
    """Highest-view scenes from ``counters/globalTotals`` as parallel label/count lists."""
    if not isinstance(totals, dict) or k <= 0:
        return [], []
    rows = []
    for entry in totals.values():
        if not isinstance(entry, dict):
            continue
        title = entry.get("title")
        label = title if isinstance(title, str) and title else UNKNOWN_TITLE
        rows.append((label, _views_or_zero(entry.get("views"))))
    # sorted() is stable, so ties keep document order.
    rows = sorted(rows, key=lambda row: row[1], reverse=True)[:k]
    return [label for label, _ in rows], [count for _, count in rows]
