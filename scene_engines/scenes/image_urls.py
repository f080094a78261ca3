"""Collect image URLs from a tree of any shape and depth."""
from __future__ import annotations

from typing import Any, List, Tuple

URL_FIELD_NAMES = frozenset({"imageurl", "thumbnailurl", "url"})
_HTTP_PREFIXES = ("http://", "https://")


def _is_http_url(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip()) and value.lower().startswith(_HTTP_PREFIXES)


def collect_image_urls(root: Any) -> List[str]:
    """Depth-first, pre-order; duplicates are kept.

    Uses an explicit stack so arbitrarily deep documents cannot exhaust the
    interpreter's recursion limit.
    """
    urls: List[str] = []
    stack: List[Tuple[str, Any, Any]] = [("node", None, root)]
    while stack:
        kind, name, value = stack.pop()
        if kind == "field":
            if isinstance(name, str) and name.lower() in URL_FIELD_NAMES and _is_http_url(value):
                urls.append(value)
            stack.append(("node", None, value))
            continue
        match value:
            case dict():
                stack.extend(("field", key, child) for key, child in reversed(list(value.items())))
            case list() | tuple():
                stack.extend(("node", None, child) for child in reversed(value))
            case _:
                pass
    return urls
