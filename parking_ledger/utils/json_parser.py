"""
Helpers for the JSON documents kept in the key-value store.
Decoding never raises: callers fall back to empty/default state.
"""

import json
from typing import Optional, Any


def safe_parse_json(raw: Optional[str]) -> Optional[Any]:
    """Parse a stored document. Returns None when missing or undecodable."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return None


def dump_json(value: Any) -> str:
    """Compact JSON used for every stored document."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
