"""Cache key generation utilities."""

import hashlib
import json
from typing import Any


def generate_cache_key(prefix: str, *args: Any, **kwargs: Any) -> str:
    """Generate a deterministic cache key from arguments.

    Positional arguments that are plain identifiers (str/int) are kept
    readable in the key; everything else is folded into a short hash.

    Args:
        prefix: Key prefix (e.g., 'creator_feed')
        *args: Positional arguments to include in key
        **kwargs: Keyword arguments to include in the hashed part

    Returns:
        Deterministic cache key string, e.g. ``creator_feed:42:9f1c0a...``
    """
    readable = [str(arg) for arg in args if isinstance(arg, (str, int))]
    hashed = [arg for arg in args if not isinstance(arg, (str, int))]

    key_data = {
        "args": [_serialize_value(arg) for arg in hashed],
        "kwargs": {k: _serialize_value(v) for k, v in sorted(kwargs.items())},
    }
    json_str = json.dumps(key_data, sort_keys=True, default=str)
    hash_value = hashlib.sha256(json_str.encode()).hexdigest()[:16]

    return ":".join([prefix, *readable, hash_value])


def _serialize_value(value: Any) -> Any:
    """Serialize a value for cache key generation."""
    if isinstance(value, (str, int, float, bool, type(None))):
        return value
    elif isinstance(value, (list, tuple)):
        return [_serialize_value(v) for v in value]
    elif isinstance(value, (set, frozenset)):
        return sorted(_serialize_value(v) for v in value)
    elif isinstance(value, dict):
        return {k: _serialize_value(v) for k, v in sorted(value.items())}
    elif hasattr(value, "model_dump"):
        return value.model_dump(mode="json")
    else:
        return str(value)
