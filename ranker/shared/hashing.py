"""
Deterministic hashing for analysis output.

Identical products and rules must hash identically, so floats are rounded
and keys sorted before digesting. Generation timestamps are ignored.
"""

import hashlib
import json
from typing import Any, Iterable

from pydantic import BaseModel

IGNORED_FIELDS = frozenset([
    "generated_at",
    "processed_at",
])

FLOAT_PRECISION = 10


def _normalize(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return _normalize(value.model_dump(mode="json", by_alias=True))
    if isinstance(value, dict):
        return {
            k: _normalize(v)
            for k, v in sorted(value.items())
            if k not in IGNORED_FIELDS
        }
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    if isinstance(value, float):
        return round(value, FLOAT_PRECISION)
    return value


def canonical_json(value: Any) -> str:
    """Serialize a model, dict or list to a canonical JSON string."""
    return json.dumps(
        _normalize(value),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=True,
    )


def hash_records(records: Iterable[Any]) -> str:
    """
    Hash an ordered sequence of records.

    Returns: "sha256:<16-char-hex>"
    """
    canonical = canonical_json(list(records))
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return f"sha256:{digest[:16]}"


def verify_records_hash(records: Iterable[Any], expected_hash: str) -> bool:
    return hash_records(records) == expected_hash
