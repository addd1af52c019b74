"""Longevity Ranker shared utilities"""

from .hashing import (
    canonical_json,
    hash_records,
    verify_records_hash,
)

__all__ = [
    "canonical_json",
    "hash_records",
    "verify_records_hash",
]
