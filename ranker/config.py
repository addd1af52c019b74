"""
Runtime configuration.

All values come from environment variables, read once at import time.
"""

import os
from typing import List, Optional

DEFAULT_SUPPLEMENTS = [
    "nmn",
    "nad",
    "tmg",
    "trimethylglycine",
    "resveratrol",
    "creatine",
]


def parse_supplements(raw: Optional[str]) -> List[str]:
    """
    Split a comma-separated keyword string into a cleaned, lowercase list.

    Empty or missing input returns the default supplement list.
    """
    if not raw:
        return list(DEFAULT_SUPPLEMENTS)
    cleaned = []
    for part in raw.split(","):
        part = part.strip().lower()
        if part:
            cleaned.append(part)
    return cleaned or list(DEFAULT_SUPPLEMENTS)


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


RULES_PATH = os.getenv("RANKER_RULES_PATH", os.path.join("data", "vendor_rules.json"))
SUPPLEMENTS = parse_supplements(os.getenv("RANKER_SUPPLEMENTS"))
MAX_WORKERS = _int_env("RANKER_MAX_WORKERS", 1)
