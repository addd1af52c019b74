"""
Vendor Rules Loader

Reads data/vendor_rules.json. A missing or broken rules file is never
fatal: load_rules() logs a warning and returns an empty, fully permissive
registry. Use load_rules_strict() when the caller wants the error.
"""

import json
import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from .models import VendorRegistry

logger = logging.getLogger(__name__)


class RulesLoadError(Exception):
    """Raised when the rules file cannot be opened, decoded or validated."""


def load_rules_strict(path: Union[str, Path]) -> VendorRegistry:
    """
    Load and validate the vendor rules file.

    Raises:
        RulesLoadError: file missing, unreadable, not JSON, or invalid shape
    """
    rules_path = Path(path)
    try:
        with open(rules_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as e:
        raise RulesLoadError(f"could not open rules file {rules_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise RulesLoadError(f"could not parse rules file {rules_path}: {e}") from e

    if not isinstance(raw, dict):
        raise RulesLoadError(
            f"rules file {rules_path} must contain a JSON object keyed by vendor name"
        )

    try:
        return VendorRegistry.from_dict(raw)
    except ValidationError as e:
        raise RulesLoadError(f"invalid rules in {rules_path}: {e}") from e


def load_rules(path: Union[str, Path]) -> VendorRegistry:
    """
    Load vendor rules, degrading to an empty registry on any failure.
    """
    try:
        registry = load_rules_strict(path)
    except RulesLoadError as e:
        logger.warning(f"Could not load rules ({e}). Running without filters.")
        return VendorRegistry.empty()

    logger.info(f"Loaded vendor rules for {len(registry)} vendor(s) from {path}")
    return registry
