"""
FastAPI dependencies that build an Analyzer per request.
"""

from typing import Dict, Optional

from ranker import config
from ranker.analysis.analyzer import Analyzer
from ranker.rules.loader import load_rules
from ranker.rules.models import VendorConfig, VendorRegistry


def get_analyzer() -> Analyzer:
    """Analyzer over the rules file named by RANKER_RULES_PATH."""
    return Analyzer(
        registry=load_rules(config.RULES_PATH),
        supplements=config.SUPPLEMENTS,
    )


def analyzer_for_request(
    default: Analyzer,
    rules: Optional[Dict[str, VendorConfig]] = None,
    supplements: Optional[list] = None,
) -> Analyzer:
    """
    Use inline rules or supplements from a request body when supplied,
    falling back to the configured analyzer.
    """
    if rules is None and supplements is None:
        return default
    return Analyzer(
        registry=VendorRegistry(rules) if rules is not None else default.registry,
        supplements=supplements if supplements is not None else default.supplements,
    )
