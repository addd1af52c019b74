"""
Longevity Ranker

Normalizes supplement product listings into cost per gram of active
ingredient, adjusted for delivery-form bioavailability.

Layers:
- rules:    vendor blocklists and manually verified overrides
- catalog:  input product/variant records
- analysis: extraction, classification, triage and cost math
- audit:    diagnostics for products that produced no analysis
"""

__version__ = "1.4.0"
