"""
Vendor Rules Tests

Tests validate:
- Blocklist matching over title, handle and context (case-insensitive)
- Override lookup and variant blocklist
- Registry parsing from the JSON rules shape
- Missing or broken rules files degrade to a permissive registry

Run with:
    pytest tests/test_vendor_rules.py -v
"""

import json
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from ranker.catalog.models import Product, Variant
from ranker.rules import (
    ProductSpec,
    VendorConfig,
    VendorRegistry,
    is_allowed,
    lookup_override,
    variant_blocked,
    subscription_discount,
    load_rules,
    load_rules_strict,
    RulesLoadError,
)

REPO_RULES = Path(__file__).resolve().parent.parent / "data" / "vendor_rules.json"


def make_product(title: str, handle: str = "", context: str = "") -> Product:
    return Product(
        title=title,
        handle=handle,
        context=context,
        variants=[Variant(price="10.00", title="Default Title")],
    )


@pytest.fixture
def config():
    return VendorConfig.model_validate({
        "blocklist": ["Gift Card", "pet"],
        "variantBlocklist": ["wholesale"],
        "overrides": {
            "nmn-pro": {"forceType": "Capsules", "forceActiveGrams": 18},
        },
        "globalSubscriptionDiscount": 0.15,
    })


# ============================================================================
# Resolver
# ============================================================================

class TestIsAllowed:

    def test_no_config_is_permissive(self):
        assert is_allowed(None, make_product("NMN Gift Card"))

    def test_title_blocked_case_insensitive(self, config):
        assert not is_allowed(config, make_product("NMN GIFT CARD $50"))

    def test_handle_blocked(self, config):
        assert not is_allowed(config, make_product("NMN Chews", handle="nmn-for-pets"))

    def test_context_blocked(self, config):
        assert not is_allowed(
            config, make_product("NMN", context="Pet formula for dogs")
        )

    def test_clean_product_allowed(self, config):
        assert is_allowed(config, make_product("NMN 500mg 60 Capsules", handle="nmn-500"))


class TestLookupOverride:

    def test_found(self, config):
        spec, found = lookup_override(config, "nmn-pro")
        assert found
        assert spec.force_active_grams == 18.0
        assert spec.force_type == "Capsules"

    def test_not_found(self, config):
        spec, found = lookup_override(config, "unknown-handle")
        assert spec is None
        assert not found

    def test_no_config(self):
        assert lookup_override(None, "nmn-pro") == (None, False)


class TestVariantBlocked:

    def test_blocked(self, config):
        assert variant_blocked(config, "Wholesale 10 Pack")

    def test_not_blocked(self, config):
        assert not variant_blocked(config, "60 Capsules")

    def test_no_config(self):
        assert not variant_blocked(None, "Wholesale")


class TestSubscriptionDiscount:

    def test_discount(self, config):
        assert subscription_discount(config) == pytest.approx(0.15)

    def test_default_zero(self):
        assert subscription_discount(None) == 0.0
        assert subscription_discount(VendorConfig()) == 0.0


# ============================================================================
# Models
# ============================================================================

class TestModels:

    def test_product_spec_camel_case(self):
        spec = ProductSpec.model_validate({
            "forceType": "Gel",
            "variantOverrides": {"2oz": 15.0},
            "variantGrossOverrides": {"2oz": 56.7},
            "forceServingMg": 250,
        })
        assert spec.force_type == "Gel"
        assert spec.variant_overrides == {"2oz": 15.0}
        assert spec.variant_gross_overrides == {"2oz": 56.7}
        assert spec.force_serving_mg == 250.0
        assert spec.force_active_grams == 0.0

    def test_blank_force_type_is_none(self):
        assert ProductSpec.model_validate({"forceType": "  "}).force_type is None

    def test_discount_must_be_below_one(self):
        with pytest.raises(ValidationError):
            VendorConfig.model_validate({"globalSubscriptionDiscount": 1.0})

    def test_negative_discount_rejected(self):
        with pytest.raises(ValidationError):
            VendorConfig.model_validate({"globalSubscriptionDiscount": -0.1})

    def test_null_fields_default(self):
        config = VendorConfig.model_validate({"blocklist": None, "overrides": None})
        assert config.blocklist == []
        assert config.overrides == {}

    def test_registry_unknown_vendor(self):
        registry = VendorRegistry.from_dict({"ProHealth": {"blocklist": ["pet"]}})
        assert "ProHealth" in registry
        assert registry.get("Someone Else") is None
        assert len(registry) == 1
        assert registry.vendors() == ["ProHealth"]


# ============================================================================
# Loader
# ============================================================================

class TestLoadRules:

    def test_missing_file_is_permissive(self, tmp_path, caplog):
        caplog.set_level(logging.WARNING)
        registry = load_rules(tmp_path / "nope.json")
        assert len(registry) == 0
        assert "Running without filters" in caplog.text

    def test_broken_json_is_permissive(self, tmp_path):
        path = tmp_path / "vendor_rules.json"
        path.write_text("{not json", encoding="utf-8")
        assert len(load_rules(path)) == 0

    def test_wrong_shape_is_permissive(self, tmp_path):
        path = tmp_path / "vendor_rules.json"
        path.write_text(json.dumps(["ProHealth"]), encoding="utf-8")
        assert len(load_rules(path)) == 0

    def test_strict_raises(self, tmp_path):
        with pytest.raises(RulesLoadError):
            load_rules_strict(tmp_path / "nope.json")

    def test_strict_invalid_values_raise(self, tmp_path):
        path = tmp_path / "vendor_rules.json"
        path.write_text(
            json.dumps({"ProHealth": {"globalSubscriptionDiscount": 2}}),
            encoding="utf-8",
        )
        with pytest.raises(RulesLoadError):
            load_rules_strict(path)

    def test_valid_file(self, tmp_path):
        path = tmp_path / "vendor_rules.json"
        path.write_text(json.dumps({
            "NMN Bio": {
                "blocklist": ["book"],
                "overrides": {"nmn-500": {"forceActiveGrams": 15}},
            }
        }), encoding="utf-8")
        registry = load_rules(path)
        config = registry.get("NMN Bio")
        assert config is not None
        assert config.overrides["nmn-500"].force_active_grams == 15.0

    def test_repository_rules_file_loads(self):
        registry = load_rules_strict(REPO_RULES)
        assert "ProHealth" in registry
        assert registry.get("ProHealth").global_subscription_discount > 0
