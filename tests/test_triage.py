"""
Triage Engine Tests

Tests validate:
- First dirty keyword in table order names the reason
- "unflavored" suppresses "flavor" but later keywords still apply
- "serv" reinstates the suppressed match with the servings reason
- Override-sourced results are never flagged

Run with:
    pytest tests/test_triage.py -v
"""

from ranker.analysis.triage import (
    DirtyKeywordRule,
    NOT_FLAGGED,
    UNFLAVORED_SERVINGS_REASON,
    scan_dirty_keywords,
    triage,
)


class TestScanDirtyKeywords:

    def test_clean_text(self):
        assert scan_dirty_keywords("creatine monohydrate 500 grams") == NOT_FLAGGED

    def test_watermelon_before_blend(self):
        result = scan_dirty_keywords("Watermelon Creatine Blend 500 GMS")

        assert result.needs_review
        assert result.keyword == "watermelon"
        assert result.reason == "Detected dirty keyword: watermelon"

    def test_flavored(self):
        result = scan_dirty_keywords("nmn powder (berry flavored)")
        assert result.reason == "Detected dirty keyword: flavor"

    def test_unflavored_alone_not_flagged(self):
        assert not scan_dirty_keywords("unflavored creatine monohydrate").needs_review

    def test_unflavored_blend_still_caught(self):
        result = scan_dirty_keywords("unflavored creatine blend")
        assert result.reason == "Detected dirty keyword: blend"

    def test_unflavored_servings_flagged(self):
        result = scan_dirty_keywords("unflavored creatine 30 serv")

        assert result.needs_review
        assert result.keyword == "flavor"
        assert result.reason == UNFLAVORED_SERVINGS_REASON
        assert "unflavored but uses 'servings' (needs manual math check)" in result.reason

    def test_formulation_keywords(self):
        assert scan_dirty_keywords("nmn + resveratrol").keyword == "+"
        assert scan_dirty_keywords("nmn gummies").keyword == "gumm"
        assert scan_dirty_keywords("nmn chewables").keyword == "chew"
        assert scan_dirty_keywords("nmn with tmg").keyword == "with"

    def test_custom_rule_table(self):
        rules = (
            DirtyKeywordRule("sweet", suppressed_by="unsweetened"),
            DirtyKeywordRule("mix"),
        )
        assert not scan_dirty_keywords("unsweetened nmn", rules).needs_review
        assert scan_dirty_keywords("unsweetened nmn mix", rules).keyword == "mix"
        assert scan_dirty_keywords("sweet nmn", rules).keyword == "sweet"


class TestTriage:

    def test_override_never_flagged(self):
        result = triage(True, "Watermelon NMN Gummies", "watermelon-nmn", "Watermelon NMN Gummies")
        assert result == NOT_FLAGGED

    def test_regex_mass_scanned(self):
        result = triage(False, "Creatine (Fruit Punch)", "creatine", "Creatine")
        assert result.reason == "Detected dirty keyword: fruit punch"

    def test_scans_handle(self):
        result = triage(False, "Creatine 500g", "creatine-blend-500g", "Creatine 500g")
        assert result.keyword == "blend"
