# ============================================================================
# FILE: tests/unit/test_patterns.py
# ============================================================================
"""
Unit tests for the pattern table
"""

import pytest

from prescription_ocr.core.context.enums import NameLayer
from prescription_ocr.extractors.patterns import PatternTable, build_default_table
from prescription_ocr.utils.exceptions import PatternRegistrationError


class TestDefaultTable:
    """Default layers and their scoring metadata"""

    def test_name_layer_order(self):
        table = build_default_table()
        assert [p.tag for p in table.name_patterns] == [
            NameLayer.KNOWN_MEDICINE.value,
            NameLayer.SUPPLEMENT.value,
            NameLayer.SUFFIX.value,
            NameLayer.CAPITALIZED.value,
            NameLayer.NAME_WITH_DOSAGE.value,
        ]

    def test_trusted_layers(self):
        table = build_default_table()
        trusted = {p.tag for p in table.name_patterns if p.trusted}
        assert trusted == {"known_medicine", "supplement", "suffix"}

    def test_weights_follow_settings(self):
        from prescription_ocr.config.thresholds_config import ThresholdSettings

        settings = ThresholdSettings(KNOWN_MEDICINE_BONUS=0.5, SUFFIX_BONUS=0.25)
        table = build_default_table(settings)
        assert table.get_name_pattern("known_medicine").weight == 0.5
        assert table.get_name_pattern("suffix").weight == 0.25
        assert table.get_name_pattern("capitalized").weight == 0.0

    def test_known_list_is_case_insensitive(self):
        known = build_default_table().get_name_pattern("known_medicine")
        assert known.find_all("LISINOPRIL 10 MG") == ["LISINOPRIL"]
        assert known.matches_name("lisinopril")

    def test_multi_word_supplement(self):
        supplement = build_default_table().get_name_pattern("supplement")
        assert supplement.find_all("Fish Oil 1000mg") == ["Fish Oil"]

    def test_suffix_layer_skips_plain_english(self):
        suffix = build_default_table().get_name_pattern("suffix")
        assert suffix.find_all("routine check within a week") == []
        assert suffix.find_all("Amoxicillin 500mg") == ["Amoxicillin"]
        assert not suffix.matches_name("routine")

    def test_capitalized_layer_is_case_sensitive(self):
        capitalized = build_default_table().get_name_pattern("capitalized")
        assert capitalized.find_all("Monday morning Take") == ["Monday"]
        assert capitalized.find_all("monday") == []

    def test_name_with_dosage_reports_the_word(self):
        layer = build_default_table().get_name_pattern("name_with_dosage")
        assert layer.find_all("Norvasc 5 mg daily") == ["Norvasc"]
        assert layer.find_all("take 2 tablets") == []


class TestRegistration:
    """Registration API"""

    def test_register_vocabulary_appends_layer(self):
        table = build_default_table()
        returned = table.register_vocabulary("regional_brands", ["Dolo", "crocin"], weight=0.6)
        assert returned is table
        pattern = table.get_name_pattern("regional_brands")
        assert pattern.trusted
        assert pattern.weight == 0.6
        assert pattern.find_all("dolo 650 and Crocin") == ["dolo", "Crocin"]
        assert table.name_patterns[-1].tag == "regional_brands"

    def test_reregistering_replaces_in_place(self):
        table = build_default_table()
        tags_before = [p.tag for p in table.dosage_patterns]
        table.register_dosage("strength", r"\b\d+\s*tabs?\b")
        assert [p.tag for p in table.dosage_patterns] == tags_before
        strength = [p for p in table.dosage_patterns if p.tag == "strength"][0]
        assert strength.search("2 tabs") == "2 tabs"

    def test_empty_vocabulary_rejected(self):
        with pytest.raises(PatternRegistrationError):
            PatternTable().register_vocabulary("empty", [])

    def test_empty_vocabulary_error_is_value_error(self):
        with pytest.raises(ValueError):
            PatternTable().register_vocabulary("blank", ["  "])

    def test_fluent_building(self):
        table = (
            PatternTable()
            .register_vocabulary("known", ["aspirin"], weight=0.6)
            .register_dosage("strength", r"\b\d+\s*mg\b")
            .register_frequency("daily", r"\bdaily\b")
        )
        assert len(table.name_patterns) == 1
        assert len(table.dosage_patterns) == 1
        assert len(table.frequency_patterns) == 1
        assert table.get_name_pattern("missing") is None
