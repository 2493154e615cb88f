# ============================================================================
# FILE: tests/unit/test_text_normalizer.py
# ============================================================================
"""
Unit tests for text normalization helpers
"""

import pytest

from prescription_ocr.utils.text_normalizer import (
    clean_medicine_name,
    normalize_name_key,
    split_lines,
)


def test_split_lines_trims_and_drops_blanks():
    text = "  Lisinopril 10mg  \n\n\t\nAspirin 81mg\r\n   "
    assert split_lines(text) == ["Lisinopril 10mg", "Aspirin 81mg"]


@pytest.mark.parametrize("text", ["", "   ", "\n\n  \t\n", None])
def test_split_lines_blank_input(text):
    assert split_lines(text) == []


def test_split_lines_preserves_order():
    lines = split_lines("c\nb\na")
    assert lines == ["c", "b", "a"]


@pytest.mark.parametrize("raw, expected", [
    ("LISINOPRIL", "Lisinopril"),
    ("lisinopril", "Lisinopril"),
    ("fish  oil!", "Fish Oil"),
    ("co-q10", "Co-Q10"),
    ("Aspirin,", "Aspirin"),
    ("  vitamin_d3 ", "Vitamind3"),
])
def test_clean_medicine_name(raw, expected):
    assert clean_medicine_name(raw) == expected


def test_name_key_is_case_insensitive():
    assert normalize_name_key("ASPIRIN") == normalize_name_key("aspirin.") == "aspirin"


def test_name_key_of_punctuation_only_is_empty():
    assert normalize_name_key("!!!") == ""
    assert clean_medicine_name("...") == ""
