# ============================================================================
# src/prescription_ocr/utils/text_normalizer.py
# ============================================================================
"""
Text normalization helpers.

- split_lines: raw OCR text -> ordered, trimmed, non-empty lines
- clean_medicine_name: display form shown to reviewers
- normalize_name_key: key used to group duplicate detections
"""

import re
from typing import List

_NAME_JUNK = re.compile(r"[^\w\s-]|_")
_WHITESPACE = re.compile(r"\s+")
_WORD_START = re.compile(r"\b\w")


def split_lines(text: str) -> List[str]:
    """
    Split OCR text into trimmed, non-empty lines.

    The position of a line in the returned list is its line index; the
    extractor uses it to look at neighbouring lines.
    """
    if not text or not text.strip():
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def normalize_name_key(name: str) -> str:
    """Lowercase name with punctuation dropped and whitespace collapsed."""
    cleaned = _NAME_JUNK.sub("", name or "")
    return _WHITESPACE.sub(" ", cleaned).strip().lower()


def clean_medicine_name(name: str) -> str:
    """
    Display name: letters, digits, spaces and hyphens only, each word
    title-cased ("LISINOPRIL" -> "Lisinopril", "fish oil" -> "Fish Oil").
    """
    key = normalize_name_key(name)
    return _WORD_START.sub(lambda m: m.group(0).upper(), key)
