# ============================================================================
# src/prescription_ocr/constants/__init__.py
# ============================================================================
"""
Convenient imports for all constants
"""

from .medication_db import (
    KNOWN_MEDICINES,
    SUPPLEMENT_TERMS,
    MEDICINE_SUFFIXES,
    PRESCRIPTION_CONTEXT_KEYWORDS,
    CONTEXT_UNITS,
    NON_MEDICINE_WORDS,
)
