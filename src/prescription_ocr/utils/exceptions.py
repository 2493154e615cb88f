# ============================================================================
# src/prescription_ocr/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for the prescription OCR engine.
"""


class PrescriptionOcrError(Exception):
    """Base exception for all prescription OCR errors."""
    pass


class OcrProviderError(PrescriptionOcrError, RuntimeError):
    """OCR provider failed or returned nothing usable."""
    pass


class InvalidImageUriError(PrescriptionOcrError, ValueError):
    """Image reference is empty or not a supported image."""
    pass


class PatternRegistrationError(PrescriptionOcrError, ValueError):
    """A pattern could not be added to the pattern table."""
    pass


class ConfigurationError(PrescriptionOcrError):
    """Invalid configuration."""
    pass
