"""Shared utilities: text normalization, logging setup, exceptions."""

from .exceptions import (
    PrescriptionOcrError,
    OcrProviderError,
    InvalidImageUriError,
    PatternRegistrationError,
    ConfigurationError,
)
from .text_normalizer import split_lines, clean_medicine_name, normalize_name_key
from .logging import setup_logging, JsonFormatter, stage_logger
