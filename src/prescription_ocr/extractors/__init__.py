# ============================================================================
# src/prescription_ocr/extractors/__init__.py
# ============================================================================
"""
Extractors: OCR provider boundary, payload normalization, pattern table
and candidate extraction.
"""

from .patterns import PatternTable, TaggedPattern, build_default_table
from .entity_extractor import EntityExtractor
from .ocr_normalizer import normalize_ocr_result
from .ocr_provider import (
    OcrProvider,
    StaticOcrProvider,
    TesseractOcrProvider,
    create_provider,
    validate_image_uri,
    resolve_image_uri,
    describe_provider_error,
)
