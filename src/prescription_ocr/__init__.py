# ============================================================================
# src/prescription_ocr/__init__.py
# ============================================================================
"""
Prescription OCR interpretation engine.

Turns OCR output from a photographed prescription into a confidence-scored
list of candidate medicines for human review.
"""

__version__ = "0.1.0"

from .core.context import (
    BoundingBox,
    TextElement,
    TextLine,
    TextBlock,
    OcrDocument,
    DetectedMedicine,
    AnalysisResult,
    MedicineSource,
    PipelineStage,
)
from .core.orchestrator import PrescriptionAnalyzer
from .extractors.ocr_normalizer import normalize_ocr_result
from .extractors.ocr_provider import OcrProvider, StaticOcrProvider, TesseractOcrProvider
from .extractors.patterns import PatternTable, build_default_table
from .utils.exceptions import InvalidImageUriError, OcrProviderError

__all__ = [
    "BoundingBox",
    "TextElement",
    "TextLine",
    "TextBlock",
    "OcrDocument",
    "DetectedMedicine",
    "AnalysisResult",
    "MedicineSource",
    "PipelineStage",
    "PrescriptionAnalyzer",
    "normalize_ocr_result",
    "OcrProvider",
    "StaticOcrProvider",
    "TesseractOcrProvider",
    "PatternTable",
    "build_default_table",
    "InvalidImageUriError",
    "OcrProviderError",
]
