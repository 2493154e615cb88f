# src/prescription_ocr/core/context/__init__.py

from .enums import MedicineSource, NameLayer, PipelineStage
from .ocr_document import BoundingBox, TextElement, TextLine, TextBlock, OcrDocument
from .medicine import (
    Candidate,
    ScoredCandidate,
    DetectedMedicine,
    AnalysisResult,
    DOSAGE_NOT_SPECIFIED,
    FREQUENCY_AS_DIRECTED,
)

__all__ = [
    "MedicineSource",
    "NameLayer",
    "PipelineStage",
    "BoundingBox",
    "TextElement",
    "TextLine",
    "TextBlock",
    "OcrDocument",
    "Candidate",
    "ScoredCandidate",
    "DetectedMedicine",
    "AnalysisResult",
    "DOSAGE_NOT_SPECIFIED",
    "FREQUENCY_AS_DIRECTED",
]
