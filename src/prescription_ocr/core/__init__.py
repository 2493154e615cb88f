# ============================================================================
# src/prescription_ocr/core/__init__.py
# ============================================================================
"""
Core components for the prescription OCR engine.

Scorer and analyzer are imported from their modules
(core.confidence, core.orchestrator) since they depend on extractors.
"""

from .context import OcrDocument, DetectedMedicine, AnalysisResult
from .bbox_utils import find_bounding_box, normalize_frame
from .config import Config, get_config, reload_config
