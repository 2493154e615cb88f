# ============================================================================
# src/prescription_ocr/config/__init__.py
# ============================================================================
"""
Convenient imports for all settings
"""

from .thresholds_config import ThresholdSettings, threshold_settings
from .logging_config import LoggingSettings, logging_settings
from .ocr_config import OcrSettings, ocr_settings
