# ============================================================================
# src/prescription_ocr/core/context/enums.py
# ============================================================================
"""
Processing Enums
- Where a medicine record came from
- Name-matching layers
- Pipeline stages reported to event hooks
"""

from enum import Enum

class MedicineSource(str, Enum):
    DETECTED = "detected"   # Emitted by the engine
    MANUAL = "manual"       # Added by a human in the review UI

class NameLayer(str, Enum):
    KNOWN_MEDICINE = "known_medicine"      # Explicit generic/brand list
    SUPPLEMENT = "supplement"              # Vitamins, minerals, OTC supplements
    SUFFIX = "suffix"                      # -pril, -sartan, -mycin...
    CAPITALIZED = "capitalized"            # Any Capitalized word, 4+ letters
    NAME_WITH_DOSAGE = "name_with_dosage"  # Word directly followed by a strength

class PipelineStage(str, Enum):
    OCR = "ocr"
    NORMALIZE = "normalize"
    CLASSIFY = "classify"
    EXTRACT = "extract"
    SCORE = "score"
    REFINE = "refine"
    COMPLETE = "complete"
