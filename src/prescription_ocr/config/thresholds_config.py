# ============================================================================
# src/prescription_ocr/config/thresholds_config.py
# ============================================================================
"""
Confidence Weights & Thresholds
- Base score and per-signal bonuses/penalties
- Acceptance threshold for emitting a detection
- Review threshold used to flag low-confidence detections
"""

from pydantic import Field
from pydantic_settings import BaseSettings

class ThresholdSettings(BaseSettings):
    BASE_CONFIDENCE: float = Field(
        default=0.2,
        ge=0.0, le=1.0,
        description="Starting score for every candidate"
    )
    KNOWN_MEDICINE_BONUS: float = Field(
        default=0.6,
        ge=0.0, le=1.0,
        description="Name matches the known generic/brand medicine list"
    )
    SUFFIX_BONUS: float = Field(
        default=0.3,
        ge=0.0, le=1.0,
        description="Name ends in a pharmaceutical suffix (-pril, -sartan, -mycin...)"
    )
    DOSAGE_BONUS: float = Field(
        default=0.2,
        ge=0.0, le=1.0,
        description="A dosage was found on the line or a neighbour"
    )
    FREQUENCY_BONUS: float = Field(
        default=0.1,
        ge=0.0, le=1.0,
        description="A frequency was found on the line or a neighbour"
    )
    SHORT_NAME_PENALTY: float = Field(
        default=0.1,
        ge=0.0, le=1.0,
        description="Subtracted when the name is shorter than SHORT_NAME_LENGTH"
    )
    SHORT_NAME_LENGTH: int = Field(
        default=4,
        ge=1,
        description="Names shorter than this many characters are penalised"
    )
    CONTEXT_BONUS: float = Field(
        default=0.15,
        ge=0.0, le=1.0,
        description="Source line contains a prescription keyword (take, tablet, daily, mg...)"
    )
    CAPITALIZATION_BONUS: float = Field(
        default=0.1,
        ge=0.0, le=1.0,
        description="Name surface form is exactly Capitalized"
    )
    FALLBACK_ONLY_PENALTY: float = Field(
        default=0.2,
        ge=0.0, le=1.0,
        description="Subtracted when only the capitalized-word or name+dosage layers matched. Keeps bare proper nouns (weekdays, surnames) at or below the acceptance threshold."
    )
    ACCEPTANCE_THRESHOLD: float = Field(
        default=0.15,
        ge=0.0, le=1.0,
        description="Candidates must score strictly above this to be emitted. Empirically tuned, recalibrate against real prescriptions."
    )
    REVIEW_THRESHOLD: float = Field(
        default=0.8,
        ge=0.0, le=1.0,
        description="Detections below this are flagged for careful human verification"
    )

threshold_settings = ThresholdSettings()
