# ============================================================================
# src/prescription_ocr/core/context/medicine.py
# ============================================================================
"""
Medicine records
- Candidate: transient pre-score tuple produced by the entity extractor
- ScoredCandidate: candidate plus confidence and resolved box
- DetectedMedicine: engine output handed to the review UI
- AnalysisResult: one analyzer run
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional

from .enums import MedicineSource
from .ocr_document import BoundingBox

# Sentinels shown to reviewers when nothing was found
DOSAGE_NOT_SPECIFIED = "Not specified"
FREQUENCY_AS_DIRECTED = "As directed"


@dataclass(frozen=True)
class Candidate:
    raw_name: str
    line_index: int
    dosage: Optional[str]
    frequency: Optional[str]
    source_line: str

    # Pattern tags that matched this name on its line
    layers: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class ScoredCandidate:
    candidate: Candidate
    confidence: float
    bounding_box: Optional[BoundingBox] = None


@dataclass(frozen=True)
class DetectedMedicine:
    id: str
    name: str
    dosage: str
    frequency: str
    confidence: float
    created_at: datetime
    detected: bool = True
    source: MedicineSource = MedicineSource.DETECTED
    bounding_box: Optional[BoundingBox] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "name": self.name,
            "dosage": self.dosage,
            "frequency": self.frequency,
            "confidence": self.confidence,
            "detected": self.detected,
            "source": self.source.value,
            "createdAt": self.created_at.isoformat(),
        }
        if self.bounding_box is not None:
            data["boundingBox"] = self.bounding_box.to_dict()
        return data


@dataclass
class AnalysisResult:
    detected_medicines: List[DetectedMedicine] = field(default_factory=list)
    ocr_text: str = ""
    confidence: float = 0.0
    processing_time: float = 0.0  # seconds, wall-clock

    @property
    def is_empty(self) -> bool:
        """Nothing recognisable; the review UI should offer manual entry."""
        return not self.detected_medicines

    def needs_review(self, threshold: float) -> List[DetectedMedicine]:
        """Detections a reviewer should verify carefully."""
        return [m for m in self.detected_medicines if m.confidence < threshold]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detectedMedicines": [m.to_dict() for m in self.detected_medicines],
            "ocrText": self.ocr_text,
            "confidence": self.confidence,
            "processingTime": self.processing_time,
        }
