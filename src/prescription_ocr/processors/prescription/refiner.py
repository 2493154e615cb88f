# ============================================================================
# src/prescription_ocr/processors/prescription/refiner.py
# ============================================================================
"""
Medicine Refiner

Final stage of prescription interpretation:
- Groups scored candidates by normalized name
- Keeps the highest-confidence candidate per name (first one on ties)
- Builds the DetectedMedicine records handed to the review UI
- Orders them by confidence, highest first

This is the only place DetectedMedicine objects are created.
"""

from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence
import time
import uuid

from ...core.context.enums import MedicineSource
from ...core.context.medicine import (
    DOSAGE_NOT_SPECIFIED,
    FREQUENCY_AS_DIRECTED,
    DetectedMedicine,
    ScoredCandidate,
)
from ...utils.text_normalizer import clean_medicine_name, normalize_name_key


def default_medicine_id() -> str:
    """detected_<epoch ms>_<9 hex chars>, unique within and across runs."""
    return f"detected_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MedicineRefiner:
    """Deduplicates scored candidates into DetectedMedicine records."""

    def __init__(
        self,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.id_factory = id_factory or default_medicine_id
        self.clock = clock or utc_now

    def refine(self, scored: Sequence[ScoredCandidate]) -> List[DetectedMedicine]:
        best: Dict[str, ScoredCandidate] = {}
        for item in scored:
            key = normalize_name_key(item.candidate.raw_name)
            if not key:
                continue
            current = best.get(key)
            if current is None or item.confidence > current.confidence:
                best[key] = item

        created_at = self.clock()
        medicines = [self._build(item, created_at) for item in best.values()]

        # sorted() is stable: equal scores keep first-seen order
        return sorted(medicines, key=lambda m: m.confidence, reverse=True)

    def _build(self, item: ScoredCandidate, created_at: datetime) -> DetectedMedicine:
        candidate = item.candidate
        return DetectedMedicine(
            id=self.id_factory(),
            name=clean_medicine_name(candidate.raw_name),
            dosage=candidate.dosage or DOSAGE_NOT_SPECIFIED,
            frequency=candidate.frequency or FREQUENCY_AS_DIRECTED,
            confidence=item.confidence,
            created_at=created_at,
            detected=True,
            source=MedicineSource.DETECTED,
            bounding_box=item.bounding_box,
        )
