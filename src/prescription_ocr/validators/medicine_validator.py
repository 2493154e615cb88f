# ============================================================================
# src/prescription_ocr/validators/medicine_validator.py
# ============================================================================
"""
Review record validation.

Format checks a reviewer sees before confirming a medicine record. These
are NOT medical checks: no interaction, range or safety validation.
"""

from typing import Any, List
import re

from ..core.bbox_utils import read_field
from ..core.context.medicine import DOSAGE_NOT_SPECIFIED, FREQUENCY_AS_DIRECTED

# "10mg", "2.5 ml", "5/325 mg", "1 tablet", "500 IU"
DOSAGE_FORMAT = re.compile(
    r"^\d+(?:\.\d+)?(?:/\d+(?:\.\d+)?)?\s*"
    r"(?:mg|mcg|µg|μg|g|ml|units?|iu|meq|milligrams?|micrograms?|grams?|"
    r"milliliters?|millilitres?|international units?|tablets?|capsules?|drops?|puffs?)$",
    re.IGNORECASE,
)


def validate_medicine(medicine: Any) -> List[str]:
    """
    Problems with a medicine record, as reviewer-facing messages.

    Accepts a DetectedMedicine or a dict with name/dosage/frequency keys
    (what the review UI sends back after editing).

    Returns:
        Empty list when the record looks complete
    """
    issues: List[str] = []

    name = str(read_field(medicine, "name") or "").strip()
    dosage = str(read_field(medicine, "dosage") or "").strip()
    frequency = str(read_field(medicine, "frequency") or "").strip()

    if not name:
        issues.append("Medicine name is required")

    if not dosage:
        issues.append("Dosage is required")
    elif dosage == DOSAGE_NOT_SPECIFIED:
        issues.append("Dosage not specified")
    elif not DOSAGE_FORMAT.match(dosage):
        issues.append('Dosage format appears invalid (e.g., "10mg", "2.5g")')

    if not frequency:
        issues.append("Frequency is required")
    elif frequency == FREQUENCY_AS_DIRECTED:
        issues.append("Frequency not specified")

    return issues
