# ============================================================================
# src/prescription_ocr/classifiers/line_classifier.py
# ============================================================================
"""
Line Classifier

Flags prescription lines that cannot hold a medicine so the extractor skips
them. A line is noise when ANY category matches:

- professional_header: line starts with a title/facility word
  (dr, doctor, physician, clinic, hospital, pharmacy)
- contact_info: phone/fax/address/email/website keyword or a URL token
- date: the whole line is a numeric date (12/05/2024, 1.2.24)
- demographic_label: patient/name/dob/address/city/state/zip label + colon
- prescription_number: "Rx"/"prescription" followed by a number
- long_number: the line is a run of 10+ digits (phone, member id)
- state_zip: the line is a 2-letter state code + 5-digit zip

Classification is per line and never looks at neighbours.
"""

from typing import Dict, Optional, Pattern
import re


class LineClassifier:
    """Per-line noise predicate."""

    def __init__(self, patterns: Optional[Dict[str, Pattern[str]]] = None):
        self.patterns = patterns if patterns is not None else self._load_noise_patterns()

    def _load_noise_patterns(self) -> Dict[str, Pattern[str]]:
        """Category -> compiled regex, checked in insertion order."""
        return {
            "professional_header": re.compile(
                r"^(?:dr|doctor|physician|clinic|hospital|pharmacy)\b", re.IGNORECASE
            ),
            "contact_info": re.compile(
                r"\b(?:phone|fax|address|email|e-mail|website)\b|\bwww\.|https?://",
                re.IGNORECASE,
            ),
            "date": re.compile(r"^\d{1,2}[/.-]\d{1,2}[/.-]\d{2,4}$"),
            "demographic_label": re.compile(
                r"^(?:patient|name|dob|address|city|state|zip)\s*:", re.IGNORECASE
            ),
            "prescription_number": re.compile(
                r"^(?:rx|prescription)\s*#?\s*\d+", re.IGNORECASE
            ),
            "long_number": re.compile(r"^\d{10,}$"),
            # Case-sensitive: state codes are upper-case
            "state_zip": re.compile(r"^[A-Z]{2}\s+\d{5}$"),
        }

    def noise_category(self, line: str) -> Optional[str]:
        """First matching noise category, or None for a candidate line."""
        text = line.strip()
        for category, pattern in self.patterns.items():
            if pattern.search(text):
                return category
        return None

    def is_noise(self, line: str) -> bool:
        return self.noise_category(line) is not None
