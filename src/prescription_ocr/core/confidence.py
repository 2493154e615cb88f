# ============================================================================
# src/prescription_ocr/core/confidence.py
# ============================================================================
"""
Confidence Scoring and Aggregation

Provides utilities for:
- Scoring a medicine candidate from independent evidence signals
- Deciding whether a candidate is emitted at all
- Aggregating per-medicine scores into a document score
- Mapping scores to review levels
"""

from typing import Dict, List, Optional
from dataclasses import dataclass
import re
import statistics

from ..config.thresholds_config import ThresholdSettings, threshold_settings
from ..constants.medication_db import CONTEXT_UNITS, PRESCRIPTION_CONTEXT_KEYWORDS
from ..extractors.patterns import PatternTable, build_default_table
from .context.medicine import Candidate

_CAPITALIZED = re.compile(r"[A-Z][a-z]+")


@dataclass
class ConfidenceThresholds:
    """Confidence level thresholds"""
    high: float = 0.8
    low: float = 0.15

    @classmethod
    def from_settings(cls, settings: ThresholdSettings) -> "ConfidenceThresholds":
        return cls(high=settings.REVIEW_THRESHOLD, low=settings.ACCEPTANCE_THRESHOLD)

    def get_level(self, score: float) -> str:
        """
        Get confidence level from score.

        Returns:
            "high" (safe to pre-fill), "medium" (verify carefully) or
            "low" (would not have been emitted)
        """
        if score >= self.high:
            return "high"
        elif score > self.low:
            return "medium"
        else:
            return "low"


def _context_regex() -> "re.Pattern[str]":
    keywords = "|".join(re.escape(k) for k in PRESCRIPTION_CONTEXT_KEYWORDS)
    units = "|".join(re.escape(u) for u in CONTEXT_UNITS)
    # Units count even when glued to a number ("81mg")
    return re.compile(rf"\b(?:{keywords})\b|(?<![A-Za-z])(?:{units})\b", re.IGNORECASE)


class ConfidenceScorer:
    """
    Additive, clamped confidence score for a Candidate.

    Signals (weights from ThresholdSettings / the pattern table):
    - base score
    - every name layer the whole name matches adds that layer's weight
      (known list +0.6, suffix rule +0.3 by default)
    - dosage found, frequency found
    - short-name penalty
    - prescription-context keyword on the source line
    - exact Capitalized surface form
    - fallback-only penalty when no trusted layer matches the whole name

    The result is clamped to [0, 1]. Signals are independent, so the score
    does not depend on evaluation order.
    """

    def __init__(
        self,
        patterns: Optional[PatternTable] = None,
        settings: Optional[ThresholdSettings] = None,
    ):
        self.settings = settings or threshold_settings
        self.patterns = patterns or build_default_table(self.settings)
        self._context = _context_regex()

    def explain(self, candidate: Candidate) -> Dict[str, float]:
        """
        Signal -> contribution for one candidate, before clamping.

        Only signals that fired are listed; "base" is always present.
        """
        s = self.settings
        name = candidate.raw_name.strip()
        contributions: Dict[str, float] = {"base": s.BASE_CONFIDENCE}

        trusted_hit = False
        for pattern in self.patterns.name_patterns:
            if not pattern.matches_name(name):
                continue
            if pattern.trusted:
                trusted_hit = True
            if pattern.weight:
                contributions[pattern.tag] = pattern.weight

        if candidate.dosage:
            contributions["dosage"] = s.DOSAGE_BONUS
        if candidate.frequency:
            contributions["frequency"] = s.FREQUENCY_BONUS
        if len(name) < s.SHORT_NAME_LENGTH:
            contributions["short_name"] = -s.SHORT_NAME_PENALTY
        if self._context.search(candidate.source_line):
            contributions["context"] = s.CONTEXT_BONUS
        if _CAPITALIZED.fullmatch(name):
            contributions["capitalized"] = s.CAPITALIZATION_BONUS
        if not trusted_hit:
            contributions["fallback_only"] = -s.FALLBACK_ONLY_PENALTY

        return contributions

    def score(self, candidate: Candidate) -> float:
        raw = sum(self.explain(candidate).values())
        return round(min(max(raw, 0.0), 1.0), 4)

    def accepts(self, confidence: float) -> bool:
        """Strictly above the acceptance threshold."""
        return confidence > self.settings.ACCEPTANCE_THRESHOLD


def mean_confidence(scores: List[float]) -> float:
    """Document-level confidence: mean of medicine scores, 0.0 if none."""
    if not scores:
        return 0.0
    return round(statistics.mean(scores), 4)
