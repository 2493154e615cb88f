# ============================================================================
# src/prescription_ocr/extractors/patterns.py
# ============================================================================
"""
Pattern Table

Data-driven registry of the three pattern families the entity extractor
applies to prescription lines:
- Medicine names (layered: vocabularies, suffix rule, capitalized fallback,
  name+strength)
- Dosage / strength
- Frequency / schedule

Each name pattern carries the score weight it contributes when a candidate
name fully matches it, and whether it counts as pharmaceutical evidence
("trusted"). The confidence scorer reads those from the table, so new
vocabularies can be registered without touching scoring code:

    table = build_default_table()
    table.register_vocabulary("regional_brands", ["dolo", "crocin"],
                              weight=0.6, trusted=True)
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Pattern, Tuple
import re

from ..config.thresholds_config import ThresholdSettings, threshold_settings
from ..constants.medication_db import (
    KNOWN_MEDICINES,
    SUPPLEMENT_TERMS,
    MEDICINE_SUFFIXES,
    NON_MEDICINE_WORDS,
)
from ..core.context.enums import NameLayer
from ..utils.exceptions import PatternRegistrationError


# Number, optionally decimal, directly followed by a strength unit
STRENGTH = r"\d+(?:\.\d+)?\s*(?:mg|mcg|µg|μg|g|ml|units?|iu|meq)\b"


@dataclass(frozen=True)
class TaggedPattern:
    """A compiled regex plus the metadata the scorer needs."""
    tag: str
    regex: Pattern[str]
    weight: float = 0.0
    trusted: bool = False
    group: int = 0  # capture group holding the value
    exclude: FrozenSet[str] = frozenset()  # lowercase values never reported

    def find_all(self, text: str) -> List[str]:
        """All non-excluded values in text, in order of appearance."""
        found = []
        for match in self.regex.finditer(text):
            value = match.group(self.group)
            if value and value.lower() not in self.exclude:
                found.append(value)
        return found

    def search(self, text: str) -> Optional[str]:
        """First value in text, or None."""
        match = self.regex.search(text)
        if match is None:
            return None
        return match.group(self.group)

    def matches_name(self, name: str) -> bool:
        """True if the whole name is something this pattern reports."""
        if name.lower() in self.exclude:
            return False
        return self.regex.fullmatch(name) is not None


def _alternation(terms: Iterable[str]) -> str:
    # Longest first so "fish oil" wins over a shorter overlapping term
    ordered = sorted({t.strip().lower() for t in terms if t.strip()}, key=len, reverse=True)
    return r"\b(?:" + "|".join(re.escape(t) for t in ordered) + r")\b"


class PatternTable:
    """
    Ordered registry of name, dosage and frequency patterns.

    Registration methods return the table so defaults can be built fluently.
    Registering an existing tag replaces that pattern in place, keeping its
    position (search order matters for dosage and frequency: first match wins).
    """

    def __init__(self):
        self._names: List[TaggedPattern] = []
        self._dosages: List[TaggedPattern] = []
        self._frequencies: List[TaggedPattern] = []

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_name(
        self,
        tag: str,
        pattern: str,
        weight: float = 0.0,
        trusted: bool = False,
        group: int = 0,
        exclude: Iterable[str] = (),
        flags: int = re.IGNORECASE,
    ) -> "PatternTable":
        entry = TaggedPattern(
            tag=tag,
            regex=re.compile(pattern, flags),
            weight=weight,
            trusted=trusted,
            group=group,
            exclude=frozenset(w.lower() for w in exclude),
        )
        self._upsert(self._names, entry)
        return self

    def register_vocabulary(
        self,
        tag: str,
        terms: Iterable[str],
        weight: float = 0.0,
        trusted: bool = True,
    ) -> "PatternTable":
        """Register a finite list of names as a case-insensitive layer."""
        terms = [t for t in terms if t and t.strip()]
        if not terms:
            raise PatternRegistrationError(f"Vocabulary '{tag}' has no terms")
        return self.register_name(tag, _alternation(terms), weight=weight, trusted=trusted)

    def register_dosage(self, tag: str, pattern: str, flags: int = re.IGNORECASE) -> "PatternTable":
        self._upsert(self._dosages, TaggedPattern(tag=tag, regex=re.compile(pattern, flags)))
        return self

    def register_frequency(self, tag: str, pattern: str, flags: int = re.IGNORECASE) -> "PatternTable":
        self._upsert(self._frequencies, TaggedPattern(tag=tag, regex=re.compile(pattern, flags)))
        return self

    @staticmethod
    def _upsert(entries: List[TaggedPattern], entry: TaggedPattern) -> None:
        for i, existing in enumerate(entries):
            if existing.tag == entry.tag:
                entries[i] = entry
                return
        entries.append(entry)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def name_patterns(self) -> Tuple[TaggedPattern, ...]:
        return tuple(self._names)

    @property
    def dosage_patterns(self) -> Tuple[TaggedPattern, ...]:
        return tuple(self._dosages)

    @property
    def frequency_patterns(self) -> Tuple[TaggedPattern, ...]:
        return tuple(self._frequencies)

    def get_name_pattern(self, tag: str) -> Optional[TaggedPattern]:
        for entry in self._names:
            if entry.tag == tag:
                return entry
        return None


def build_default_table(settings: Optional[ThresholdSettings] = None) -> PatternTable:
    """
    Default prescription pattern table.

    Name layers, highest trust first:
    1. known generic/brand medicines (+KNOWN_MEDICINE_BONUS)
    2. supplements and vitamins
    3. pharmaceutical suffix rule (+SUFFIX_BONUS)
    4. capitalized-word fallback (untrusted)
    5. word followed by a strength (untrusted, reports the word)
    """
    settings = settings or threshold_settings
    suffixes = "|".join(sorted(MEDICINE_SUFFIXES, key=len, reverse=True))
    count = r"(?:once|twice|thrice|(?:one|two|three|four|\d+)\s*(?:times?|x))"

    table = PatternTable()

    # Medicine names
    table.register_vocabulary(
        NameLayer.KNOWN_MEDICINE.value, KNOWN_MEDICINES,
        weight=settings.KNOWN_MEDICINE_BONUS, trusted=True,
    )
    table.register_vocabulary(NameLayer.SUPPLEMENT.value, SUPPLEMENT_TERMS, trusted=True)
    table.register_name(
        NameLayer.SUFFIX.value, rf"\b[A-Za-z]{{3,}}(?:{suffixes})\b",
        weight=settings.SUFFIX_BONUS, trusted=True, exclude=NON_MEDICINE_WORDS,
    )
    table.register_name(
        NameLayer.CAPITALIZED.value, r"\b[A-Z][a-z]{3,}\b",
        exclude=NON_MEDICINE_WORDS, flags=0,
    )
    table.register_name(
        NameLayer.NAME_WITH_DOSAGE.value, rf"\b([A-Za-z]{{3,}})\s+{STRENGTH}",
        group=1, exclude=NON_MEDICINE_WORDS,
    )

    # Dosage; ratio first so "5/10mg" is not cut down to "10mg"
    table.register_dosage(
        "ratio_strength", r"\b\d+(?:\.\d+)?/\d+(?:\.\d+)?\s*(?:mg|mcg|µg|μg|g|ml)\b"
    )
    table.register_dosage("strength", rf"\b{STRENGTH}")
    table.register_dosage(
        "spelled_strength",
        r"\b\d+(?:\.\d+)?\s*(?:milligram|microgram|gram|milliliter|millilitre|international unit|unit)s?\b",
    )

    # Frequency
    table.register_frequency(
        "times_daily", rf"\b{count}\s*(?:daily|a day|per day|every day|each day)\b"
    )
    table.register_frequency(
        "times_weekly", rf"\b{count}\s*(?:weekly|a week|per week|each week)\b"
    )
    table.register_frequency("every_n_hours", r"\bevery\s+\d+(?:\s*-\s*\d+)?\s*(?:hours?|hrs?)\b")
    table.register_frequency(
        "day_part",
        r"\b(?:with meals|before meals|after meals|morning|evening|night|bedtime|breakfast|lunch|dinner)\b",
    )
    table.register_frequency("as_needed", r"\b(?:as needed|prn|when necessary|if needed)\b")
    table.register_frequency(
        "abbreviation", r"\b(?:bid|tid|qid|qd|qam|qpm|qhs|q-?\d+-?h|ac|pc|hs)\b"
    )
    table.register_frequency(
        "take_tablets",
        r"\b(?:take\s+)?\d+\s*(?:tablet|capsule|pill)s?\s*(?:daily|twice daily|once daily|as directed)\b",
    )

    return table
