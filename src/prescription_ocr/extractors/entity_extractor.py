# ============================================================================
# src/prescription_ocr/extractors/entity_extractor.py
# ============================================================================
"""
Entity Extractor

Turns normalized prescription lines into medicine candidates:

1. Skip lines the LineClassifier flags as noise
2. Collect name candidates from every name layer in the PatternTable
   (union, first occurrence kept, original order)
3. For each name, look for a dosage and a frequency:
   current line -> previous line -> next line, first match wins

Dosage and frequency are looked up independently, so a candidate may take
its strength from one line and its schedule from another. Neighbour lookups
use the full line list, noise lines included.
"""

from typing import Dict, List, Optional, Sequence, Tuple
import re

from ..classifiers.line_classifier import LineClassifier
from ..core.context.medicine import Candidate
from .patterns import PatternTable, TaggedPattern, build_default_table

_WHITESPACE = re.compile(r"\s+")


class EntityExtractor:
    """Pattern-driven name / dosage / frequency extraction."""

    def __init__(
        self,
        patterns: Optional[PatternTable] = None,
        classifier: Optional[LineClassifier] = None,
    ):
        self.patterns = patterns or build_default_table()
        self.classifier = classifier or LineClassifier()

    def extract(
        self,
        lines: Sequence[str],
        noise: Optional[Sequence[bool]] = None,
    ) -> List[Candidate]:
        """
        Extract candidates from all non-noise lines.

        Args:
            lines: Output of split_lines(); index is the line index
            noise: Precomputed noise flags, one per line. Computed with the
                classifier when omitted.

        Returns:
            Candidates in line order, then name order within the line
        """
        if noise is None:
            noise = [self.classifier.is_noise(line) for line in lines]

        candidates: List[Candidate] = []
        for index, line in enumerate(lines):
            if noise[index]:
                continue

            for raw_name, layers in self.find_names(line):
                candidates.append(Candidate(
                    raw_name=raw_name,
                    line_index=index,
                    dosage=self.find_dosage(lines, index),
                    frequency=self.find_frequency(lines, index),
                    source_line=line,
                    layers=frozenset(layers),
                ))

        return candidates

    def find_names(self, line: str) -> List[Tuple[str, List[str]]]:
        """
        Name candidates on one line with the layer tags that produced them.

        The same surface text found by several layers is reported once.
        """
        found: Dict[str, List[str]] = {}
        for pattern in self.patterns.name_patterns:
            for value in pattern.find_all(line):
                value = value.strip()
                if not value:
                    continue
                tags = found.setdefault(value, [])
                if pattern.tag not in tags:
                    tags.append(pattern.tag)
        return list(found.items())

    def find_dosage(self, lines: Sequence[str], index: int) -> Optional[str]:
        return self._search_nearby(self.patterns.dosage_patterns, lines, index)

    def find_frequency(self, lines: Sequence[str], index: int) -> Optional[str]:
        return self._search_nearby(self.patterns.frequency_patterns, lines, index)

    def _search_nearby(
        self,
        patterns: Sequence[TaggedPattern],
        lines: Sequence[str],
        index: int,
    ) -> Optional[str]:
        # Pattern order decides within a line, line order across lines
        for neighbour in (index, index - 1, index + 1):
            if neighbour < 0 or neighbour >= len(lines):
                continue
            for pattern in patterns:
                value = pattern.search(lines[neighbour])
                if value:
                    return _WHITESPACE.sub(" ", value.strip())
        return None
