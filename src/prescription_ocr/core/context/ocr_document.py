# ============================================================================
# src/prescription_ocr/core/context/ocr_document.py
# ============================================================================
"""
Canonical OCR document shape
- One frame type for blocks, lines and elements
- Strict nesting: a line belongs to exactly one block
- Immutable once built; provider payloads are mapped into it by
  extractors/ocr_normalizer.py
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Tuple


@dataclass(frozen=True)
class BoundingBox:
    """Screen-space rectangle in provider pixels, top-left origin."""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def is_usable(self) -> bool:
        # A zero-area frame is how malformed provider frames end up
        return self.width > 0 or self.height > 0

    def to_dict(self) -> Dict[str, float]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class TextElement:
    text: str
    frame: BoundingBox = field(default_factory=BoundingBox)


@dataclass(frozen=True)
class TextLine:
    text: str
    frame: BoundingBox = field(default_factory=BoundingBox)
    elements: Tuple[TextElement, ...] = ()


@dataclass(frozen=True)
class TextBlock:
    text: str
    frame: BoundingBox = field(default_factory=BoundingBox)
    lines: Tuple[TextLine, ...] = ()


@dataclass(frozen=True)
class OcrDocument:
    """Text plus positional blocks returned by an OCR provider."""
    full_text: str = ""
    blocks: Tuple[TextBlock, ...] = ()

    @property
    def is_blank(self) -> bool:
        return not self.full_text or not self.full_text.strip()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fullText": self.full_text,
            "blocks": [
                {
                    "text": block.text,
                    "frame": block.frame.to_dict(),
                    "lines": [
                        {
                            "text": line.text,
                            "frame": line.frame.to_dict(),
                            "elements": [
                                {"text": el.text, "frame": el.frame.to_dict()}
                                for el in line.elements
                            ],
                        }
                        for line in block.lines
                    ],
                }
                for block in self.blocks
            ],
        }
