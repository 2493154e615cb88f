# ============================================================================
# src/prescription_ocr/extractors/ocr_normalizer.py
# ============================================================================
"""
OCR payload normalization.

Providers disagree on field names (ML Kit `text`/`frame`, Vision-style
`fullText`/`boundingBox`, our own `full_text`/`bounding_box`) and some
return plain dicts while others return objects. normalize_ocr_result() maps
any of them into one OcrDocument once, at ingestion, so the rest of the
pipeline only ever sees the canonical shape.
"""

from typing import Any, List

from ..core.bbox_utils import read_field, normalize_frame
from ..core.context.ocr_document import OcrDocument, TextBlock, TextElement, TextLine
from ..utils.exceptions import OcrProviderError


TEXT_KEYS = ("text", "full_text", "fullText")
FRAME_KEYS = ("frame", "bounding_box", "boundingBox")


def _text(source: Any) -> str:
    value = read_field(source, *TEXT_KEYS)
    return value if isinstance(value, str) else ""


def _children(source: Any, key: str) -> List[Any]:
    value = read_field(source, key)
    if value is None or isinstance(value, (str, bytes, dict)):
        return []
    try:
        return list(value)
    except TypeError:
        return []


def _element(raw: Any) -> TextElement:
    return TextElement(text=_text(raw), frame=normalize_frame(read_field(raw, *FRAME_KEYS)))


def _line(raw: Any) -> TextLine:
    return TextLine(
        text=_text(raw),
        frame=normalize_frame(read_field(raw, *FRAME_KEYS)),
        elements=tuple(_element(e) for e in _children(raw, "elements")),
    )


def _block(raw: Any) -> TextBlock:
    return TextBlock(
        text=_text(raw),
        frame=normalize_frame(read_field(raw, *FRAME_KEYS)),
        lines=tuple(_line(line) for line in _children(raw, "lines")),
    )


def normalize_ocr_result(raw: Any) -> OcrDocument:
    """
    Convert a raw provider payload into an OcrDocument.

    Args:
        raw: Dict or object with text and an optional `blocks` hierarchy.
            An OcrDocument is returned unchanged; a plain string is taken as
            text without blocks.

    Returns:
        OcrDocument with every frame sanitised

    Raises:
        OcrProviderError: provider produced no payload at all
    """
    if raw is None:
        raise OcrProviderError("OCR provider returned no result")

    if isinstance(raw, OcrDocument):
        return raw

    if isinstance(raw, str):
        return OcrDocument(full_text=raw)

    blocks = tuple(_block(b) for b in _children(raw, "blocks"))
    full_text = _text(raw)

    if not full_text and blocks:
        # Some providers only fill per-block text
        full_text = "\n".join(b.text for b in blocks if b.text)

    return OcrDocument(full_text=full_text, blocks=blocks)
