# ============================================================================
# FILE: tests/unit/test_ocr_normalizer.py
# ============================================================================
"""
Unit tests for OCR payload normalization
"""

from types import SimpleNamespace

import pytest

from prescription_ocr.core.context.ocr_document import BoundingBox, OcrDocument
from prescription_ocr.extractors.ocr_normalizer import normalize_ocr_result
from prescription_ocr.utils.exceptions import OcrProviderError


def test_mlkit_payload(sample_mlkit_payload, sample_prescription_text):
    """Test ML Kit shaped payload normalization"""
    print("=" * 70)
    print("TEST: ML Kit payload normalization")
    print("=" * 70)

    document = normalize_ocr_result(sample_mlkit_payload)

    assert document.full_text == sample_prescription_text
    assert len(document.blocks) == 2
    print(f"✓ {len(document.blocks)} blocks normalized")

    header, body = document.blocks
    assert header.frame == BoundingBox(10, 10, 300, 50)
    assert body.lines[0].frame == BoundingBox(10, 200, 320, 24)
    assert body.lines[0].elements[0].text == "Lisinopril"
    assert body.lines[1].frame == BoundingBox(0, 0, 0, 0)
    print("✓ Frames normalized, malformed frame zeroed")

    print("\n✅ ML Kit payload test PASSED\n")


def test_object_payload_with_alternate_names():
    raw = SimpleNamespace(
        fullText="Aspirin 81mg",
        blocks=[
            SimpleNamespace(
                text="Aspirin 81mg",
                boundingBox={"origin": {"x": 1, "y": 2}, "size": {"width": 30, "height": 10}},
                lines=[SimpleNamespace(text="Aspirin 81mg", bounding_box=(1, 2, 30, 10), elements=None)],
            )
        ],
    )
    document = normalize_ocr_result(raw)
    assert document.full_text == "Aspirin 81mg"
    assert document.blocks[0].frame == BoundingBox(1, 2, 30, 10)
    assert document.blocks[0].lines[0].frame == BoundingBox(1, 2, 30, 10)
    assert document.blocks[0].lines[0].elements == ()


def test_full_text_key():
    document = normalize_ocr_result({"full_text": "Metformin 500mg"})
    assert document.full_text == "Metformin 500mg"
    assert document.blocks == ()


def test_text_rebuilt_from_blocks_when_missing():
    document = normalize_ocr_result({"blocks": [{"text": "line one"}, {"text": "line two"}]})
    assert document.full_text == "line one\nline two"


def test_missing_blocks_and_lines_are_tolerated():
    document = normalize_ocr_result({"text": "x", "blocks": [{"text": "x", "lines": None}]})
    assert document.blocks[0].lines == ()
    assert document.blocks[0].frame == BoundingBox()


def test_plain_string_and_document_pass_through():
    assert normalize_ocr_result("Aspirin") == OcrDocument(full_text="Aspirin")
    document = OcrDocument(full_text="Aspirin")
    assert normalize_ocr_result(document) is document


def test_none_payload_is_provider_error():
    with pytest.raises(OcrProviderError):
        normalize_ocr_result(None)


def test_document_to_dict_round_shape(sample_mlkit_payload):
    data = normalize_ocr_result(sample_mlkit_payload).to_dict()
    assert set(data) == {"fullText", "blocks"}
    assert data["blocks"][1]["lines"][0]["frame"] == {"x": 10, "y": 200, "width": 320, "height": 24}
