# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import itertools
from datetime import datetime, timezone

import pytest

from prescription_ocr.core.context.ocr_document import (
    BoundingBox,
    OcrDocument,
    TextBlock,
    TextLine,
)
from prescription_ocr.core.orchestrator import PrescriptionAnalyzer
from prescription_ocr.extractors.ocr_provider import StaticOcrProvider
from prescription_ocr.processors.prescription.refiner import MedicineRefiner


FIXED_NOW = datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def sample_prescription_text():
    """Typical photographed prescription after OCR"""
    return "\n".join([
        "Dr. Jane Smith, MD",
        "Phone: 555-123-4567",
        "Patient: John Doe",
        "03/15/2024",
        "Lisinopril 10mg once daily",
        "Metformin 500 mg twice daily with meals",
        "Aspirin 81mg",
        "Refills: 2",
    ])


@pytest.fixture
def sample_mlkit_payload(sample_prescription_text):
    """Raw payload shaped like ML Kit text recognition output"""
    return {
        "text": sample_prescription_text,
        "blocks": [
            {
                "text": "Dr. Jane Smith, MD\nPhone: 555-123-4567",
                "frame": {"left": 10, "top": 10, "right": 310, "bottom": 60},
                "lines": [
                    {"text": "Dr. Jane Smith, MD", "frame": {"x": 10, "y": 10, "width": 300, "height": 20}},
                    {"text": "Phone: 555-123-4567", "frame": {"x": 10, "y": 35, "width": 250, "height": 20}},
                ],
            },
            {
                "text": "Lisinopril 10mg once daily\nMetformin 500 mg twice daily with meals\nAspirin 81mg",
                "frame": {"x": 10, "y": 200, "width": 400, "height": 90},
                "lines": [
                    {
                        "text": "Lisinopril 10mg once daily",
                        "frame": {"x": 10, "y": 200, "width": 320, "height": 24},
                        "elements": [
                            {"text": "Lisinopril", "frame": {"x": 10, "y": 200, "width": 110, "height": 24}},
                            {"text": "10mg", "frame": {"x": 125, "y": 200, "width": 50, "height": 24}},
                        ],
                    },
                    {
                        "text": "Metformin 500 mg twice daily with meals",
                        # Malformed frame from the device
                        "frame": {"x": None, "y": "n/a", "width": -1, "height": 0},
                    },
                    {
                        "text": "Aspirin 81mg",
                        "frame": {"x": 10, "y": 265, "width": 150, "height": 24},
                    },
                ],
            },
        ],
    }


@pytest.fixture
def make_document():
    """Build an OcrDocument from plain lines, one block per line"""
    def _make(lines, with_blocks=True):
        text = "\n".join(lines)
        blocks = ()
        if with_blocks:
            blocks = tuple(
                TextBlock(
                    text=line,
                    frame=BoundingBox(10, 30 * i, 300, 24),
                    lines=(TextLine(text=line, frame=BoundingBox(10, 30 * i, 280, 24)),),
                )
                for i, line in enumerate(lines)
            )
        return OcrDocument(full_text=text, blocks=blocks)
    return _make


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def fixed_refiner():
    """Refiner with predictable ids and timestamps"""
    counter = itertools.count(1)
    return MedicineRefiner(
        id_factory=lambda: f"detected_test_{next(counter)}",
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def analyzer(fixed_refiner):
    """Analyzer with no real OCR backend"""
    return PrescriptionAnalyzer(
        config={"ocr_backend": "static", "enable_bounding_boxes": True},
        refiner=fixed_refiner,
    )


@pytest.fixture
def static_provider(sample_mlkit_payload):
    return StaticOcrProvider(payload=sample_mlkit_payload)
