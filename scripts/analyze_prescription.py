#!/usr/bin/env python3
"""
Prescription Analysis Script

Runs the prescription OCR engine on either a saved OCR payload (JSON from a
device OCR provider) or an image file (local Tesseract), prints the
analysis as JSON on stdout and reviewer notes on stderr.

Usage:
    python scripts/analyze_prescription.py --ocr-json samples/rx_ocr.json
    python scripts/analyze_prescription.py --image rx_photo.jpg
    python scripts/analyze_prescription.py --image rx.png --log-level DEBUG --json-logs
    python scripts/analyze_prescription.py --ocr-json rx.json --threshold 0.3
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
import argparse

from pydantic import ValidationError

from prescription_ocr.config import ThresholdSettings, logging_settings
from prescription_ocr.core.confidence import ConfidenceThresholds
from prescription_ocr.core.orchestrator import PrescriptionAnalyzer
from prescription_ocr.extractors.ocr_normalizer import normalize_ocr_result
from prescription_ocr.utils.exceptions import PrescriptionOcrError
from prescription_ocr.utils.logging import setup_logging, stage_logger
from prescription_ocr.validators import validate_medicine


def build_analyzer(args) -> PrescriptionAnalyzer:
    settings = None
    if args.threshold is not None:
        settings = ThresholdSettings(ACCEPTANCE_THRESHOLD=args.threshold)
    config = {"ocr_backend": "tesseract"} if args.image else {}
    hook = stage_logger(level=logging.INFO) if args.trace_stages else None
    return PrescriptionAnalyzer(config=config, settings=settings, event_hook=hook)


def print_review_notes(result, settings) -> None:
    thresholds = ConfidenceThresholds.from_settings(settings)
    flagged = {m.id for m in result.needs_review(thresholds.high)}
    for medicine in result.detected_medicines:
        level = thresholds.get_level(medicine.confidence)
        print(f"{medicine.name} [{level}]", file=sys.stderr)
        issues = validate_medicine(medicine)
        if medicine.id in flagged:
            issues.append(f"Low confidence ({medicine.confidence:.0%}), verify carefully")
        for issue in issues:
            print(f"  - {issue}", file=sys.stderr)

    if result.is_empty:
        print("No medicines detected; enter them manually.", file=sys.stderr)


def main():
    parser = argparse.ArgumentParser(description="Analyze a prescription image or OCR payload")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--ocr-json", type=Path, help="Saved OCR provider payload (JSON)")
    source.add_argument("--image", type=str, help="Prescription image (runs Tesseract)")
    parser.add_argument("--log-level", default=logging_settings.LOG_LEVEL, help="Logging level")
    parser.add_argument("--json-logs", action="store_true", help="Structured JSON logs")
    parser.add_argument("--trace-stages", action="store_true", help="Log every pipeline stage")
    parser.add_argument("--threshold", type=float, help="Override acceptance threshold (0-1)")

    args = parser.parse_args()

    setup_logging(level=args.log_level, format_json=True if args.json_logs else None)

    try:
        analyzer = build_analyzer(args)
        if args.ocr_json:
            payload = json.loads(args.ocr_json.read_text(encoding="utf-8"))
            result = analyzer.analyze(normalize_ocr_result(payload))
        else:
            result = asyncio.run(analyzer.process_image(args.image))
    except (PrescriptionOcrError, ValidationError, OSError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result.to_dict(), indent=2))
    print_review_notes(result, analyzer.settings)


if __name__ == "__main__":
    main()
