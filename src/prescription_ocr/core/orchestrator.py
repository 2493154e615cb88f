# ============================================================================
# src/prescription_ocr/core/orchestrator.py
# ============================================================================
"""
Prescription Analyzer

This is the MAIN entry point for prescription interpretation.

Flow:
1. (process_image only) OCR provider -> OcrDocument
2. Split text into lines
3. Flag noise lines (headers, contact info, dates, ids)
4. Extract name / dosage / frequency candidates
5. Score candidates, drop those at or below the acceptance threshold,
   resolve bounding boxes for the rest
6. Deduplicate and order into DetectedMedicine records

Stages 2-6 are pure and synchronous. The only await is the provider call,
so many images can be analysed concurrently with process_batch().

Observability: stages never log. The analyzer logs through an injected
logger and reports each stage to an optional event_hook(stage, details).
"""

from typing import Any, Callable, Dict, List, Optional, Sequence
import asyncio
import logging
import time

from .bbox_utils import find_bounding_box
from .config import get_config
from .confidence import ConfidenceScorer, mean_confidence
from .context.enums import PipelineStage
from .context.medicine import AnalysisResult, ScoredCandidate
from .context.ocr_document import OcrDocument
from ..classifiers.line_classifier import LineClassifier
from ..config.thresholds_config import ThresholdSettings, threshold_settings
from ..extractors.entity_extractor import EntityExtractor
from ..extractors.ocr_normalizer import normalize_ocr_result
from ..extractors.ocr_provider import (
    OcrProvider,
    create_provider,
    describe_provider_error,
    resolve_image_uri,
)
from ..extractors.patterns import PatternTable, build_default_table
from ..processors.prescription.refiner import MedicineRefiner
from ..utils.text_normalizer import split_lines

EventHook = Callable[[PipelineStage, Dict[str, Any]], None]


class PrescriptionAnalyzer:
    """
    Orchestrates OCR output -> detected medicines.

    Every collaborator is injectable; anything not passed is built from
    defaults. The analyzer holds no per-run state, so one instance can serve
    concurrent runs.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        ocr_provider: Optional[OcrProvider] = None,
        patterns: Optional[PatternTable] = None,
        classifier: Optional[LineClassifier] = None,
        extractor: Optional[EntityExtractor] = None,
        scorer: Optional[ConfidenceScorer] = None,
        refiner: Optional[MedicineRefiner] = None,
        settings: Optional[ThresholdSettings] = None,
        logger: Optional[logging.Logger] = None,
        event_hook: Optional[EventHook] = None,
    ):
        # Passed config overrides env defaults
        self.config = {**get_config(), **(config or {})}
        self.settings = settings or threshold_settings
        self.logger = logger or logging.getLogger(__name__)
        self.event_hook = event_hook

        self.patterns = patterns or build_default_table(self.settings)
        self.classifier = classifier or LineClassifier()
        self.extractor = extractor or EntityExtractor(self.patterns, self.classifier)
        self.scorer = scorer or ConfidenceScorer(self.patterns, self.settings)
        self.refiner = refiner or MedicineRefiner()

        # Provider is only needed for process_image; built on first use
        self._ocr_provider = ocr_provider

    @property
    def ocr_provider(self) -> OcrProvider:
        if self._ocr_provider is None:
            self._ocr_provider = create_provider(self.config)
        return self._ocr_provider

    # ========================================================================
    # MAIN PROCESSING PIPELINE
    # ========================================================================

    def analyze(self, document: OcrDocument) -> AnalysisResult:
        """
        Interpret one OCR document.

        Args:
            document: Normalized OCR output

        Returns:
            AnalysisResult; empty with confidence 0 for blank text
        """
        start = time.perf_counter()

        lines = split_lines(document.full_text)
        self.logger.info(f"Analyzing prescription text: {len(lines)} lines")
        self._emit(PipelineStage.NORMALIZE, line_count=len(lines))

        if not lines:
            result = AnalysisResult(
                ocr_text=document.full_text,
                processing_time=time.perf_counter() - start,
            )
            self.logger.info("No text to analyze")
            self._emit(PipelineStage.COMPLETE, medicine_count=0, confidence=0.0)
            return result

        # Step 1: Noise classification
        noise: List[bool] = []
        for index, line in enumerate(lines):
            category = self.classifier.noise_category(line)
            noise.append(category is not None)
            if category is not None:
                self.logger.debug(f"Skipping line {index} ({category}): {line!r}")
        self._emit(PipelineStage.CLASSIFY, noise_lines=sum(noise))

        # Step 2: Candidate extraction
        candidates = self.extractor.extract(lines, noise)
        self._emit(PipelineStage.EXTRACT, candidate_count=len(candidates))

        # Step 3: Scoring + bounding boxes for accepted candidates
        scored = self._score(candidates, document)
        self._emit(
            PipelineStage.SCORE,
            accepted=len(scored),
            rejected=len(candidates) - len(scored),
        )

        # Step 4: Deduplication
        medicines = self.refiner.refine(scored)
        self._emit(PipelineStage.REFINE, medicine_count=len(medicines))

        result = AnalysisResult(
            detected_medicines=medicines,
            ocr_text=document.full_text,
            confidence=mean_confidence([m.confidence for m in medicines]),
            processing_time=time.perf_counter() - start,
        )

        self.logger.info(
            f"Prescription analysis complete: {len(medicines)} medicines, "
            f"confidence={result.confidence:.2f}, time={result.processing_time:.3f}s"
        )
        self._emit(
            PipelineStage.COMPLETE,
            medicine_count=len(medicines),
            confidence=result.confidence,
            processing_time=result.processing_time,
        )
        return result

    def _score(self, candidates, document: OcrDocument) -> List[ScoredCandidate]:
        resolve_boxes = bool(self.config.get("enable_bounding_boxes", True))

        scored: List[ScoredCandidate] = []
        for candidate in candidates:
            confidence = self.scorer.score(candidate)
            if not self.scorer.accepts(confidence):
                self.logger.debug(
                    f"Rejected candidate {candidate.raw_name!r} "
                    f"(line {candidate.line_index}, confidence={confidence:.2f})"
                )
                continue

            box = find_bounding_box(candidate.raw_name, document.blocks) if resolve_boxes else None
            scored.append(ScoredCandidate(candidate=candidate, confidence=confidence, bounding_box=box))

        return scored

    # ========================================================================
    # IMAGE PROCESSING (async provider boundary)
    # ========================================================================

    async def process_image(self, image_uri: str) -> AnalysisResult:
        """
        OCR an image and analyze the result.

        Raises:
            InvalidImageUriError: image reference rejected before OCR
            OcrProviderError: provider failed or returned nothing
        """
        resolved = resolve_image_uri(image_uri)

        start = time.perf_counter()
        self.logger.info(f"Running OCR ({self.ocr_provider.get_name()}) on {resolved}")
        try:
            raw = await self.ocr_provider.recognize(resolved)
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.logger.error(f"OCR failed for {resolved} after {elapsed:.2f}s: {e}")
            error = describe_provider_error(e)
            if error is e:
                raise
            raise error from e

        document = normalize_ocr_result(raw)
        self._emit(
            PipelineStage.OCR,
            image_uri=resolved,
            block_count=len(document.blocks),
            ocr_time=time.perf_counter() - start,
        )
        result = self.analyze(document)

        # Wall-clock time for the whole image, OCR included
        result.processing_time = time.perf_counter() - start
        return result

    async def process_batch(
        self,
        image_uris: Sequence[str],
        max_concurrent: Optional[int] = None,
    ) -> List[Any]:
        """
        Process multiple images concurrently.

        Returns:
            One entry per image, same order as input: an AnalysisResult, or
            the exception that image raised
        """
        max_concurrent = max_concurrent or int(self.config.get("max_concurrent_images", 4))

        self.logger.info(
            f"Batch processing {len(image_uris)} images "
            f"(max concurrent: {max_concurrent})"
        )

        semaphore = asyncio.Semaphore(max_concurrent)

        async def process_with_semaphore(image_uri):
            async with semaphore:
                return await self.process_image(image_uri)

        results = await asyncio.gather(
            *(process_with_semaphore(uri) for uri in image_uris),
            return_exceptions=True,
        )

        failures = sum(1 for r in results if isinstance(r, BaseException))
        self.logger.info(
            f"Batch processing complete: {len(results) - failures} succeeded, {failures} failed"
        )
        return results

    # ========================================================================
    # OBSERVABILITY
    # ========================================================================

    def _emit(self, stage: PipelineStage, **details) -> None:
        if self.event_hook is None:
            return
        try:
            self.event_hook(stage, details)
        except Exception as e:
            self.logger.warning(f"Event hook failed at stage {stage.value}: {e}")
