# ============================================================================
# src/prescription_ocr/extractors/ocr_provider.py
# ============================================================================
"""
OCR Providers

The engine never recognises text itself. It calls an injected OcrProvider
that turns an image reference into a raw payload (text + blocks/lines/
elements with frames), which extractors/ocr_normalizer.py then maps into an
OcrDocument.

Providers:
1. TesseractOcrProvider - pytesseract + Pillow, runs in a worker thread
2. StaticOcrProvider - returns a fixed payload (or raises a fixed error);
   used by tests, demos and replaying saved device OCR output

Also here:
- validate_image_uri / resolve_image_uri: image reference checks done
  before any provider runs
- describe_provider_error: maps low-level failures to reviewer-facing
  OcrProviderError messages
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import asyncio
import logging

from ..config.ocr_config import OcrSettings, ocr_settings
from ..utils.exceptions import ConfigurationError, InvalidImageUriError, OcrProviderError

logger = logging.getLogger(__name__)


# ============================================================================
# IMAGE URI HANDLING
# ============================================================================

def validate_image_uri(image_uri: Any, settings: Optional[OcrSettings] = None) -> bool:
    """
    True for a non-empty string that names an image file or comes from a
    camera/gallery scheme (content://, file://, ph://).
    """
    if not image_uri or not isinstance(image_uri, str):
        return False

    settings = settings or ocr_settings
    lowered = image_uri.lower()
    has_extension = any(ext in lowered for ext in settings.ALLOWED_IMAGE_EXTENSIONS)
    has_scheme = any(scheme in lowered for scheme in settings.ALLOWED_URI_SCHEMES)
    return has_extension or has_scheme


def resolve_image_uri(image_uri: str, settings: Optional[OcrSettings] = None) -> str:
    """
    Canonical URI handed to the provider.

    Scheme URIs and http(s) URLs are kept; bare paths get a file:// prefix.

    Raises:
        InvalidImageUriError: not a supported image reference
    """
    settings = settings or ocr_settings
    if not validate_image_uri(image_uri, settings):
        raise InvalidImageUriError(
            "Invalid image format or path. Please use JPG, PNG, or other supported formats."
        )

    if any(image_uri.startswith(scheme) for scheme in settings.ALLOWED_URI_SCHEMES):
        return image_uri
    if image_uri.startswith("http"):
        return image_uri
    return f"file://{image_uri}"


def describe_provider_error(error: BaseException) -> OcrProviderError:
    """
    Reviewer-facing error for a provider failure.

    Callers raise the result `from` the original exception so the low-level
    cause stays in the traceback.
    """
    if isinstance(error, OcrProviderError):
        return error

    message = str(error) or type(error).__name__
    lowered = message.lower()

    if isinstance(error, PermissionError) or "permission" in lowered:
        return OcrProviderError("Permission denied: Cannot access image file")
    if isinstance(error, FileNotFoundError) or "not found" in lowered:
        return OcrProviderError("Image file not found or invalid path")
    # PIL reports undecodable files as "cannot identify image file"
    if "format" in lowered or "cannot identify image" in lowered:
        return OcrProviderError(
            "Unsupported image format. Please use JPG, PNG, or other common formats"
        )
    return OcrProviderError(f"Failed to extract text from image: {message}")


# ============================================================================
# PROVIDERS
# ============================================================================

class OcrProvider(ABC):
    """Image reference -> raw OCR payload."""

    @abstractmethod
    async def recognize(self, image_uri: str) -> Any:
        """
        Run recognition on one image.

        Returns:
            Provider payload understood by normalize_ocr_result()
        """
        pass

    def get_name(self) -> str:
        return type(self).__name__


class StaticOcrProvider(OcrProvider):
    """
    Returns a canned payload for every image.

    Pass `error` to simulate a failing provider.
    """

    def __init__(self, payload: Any = None, error: Optional[BaseException] = None):
        self.payload = payload
        self.error = error
        self.calls: List[str] = []

    async def recognize(self, image_uri: str) -> Any:
        self.calls.append(image_uri)
        if self.error is not None:
            raise self.error
        return self.payload


class TesseractOcrProvider(OcrProvider):
    """
    Local Tesseract recognition.

    Builds an ML Kit-shaped payload (blocks -> lines -> elements with
    left/top/width/height frames) from pytesseract.image_to_data so the
    bounding boxes survive normalization.
    """

    def __init__(self, settings: Optional[OcrSettings] = None):
        self.settings = settings or ocr_settings

    async def recognize(self, image_uri: str) -> Dict[str, Any]:
        path = self._local_path(image_uri)
        # Tesseract is CPU-bound; keep the event loop free
        return await asyncio.to_thread(self._recognize_sync, path)

    @staticmethod
    def _local_path(image_uri: str) -> Path:
        if image_uri.startswith("file://"):
            return Path(image_uri[len("file://"):])
        if "://" in image_uri:
            raise FileNotFoundError(
                f"Image not found locally: {image_uri} (device and remote URIs need a device OCR provider)"
            )
        return Path(image_uri)

    def _recognize_sync(self, path: Path) -> Dict[str, Any]:
        import pytesseract
        from PIL import Image

        with Image.open(path) as image:
            data = pytesseract.image_to_data(
                image,
                lang=self.settings.TESSERACT_LANGUAGE,
                config=self.settings.TESSERACT_CONFIG,
                output_type=pytesseract.Output.DICT,
            )

        return self._build_payload(data)

    @staticmethod
    def _build_payload(data: Dict[str, List[Any]]) -> Dict[str, Any]:
        """
        Group Tesseract rows into blocks and lines.

        Tesseract levels: 2 = block, 4 = line, 5 = word. Rows for levels the
        output omits are tolerated; such blocks/lines get an empty frame.
        """
        blocks: Dict[int, Dict[str, Any]] = {}
        lines: Dict[Tuple[int, int, int], Dict[str, Any]] = {}

        for i in range(len(data.get("text", []))):
            level = int(data["level"][i])
            block_key = int(data["block_num"][i])
            line_key = (block_key, int(data["par_num"][i]), int(data["line_num"][i]))
            frame = {
                "left": data["left"][i],
                "top": data["top"][i],
                "width": data["width"][i],
                "height": data["height"][i],
            }

            block = blocks.setdefault(block_key, {"frame": None, "lines": []})
            if level == 2:
                block["frame"] = frame
                continue

            if level < 4:
                continue

            line = lines.get(line_key)
            if line is None:
                line = {"frame": None, "elements": []}
                lines[line_key] = line
                block["lines"].append(line)
            if level == 4:
                line["frame"] = frame
                continue

            word = str(data["text"][i] or "").strip()
            if word:
                line["elements"].append({"text": word, "frame": frame})

        payload_blocks = []
        for block in blocks.values():
            block_lines = []
            for line in block["lines"]:
                if not line["elements"]:
                    continue
                line["text"] = " ".join(e["text"] for e in line["elements"])
                block_lines.append(line)
            if not block_lines:
                continue
            payload_blocks.append({
                "text": "\n".join(line["text"] for line in block_lines),
                "frame": block["frame"],
                "lines": block_lines,
            })

        return {
            "text": "\n".join(b["text"] for b in payload_blocks),
            "blocks": payload_blocks,
        }


def create_provider(config: Optional[Dict[str, Any]] = None) -> OcrProvider:
    """
    Provider named by config["ocr_backend"].

    "static" builds a StaticOcrProvider around config["static_payload"].
    """
    config = config or {}
    backend = str(config.get("ocr_backend", "tesseract")).lower()

    if backend == "tesseract":
        return TesseractOcrProvider()
    if backend == "static":
        return StaticOcrProvider(payload=config.get("static_payload"))

    raise ConfigurationError(f"Unknown OCR backend: {backend}")
