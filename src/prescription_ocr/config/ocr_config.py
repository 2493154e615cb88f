# ============================================================================
# src/prescription_ocr/config/ocr_config.py
# ============================================================================
"""
OCR Provider Settings
- Accepted image URIs
- Tesseract language and page segmentation
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings

class OcrSettings(BaseSettings):
    ALLOWED_IMAGE_EXTENSIONS: List[str] = Field(
        default=[".jpg", ".jpeg", ".png", ".bmp", ".gif", ".webp"],
        description="Image file extensions accepted without a scheme"
    )
    ALLOWED_URI_SCHEMES: List[str] = Field(
        default=["content://", "file://", "ph://"],
        description="Camera/gallery URI schemes accepted without an extension"
    )
    TESSERACT_LANGUAGE: str = Field(
        default="eng",
        description="Tesseract language pack"
    )
    TESSERACT_CONFIG: str = Field(
        default="--psm 6",
        description="Extra Tesseract CLI flags (psm 6 = uniform block of text)"
    )

ocr_settings = OcrSettings()
