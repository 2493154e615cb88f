# ============================================================================
# src/prescription_ocr/core/config.py
# ============================================================================
"""
Runtime Configuration

Loads pipeline knobs from environment variables (.env file) with sensible defaults.
Scoring weights live in config/thresholds_config.py; this module covers how the
analyzer is wired (which OCR backend, how many images at once, whether to
resolve bounding boxes).

Usage:
    from prescription_ocr.core.config import get_config, Config

    # Get full config dict
    config = get_config()

    # Or use Config class for attribute access
    cfg = Config()
    print(cfg.ocr_backend)
"""

import os
from pathlib import Path
from typing import Dict, Any
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv


def _load_dotenv() -> bool:
    """Load .env file if it exists."""
    # Look for .env in project root
    env_path = Path(__file__).parent.parent.parent.parent / '.env'
    if env_path.exists():
        load_dotenv(env_path)
        return True

    # Also check current working directory
    cwd_env = Path.cwd() / '.env'
    if cwd_env.exists():
        load_dotenv(cwd_env)
        return True

    return False


# Field defaults read os.environ, so .env must be loaded before any Config()
_load_dotenv()


def _get_bool(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ('true', '1', 'yes', 'on')


def _get_int(key: str, default: int = 0) -> int:
    """Get integer from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass
class Config:
    """
    Configuration container with attribute access.

    All values are loaded from environment variables with defaults.
    """

    # OCR backend used by process_image ("tesseract" or "static")
    ocr_backend: str = field(default_factory=lambda: os.getenv('OCR_BACKEND', 'tesseract'))

    # Concurrency - max images recognised at once in process_batch
    max_concurrent_images: int = field(default_factory=lambda: _get_int('MAX_CONCURRENT_IMAGES', 4))

    # Skip box lookup when the caller has no use for highlighting
    enable_bounding_boxes: bool = field(default_factory=lambda: _get_bool('ENABLE_BOUNDING_BOXES', True))

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for passing to components."""
        return {
            'ocr_backend': self.ocr_backend,
            'max_concurrent_images': self.max_concurrent_images,
            'enable_bounding_boxes': self.enable_bounding_boxes,
        }


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    """
    Get configuration dictionary.

    Cached for performance - call once and pass to components.
    """
    _load_dotenv()
    return Config().to_dict()


def reload_config() -> Dict[str, Any]:
    """Reload configuration from environment (clears cache)."""
    get_config.cache_clear()
    return get_config()
