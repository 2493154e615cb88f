# ============================================================================
# src/prescription_ocr/utils/logging.py
# ============================================================================
"""
Logging for the prescription OCR engine.

- setup_logging(): root handlers from LoggingSettings (or explicit overrides)
- JsonFormatter: one JSON object per record, pipeline details included
- stage_logger(): event hook that turns analyzer stage events into log records
"""

from typing import Any, Callable, Dict, Optional
from pathlib import Path
from datetime import datetime, timezone
import json
import logging
import sys

from ..config.logging_config import LoggingSettings, logging_settings

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    format_json: Optional[bool] = None,
    settings: Optional[LoggingSettings] = None,
) -> None:
    """
    Configure root logging.

    Explicit arguments win; anything left as None comes from settings
    (LOG_LEVEL, LOG_FILE, LOG_FORMAT_JSON).

    Console output goes to stderr, so a CLI can keep stdout for results.
    """
    settings = settings or logging_settings
    level = level or settings.LOG_LEVEL
    log_file = log_file or settings.LOG_FILE
    if format_json is None:
        format_json = settings.LOG_FORMAT_JSON

    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    formatter = JsonFormatter() if format_json else logging.Formatter(
        TEXT_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'
    )

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)


class JsonFormatter(logging.Formatter):
    """JSON log formatter; stage details ride along under "details"."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        stage = getattr(record, 'stage', None)
        if stage is not None:
            log_data['stage'] = stage

        details = getattr(record, 'details', None)
        if details is not None:
            log_data['details'] = details

        return json.dumps(log_data, default=str)


def stage_logger(
    logger: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
) -> Callable[[Any, Dict[str, Any]], None]:
    """
    Event hook for PrescriptionAnalyzer that logs every stage.

    Usage:
        analyzer = PrescriptionAnalyzer(event_hook=stage_logger())
    """
    logger = logger or logging.getLogger("prescription_ocr.stages")

    def hook(stage, details: Dict[str, Any]) -> None:
        name = getattr(stage, 'value', str(stage))
        summary = ", ".join(f"{k}={v}" for k, v in details.items())
        logger.log(
            level,
            f"Stage {name}: {summary}",
            extra={'stage': name, 'details': dict(details)},
        )

    return hook
