from __future__ import annotations
import json, logging, os, time
from pathlib import Path
from typing import Any, Dict, Optional

from sarthi.settings import settings

logger = logging.getLogger("sarthi.events")

# JSON lines only; kept off the root handlers so the file holds nothing else
_file_logger = logging.getLogger("sarthi.events.file")
_file_logger.propagate = False
_file_logger.setLevel(logging.INFO)
_file_handler: Optional[logging.FileHandler] = None


def _file_sink(path: str) -> logging.Logger:
    global _file_handler
    target = os.path.abspath(path)
    if _file_handler is None or _file_handler.baseFilename != target:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8", delay=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
        if _file_handler is not None:
            _file_logger.removeHandler(_file_handler)
            _file_handler.close()
        _file_logger.addHandler(handler)
        _file_handler = handler
    return _file_logger


def log_event(name: str, attributes: Optional[Dict[str, Any]] = None) -> None:
    """Fire-and-forget analytics sink. Never raises into the caller."""
    record: Dict[str, Any] = {"name": name, **(attributes or {}), "ts": time.time()}
    try:
        line = json.dumps(record, ensure_ascii=False, default=str)
        logger.info("EVENT %s", line)
        if settings.event_log_path:
            _file_sink(settings.event_log_path).info(line)
    except Exception:
        logger.debug("Event sink failed name=%s", name, exc_info=True)
