"""Structured logging and per-search JSONL logging."""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a configured logger (creates handler only once per name)."""
    from src.utils.config import settings

    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    effective_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logger.setLevel(effective_level)

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)

    # Optional file handler
    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setFormatter(logging.Formatter(fmt))
        logger.addHandler(fh)

    return logger


def log_search(
    query: str,
    cache_hit: bool,
    text_length: int,
    link_count: int,
    image_count: int,
    response_time_ms: float,
    path: Optional[str] = None,
) -> None:
    """Append a single search record to the JSONL search log."""
    from src.utils.config import settings

    target = path if path is not None else settings.search_log_file
    if not target:
        return

    record = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "query": query,
        "cache_hit": cache_hit,
        "text_length": text_length,
        "links": link_count,
        "images": image_count,
        "response_time_ms": round(response_time_ms, 1),
    }

    out = Path(target)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "a", encoding="utf-8") as f:
        f.write(json.dumps(record) + "\n")
