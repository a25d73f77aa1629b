"""JSON persistence for crawl results."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .config import RunConfiguration
from .models import RunResult

logger = logging.getLogger("club_scraper")

FULL_OUTPUT = "clubs.json"
REDUCED_OUTPUT = "clubs_dry_run.json"


def output_filename(config: RunConfiguration) -> str:
    return REDUCED_OUTPUT if config.reduced_mode else FULL_OUTPUT


def save_json(result: RunResult, path: Path) -> Path:
    """Write the result records to ``path`` as a pretty-printed array."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(result.to_records(), indent=2, ensure_ascii=False)
    path.write_text(payload + "\n", encoding="utf-8")
    logger.info("Results saved to %s", path)
    return path
