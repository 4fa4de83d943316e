"""
Index generation: render both documents and write them to the scan root.

The short index is written before the full index is rendered. If the full
render fails, llms.txt is already updated and llms-full.txt stays as it was.
"""

import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from ..config.schema import AppConfig
from ..logging.setup import get_logger
from .render import generate_full_index, generate_short_index

logger = get_logger(__name__)


@dataclass
class GenerationResult:
    """Paths and contents produced by one run."""

    short_path: Path
    full_path: Path
    short_text: str
    full_text: str
    written: bool


def generate_indexes(
    root: str | Path,
    config: AppConfig | None = None,
    today: date | None = None,
    dry_run: bool = False,
) -> GenerationResult:
    """Render and write llms.txt and llms-full.txt.

    Args:
        root: Scan root; outputs are written here
        config: Application config (defaults when None)
        today: Generation date (current UTC date when None)
        dry_run: Render only, do not touch the filesystem

    Returns:
        GenerationResult with both documents.

    Raises:
        OSError: On any read or write failure
    """
    config = config or AppConfig()
    root = Path(os.fspath(root))
    short_path = root / config.output.short_file
    full_path = root / config.output.full_file

    short_text = generate_short_index(root, config, today=today)
    if not dry_run:
        _write(short_path, short_text)

    full_text = generate_full_index(root, config, today=today)
    if not dry_run:
        _write(full_path, full_text)

    return GenerationResult(
        short_path=short_path,
        full_path=full_path,
        short_text=short_text,
        full_text=full_text,
        written=not dry_run,
    )


def _write(path: Path, content: str) -> None:
    path.write_text(content, encoding="utf-8")
    logger.info("indexer.write", path=str(path), bytes=len(content.encode("utf-8")))
