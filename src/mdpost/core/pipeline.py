"""Batch step functions: check and export orchestration over a path"""

import logging
from pathlib import Path
from typing import Optional

from mdpost.config import Settings
from mdpost.core.errors import ContentError
from mdpost.core.export import output_stem, write_record
from mdpost.core.models import ContentFile
from mdpost.core.parse import discover_files, parse_file


logger = logging.getLogger(__name__)


def load(path: Path, settings: Settings) -> ContentFile:
    """Parse and validate one file with the configured required fields."""
    return parse_file(path, required=settings.required_fields)


def run_check(path: str, settings: Settings) -> list[tuple[Path, Optional[ContentError]]]:
    """Parse + validate every file under path. Returns (file, error or None) pairs.

    Files are independent: one bad file does not stop the others.
    """
    results = []
    for p in discover_files(Path(path), settings.extensions):
        try:
            load(p, settings)
        except ContentError as e:
            logger.debug("check failed for %s: %s", p, e)
            results.append((p, e))
        else:
            results.append((p, None))
    return results


def run_export(path: str, settings: Settings, output_dir: Path) -> list[tuple[Path, Path]]:
    """Export every file under path to output_dir. Returns (source, md_path) pairs.

    Subdirectories of path are mirrored under output_dir. Stops at the first
    invalid file, or at a file whose output would overwrite an earlier one.
    """
    root = Path(path)
    source_root = root if root.is_dir() else None
    results = []
    claimed: dict[Path, Path] = {}
    for p in discover_files(root, settings.extensions):
        try:
            content = load(p, settings)
        except ContentError as e:
            raise RuntimeError(f"Failed to export {p}: {e.kind}: {e.message}") from e
        stem = output_stem(content, output_dir, source_root)
        if stem in claimed:
            raise RuntimeError(f"Failed to export {p}: output {stem}.md is already written for {claimed[stem]}")
        claimed[stem] = p
        md_path, _ = write_record(content, output_dir, source_root)
        results.append((p, md_path))
    logger.debug("exported %d file(s) to %s", len(results), output_dir)
    return results
