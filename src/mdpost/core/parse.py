"""Content file discovery, metadata block parsing, and record construction"""

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from mdpost.core.errors import ContentError, MalformedMetadataBlock
from mdpost.core.extract.segments import extract_segments
from mdpost.core.models import ContentFile, ContentRecord
from mdpost.core.utils.slug import split_post_stem
from mdpost.core.validate import REQUIRED_FIELDS, validate as validate_record


logger = logging.getLogger(__name__)

METADATA_MARKER = '---'
MD_EXTENSIONS = ('.md', '.markdown', '.mdx')


def content_hash(raw: str) -> str:
    """Return hex SHA-256 of the raw file text, for change detection."""
    return hashlib.sha256(raw.encode('utf-8')).hexdigest()


def _is_marker(line: str) -> bool:
    return line.rstrip() == METADATA_MARKER


@dataclass(frozen=True)
class MetadataBlock:
    """split_metadata result: metadata, the file line of each key, and the body."""
    metadata:    dict[str, str]
    lines:       dict[str, int]     # key -> 1-based file line of its (last) definition
    body:        str
    line_offset: int                # file lines preceding the body


def split_metadata(raw: str) -> MetadataBlock:
    """Split a raw content file into its metadata block and body.

    Metadata lines are 'key: value'; the value is kept verbatim after the
    colon and one separating space. Blank lines and '#' comments are skipped.
    Duplicate keys: the last one wins.
    """
    lines = raw.removeprefix('\ufeff').split('\n')
    if not _is_marker(lines[0]):
        raise MalformedMetadataBlock(f"expected opening '{METADATA_MARKER}' marker on the first line", 1)

    metadata: dict[str, str] = {}
    key_lines: dict[str, int] = {}
    for lineno, line in enumerate(lines[1:], start=2):
        line = line.rstrip('\r')
        if _is_marker(line):
            body = '\n'.join(lines[lineno:])
            return MetadataBlock(metadata=metadata, lines=key_lines, body=body, line_offset=lineno)
        if not line.strip() or line.lstrip().startswith('#'):
            continue

        key, sep, value = line.partition(':')
        key = key.strip()
        if not sep or not key:
            raise MalformedMetadataBlock(f"expected 'key: value', got {line!r}", lineno)
        if key in metadata:
            logger.debug("duplicate metadata key %r on line %d overrides %r", key, lineno, metadata[key])
        metadata[key] = value[1:] if value.startswith(' ') else value
        key_lines[key] = lineno

    raise MalformedMetadataBlock(f"metadata block is not closed by a '{METADATA_MARKER}' marker", len(lines))


def parse(raw: str, validate: bool = True, required: Iterable[str] = REQUIRED_FIELDS) -> ContentRecord:
    """Parse raw file text into a ContentRecord, validated unless validate=False."""
    block = split_metadata(raw)
    record = ContentRecord(metadata=block.metadata, body=extract_segments(block.body, block.line_offset))
    if validate:
        validate_record(record, required, lines=block.lines)
    return record


def discover_files(path: Path, extensions: Iterable[str] = MD_EXTENSIONS) -> list[Path]:
    """Return sorted content files under path, or [path] if a single file."""
    extensions = set(extensions)
    if path.is_file():
        return [path] if path.suffix in extensions else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in extensions)


def parse_file(path: Path, validate: bool = True, required: Iterable[str] = REQUIRED_FIELDS) -> ContentFile:
    """Read and parse a single content file; errors are tagged with the path."""
    raw = path.read_text(encoding='utf-8')
    try:
        record = parse(raw, validate=validate, required=required)
    except ContentError as e:
        e.path = path
        raise
    post_date, slug = split_post_stem(path.stem)
    logger.debug("parsed %s: %d metadata key(s), %d segment(s)", path, len(record.metadata), len(record.body))
    return ContentFile(path=path, slug=slug, date=post_date, hash=content_hash(raw), record=record)
