"""Export: rebuild source text and sidecar JSON from parsed records"""

import json
from pathlib import Path
from typing import Optional

from mdpost.core.models import CodeBlockSegment, ContentFile, ContentRecord
from mdpost.core.parse import METADATA_MARKER


def build_metadata_block(metadata: dict[str, str]) -> str:
    """Return the delimited 'key: value' header, in insertion order."""
    lines = [METADATA_MARKER, *(f"{k}: {v}" for k, v in metadata.items()), METADATA_MARKER]
    return "\n".join(lines) + "\n"


def build_source(record: ContentRecord) -> str:
    """Serialize a record back to file text; parse(build_source(r)) == r."""
    return build_metadata_block(record.metadata) + record.body_source()


def build_sidecar(content: ContentFile) -> dict:
    """Build the sidecar JSON dict: slug, path, date, hash, metadata, segments.

    Code segments carry language/line-number flags and a line count; text
    segments only their length, since their content is in the exported source.
    """
    segments = []
    for position, seg in enumerate(content.record.body):
        if isinstance(seg, CodeBlockSegment):
            segments.append({
                "position": position,
                "kind": seg.kind,
                "language": seg.language,
                "line_numbers": seg.line_numbers_enabled,
                "options": list(seg.options),
                "lines": len(seg.content.splitlines()),
            })
        else:
            segments.append({"position": position, "kind": seg.kind, "chars": len(seg.content)})
    return {
        "slug": content.slug,
        "path": str(content.path),
        "date": content.date.isoformat() if content.date else None,
        "hash": content.hash,
        "metadata": dict(content.record.metadata),
        "segments": segments,
    }


def output_stem(content: ContentFile, output_dir: Path, source_root: Optional[Path] = None) -> Path:
    """Return the extension-less output path for a file.

    The source directory structure under source_root is mirrored:
      output_dir / <parent relative to source_root> / [date-]slug
    """
    rel_parent = content.path.parent.relative_to(source_root) if source_root else Path()
    name = f"{content.date.isoformat()}-{content.slug}" if content.date else content.slug
    return output_dir / rel_parent / name


def write_record(content: ContentFile, output_dir: Path, source_root: Optional[Path] = None) -> tuple[Path, Path]:
    """Write normalized source + sidecar JSON for a single file.

    Returns (md_path, json_path).
    """
    stem = output_stem(content, output_dir, source_root)
    stem.parent.mkdir(parents=True, exist_ok=True)
    md_path = stem.with_name(f"{stem.name}.md")
    json_path = stem.with_name(f"{stem.name}.json")

    md_path.write_text(build_source(content.record), encoding='utf-8')
    json_path.write_text(json.dumps(build_sidecar(content), indent=2, ensure_ascii=False), encoding='utf-8')
    return md_path, json_path
