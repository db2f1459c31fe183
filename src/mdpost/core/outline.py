"""Heading outline of a record's text segments via markdown-it tokens"""

from markdown_it import MarkdownIt

from mdpost.core.models import ContentRecord, TextSegment


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def _heading_level(token) -> int | None:
    if token.type == 'heading_open' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def outline(record: ContentRecord, preset: str = 'commonmark') -> list[tuple[int, str]]:
    """Return (level, text) for each heading in the body's text segments, in order.

    Code segments are skipped, so '#' lines inside highlight blocks never count.
    """
    parser = _make_parser(preset)
    headings = []
    for seg in record.body:
        if not isinstance(seg, TextSegment):
            continue
        tokens = parser.parse(seg.content)
        for i, tok in enumerate(tokens):
            level = _heading_level(tok)
            if level is not None:
                headings.append((level, tokens[i + 1].content.strip()))
    return headings
