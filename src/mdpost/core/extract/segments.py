"""Body segmentation: split a post body on highlight directive pairs"""

import logging
import re
from typing import Iterator

from mdpost.core.errors import MalformedDirective, NestedCodeBlock, UnterminatedCodeBlock
from mdpost.core.models import BodySegment, CodeBlockSegment, TextSegment, option_name


logger = logging.getLogger(__name__)

_OPTION = r'[^\s%}="-][^\s%}="]*(?:=(?:"[^"]*"|[^\s%}"]+))?'

# {% highlight LANG OPTS %} / {highlight LANG OPTS} and the matching end directive.
# The backreference keeps '{%' paired with '%}' and '{' with '}'.
DIRECTIVE_RE = re.compile(
    r'\{(?P<pct>%?)-?[ \t]*'
    r'(?:(?P<end>endhighlight)'
    r'|highlight(?:[ \t]+(?P<lang>[^\s%}="-][^\s%}="]*))?(?P<opts>(?:[ \t]+' + _OPTION + r')*))'
    r'[ \t]*-?(?P=pct)\}'
)
OPTION_RE = re.compile(_OPTION)


def _line_of(body: str, offset: int, line_offset: int) -> int:
    return line_offset + body.count('\n', 0, offset) + 1


def _skip_newline(body: str, pos: int) -> int:
    """Return pos advanced past one line break, if one starts there."""
    if body.startswith('\r\n', pos):
        return pos + 2
    if body.startswith('\n', pos):
        return pos + 1
    return pos


def _line_numbers(options: tuple[str, ...]) -> bool:
    return any(option_name(o) == 'linenos' for o in options)


def iter_segments(body: str, line_offset: int = 0) -> Iterator[BodySegment]:
    """Yield text and code segments in document order.

    line_offset is the number of file lines preceding the body, so errors
    report lines of the original file. A body with N directive pairs yields
    N code segments and N+1 (possibly empty) text segments.
    """
    pos = 0
    opened = None           # begin-directive match of the block being read
    content_start = 0

    for m in DIRECTIVE_RE.finditer(body):
        line = _line_of(body, m.start(), line_offset)
        if m.group('end'):
            if opened is None:
                raise MalformedDirective("endhighlight without a matching highlight", line)
            options = tuple(OPTION_RE.findall(opened.group('opts')))
            yield CodeBlockSegment(
                language=opened.group('lang'),
                line_numbers_enabled=_line_numbers(options),
                options=options,
                content=body[content_start:m.start()],
            )
            opened = None
            pos = m.end()
            continue

        if opened is not None:
            opened_line = _line_of(body, opened.start(), line_offset)
            raise NestedCodeBlock(f"highlight block opened inside the block started on line {opened_line}", line)
        if not m.group('lang'):
            raise MalformedDirective("highlight directive without a language", line)
        yield TextSegment(content=body[pos:m.start()])
        opened = m
        content_start = _skip_newline(body, m.end())

    if opened is not None:
        raise UnterminatedCodeBlock(
            f"highlight {opened.group('lang')} block is never closed",
            _line_of(body, opened.start(), line_offset),
        )
    yield TextSegment(content=body[pos:])


def extract_segments(body: str, line_offset: int = 0) -> tuple[BodySegment, ...]:
    """Materialize iter_segments; raises before returning anything on a bad body."""
    segments = tuple(iter_segments(body, line_offset))
    logger.debug("extracted %d segment(s), %d code block(s)",
                 len(segments), sum(isinstance(s, CodeBlockSegment) for s in segments))
    return segments
