"""Metadata validation: required fields and lightweight format checks"""

import re
from pathlib import PurePosixPath
from typing import Callable, Iterable, Mapping, Optional

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from mdpost.core.errors import InvalidFieldFormat, MissingRequiredField
from mdpost.core.models import ContentRecord


REQUIRED_FIELDS = ('layout', 'title')
RECOGNIZED_FIELDS = ('layout', 'title', 'description', 'image', 'canonicalUrl')

_URL_ADAPTER = TypeAdapter(AnyHttpUrl)
_SCHEME_RE = re.compile(r'^[A-Za-z][A-Za-z0-9+.-]*:')
# AnyHttpUrl repairs 'https:host' and 'http:/host', so the authority form is checked first.
_HTTP_AUTHORITY_RE = re.compile(r'^https?://[^/\\]')


def is_absolute_url(value: str) -> bool:
    """True for an absolute http(s) URL with a host."""
    if value != value.strip() or not _HTTP_AUTHORITY_RE.match(value):
        return False
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True


def is_relative_path(value: str) -> bool:
    """True for a non-empty relative POSIX path (no scheme, root, or backslash)."""
    if not value.strip() or value != value.strip() or '\\' in value:
        return False
    if _SCHEME_RE.match(value) or value.startswith('//'):
        return False
    return not PurePosixPath(value).is_absolute()


FORMAT_CHECKS: dict[str, tuple[Callable[[str], bool], str]] = {
    'canonicalUrl': (is_absolute_url, 'an absolute http(s) URL'),
    'image':        (is_relative_path, 'a relative path'),
}


def validate(
    record: ContentRecord,
    required: Optional[Iterable[str]] = REQUIRED_FIELDS,
    lines: Optional[Mapping[str, int]] = None,
    ) -> None:
    """Raise the first MissingRequiredField / InvalidFieldFormat found; never mutates record.

    layout and title are always required, whatever is passed in required.
    lines maps metadata keys to their file line, so errors can be located.
    """
    lines = lines or {}
    fields = list(dict.fromkeys([*REQUIRED_FIELDS, *(required or ())]))
    for field in fields:
        if not record.metadata.get(field, '').strip():
            raise MissingRequiredField(field, lines.get(field))

    for field, (check, expected) in FORMAT_CHECKS.items():
        value = record.metadata.get(field)
        if value is not None and not check(value):
            raise InvalidFieldFormat(field, value, expected, lines.get(field))
