"""Content error taxonomy: every parse/validate failure is a ContentError"""

from pathlib import Path
from typing import Optional


class ContentError(ValueError):
    """Base error for a content file that cannot become a valid record."""

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.path: Optional[Path] = None

    @property
    def kind(self) -> str:
        return type(self).__name__

    def locate(self) -> str:
        """Return 'path:line' (either part may be missing) for error reports."""
        parts = [str(p) for p in (self.path, self.line) if p is not None]
        return ':'.join(parts)

    def __str__(self) -> str:
        where = self.locate()
        return f"{where}: {self.message}" if where else self.message


class MalformedMetadataBlock(ContentError):
    """Opening/closing marker missing, or a metadata line is not 'key: value'."""


class MissingRequiredField(ContentError):
    def __init__(self, field: str, line: Optional[int] = None):
        super().__init__(f"missing required field '{field}'", line)
        self.field = field


class InvalidFieldFormat(ContentError):
    def __init__(self, field: str, value: str, expected: str, line: Optional[int] = None):
        super().__init__(f"field '{field}' must be {expected}, got {value!r}", line)
        self.field = field
        self.value = value


class UnterminatedCodeBlock(ContentError):
    """A highlight block was opened but never closed."""


class NestedCodeBlock(ContentError):
    """A highlight block was opened inside another one."""


class MalformedDirective(ContentError):
    """A highlight directive without a language, or a stray end directive."""
