"""Content record models: metadata plus an ordered body of typed segments"""

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from types import MappingProxyType
from typing import Annotated, Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


BEGIN_DIRECTIVE = "{{% highlight {args} %}}"
END_DIRECTIVE = "{% endhighlight %}"


class TextSegment(BaseModel):
    """Raw markup passed verbatim to the Markdown renderer."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    content: str

    def to_source(self) -> str:
        return self.content


class CodeBlockSegment(BaseModel):
    """Code extracted from a highlight directive pair."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["code"] = "code"
    language: str
    line_numbers_enabled: bool = False
    options: tuple[str, ...] = ()   # every option token of the begin directive, in order
    content: str                    # text strictly between the directives, no markers

    def to_source(self) -> str:
        """Return the block as a canonical Liquid highlight directive pair."""
        options = list(self.options)
        if self.line_numbers_enabled and not any(option_name(o) == "linenos" for o in options):
            options.append("linenos")
        args = " ".join([self.language, *options])
        return BEGIN_DIRECTIVE.format(args=args) + "\n" + self.content + END_DIRECTIVE


BodySegment = Annotated[Union[TextSegment, CodeBlockSegment], Field(discriminator="kind")]


class ContentRecord(BaseModel):
    """One authored document: metadata block + body segments in document order.

    Metadata is stored as ordered (key, value) pairs and read through a
    read-only mapping, so a validated record cannot lose layout or title.
    """
    model_config = ConfigDict(frozen=True)

    metadata_items: tuple[tuple[str, str], ...] = ()
    body: tuple[BodySegment, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _metadata_to_items(cls, data: Any) -> Any:
        """Accept metadata={...} at construction."""
        if isinstance(data, dict) and "metadata" in data:
            data = dict(data)
            data["metadata_items"] = tuple(dict(data.pop("metadata")).items())
        return data

    @property
    def metadata(self) -> Mapping[str, str]:
        return MappingProxyType(dict(self.metadata_items))

    @property
    def layout(self) -> Optional[str]:
        return self.metadata.get("layout")

    @property
    def title(self) -> Optional[str]:
        return self.metadata.get("title")

    @property
    def code_blocks(self) -> list[CodeBlockSegment]:
        return [s for s in self.body if isinstance(s, CodeBlockSegment)]

    def body_source(self) -> str:
        """Concatenate every segment's source form; reproduces the parsed body."""
        return "".join(s.to_source() for s in self.body)


@dataclass(frozen=True)
class ContentFile:
    """A record loaded from disk, with its file-derived identity; not part of the record."""
    path:   Path
    slug:   str
    date:   Optional[date]     # from a Jekyll-style YYYY-MM-DD- filename prefix
    hash:   str                # sha256 of the raw file text
    record: ContentRecord


def option_name(option: str) -> str:
    return option.split("=", 1)[0]
