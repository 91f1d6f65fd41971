"""
Plain-text normalization of Joomla ``introtext`` markup.

The cleaning rules run in a fixed order, each one on the output of the
previous one:

1. remove single-level tags (``<`` + anything but angle brackets + ``>``)
2. delete non-breaking spaces
3. turn ``CRLF`` into ``LF``
4. break the line after every sentence terminator (a period not preceded
   by a digit, followed by whitespace or the end of the text)
5. drop leading newlines

Image references are collected from the original markup, before any tag
is stripped, so that ``src`` attributes are still intact.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List

from bs4 import BeautifulSoup

from ..models import Article
from ..utils.errors import SchemaViolation

__all__ = ["NormalizerPatterns", "TextNormalizer", "extract_images"]


@dataclass(frozen=True)
class NormalizerPatterns:
    """Compiled patterns used by :class:`TextNormalizer`."""

    tag: re.Pattern
    sentence_end: re.Pattern
    leading_newlines: re.Pattern

    @classmethod
    def compile(cls) -> "NormalizerPatterns":
        return cls(
            tag=re.compile(r"<[^<>]+>"),
            sentence_end=re.compile(r"(?<!\d)\.(?:\s+|\Z)"),
            leading_newlines=re.compile(r"\A\n+"),
        )


def extract_images(html: str) -> List[str]:
    """Return the ``src`` of every ``img`` tag, in document order, repeats kept."""
    soup = BeautifulSoup(html or "", "html.parser")
    images: List[str] = []
    for img in soup.find_all("img"):
        src_attr = img.get("src")
        src = src_attr[0] if isinstance(src_attr, list) else src_attr
        if src:
            images.append(src)
    return images


class TextNormalizer:
    """Turns one source record into an :class:`Article`."""

    def __init__(self, patterns: NormalizerPatterns) -> None:
        self.patterns = patterns

    def clean(self, introtext: str) -> str:
        text = self.patterns.tag.sub("", introtext)
        text = text.replace("\xa0", "")
        text = text.replace("\r\n", "\n")
        text = self.patterns.sentence_end.sub(".\n", text)
        return self.patterns.leading_newlines.sub("", text)

    def normalize(self, introtext: Any, title: Any, date: Any) -> Article:
        """Build an article; raises :class:`SchemaViolation` on a missing field."""
        for name, value in (("introtext", introtext), ("title", title), ("created", date)):
            if not isinstance(value, str):
                raise SchemaViolation(f"Field '{name}' not found on selected record")
        return Article(
            title=title,
            date=date,
            body=self.clean(introtext),
            images=tuple(extract_images(introtext)),
        )

    def normalize_record(self, record: dict) -> Article:
        return self.normalize(record.get("introtext"), record.get("title"), record.get("created"))

