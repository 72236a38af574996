"""Container converter registry.

WHY: The CLI needs a single lookup to find the right converter for a
binary file extension or for a document's ``format`` field.

HOW: CONVERTERS maps the document ``format`` value to a converter
*class*. converter_for_path() and converter_for_document() pick one.

RULES:
- Keys equal the ``format`` field written into documents
- Values are BaseConverter subclasses (not instances)
- Every converter listed here must be importable without side effects
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from foxtext_converter.converters.lang import LangConverter
from foxtext_converter.converters.subp import SubpConverter

if TYPE_CHECKING:
    from foxtext_converter.converters.base import BaseConverter

CONVERTERS: dict[str, type[BaseConverter]] = {
    "subp": SubpConverter,
    "lang": LangConverter,
}


def converter_for_path(path: str | Path) -> Optional[BaseConverter]:
    """Return a converter whose binary extensions include ``path``'s suffix."""
    suffix = Path(path).suffix.lower()
    for converter_class in CONVERTERS.values():
        converter = converter_class()
        if suffix in converter.extensions:
            return converter
    return None


def converter_for_document(document: Any) -> Optional[BaseConverter]:
    """Return the converter named by a parsed document's ``format`` field."""
    if not isinstance(document, dict):
        return None
    converter_class = CONVERTERS.get(document.get("format"))
    return converter_class() if converter_class is not None else None
