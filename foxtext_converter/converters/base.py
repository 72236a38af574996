"""Abstract base converter and output container.

WHY: The CLI handles subtitle packs and language packs the same way:
read a file, unpack to a document (or pack a document back), save the
results. A common interface lets it drive any container kind generically.

HOW: BaseConverter is an ABC with a ``name``, the binary ``extensions``
it claims, and unpack()/pack() methods. ConverterOptions bundles the
per-run switches. ConverterOutput is a plain dataclass pairing a file
suffix with its content (string or bytes) and MIME type.

RULES:
- Subclasses MUST implement ``name``, ``extensions``, ``dictionary_path``,
  ``unpack()`` and ``pack()``
- Both methods return a list; unpack may add a hash export file
- ``suffix`` is appended to the caller-chosen stem; the caller does all file I/O
- Codec and document errors propagate to the caller unchanged
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from foxtext_converter.core.dictionary import HashDictionary


@dataclass
class ConverterOptions:
    """Per-run switches shared by every file in a batch.

    Attributes:
        encoding: Caller-requested text encoding (canonical codec name) or None.
        output_hashes: Also emit a sorted list of unique entry hashes.
    """

    encoding: Optional[str] = None
    output_hashes: bool = False


@dataclass
class ConverterOutput:
    """One output file produced by a converter.

    Attributes:
        suffix: Appended to the output stem, e.g. ``".json"`` →
                ``"gz_cassette.subp.json"``.
        content: Text (JSON, hash lists) or bytes (binary containers).
        media_type: MIME type of the content.
    """

    suffix: str
    content: str | bytes
    media_type: str


class BaseConverter(ABC):
    """Abstract base for container converters.

    To add a new container kind:
    1. Create a new module in converters/
    2. Subclass BaseConverter
    3. Implement the abstract members
    4. Register it in CONVERTERS in converters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable container name, e.g. 'Subtitle pack'."""

    @property
    @abstractmethod
    def extensions(self) -> Tuple[str, ...]:
        """Binary file extensions handled, lowercase with dot."""

    @property
    @abstractmethod
    def dictionary_path(self) -> str:
        """Default word-list path used to resolve identifiers."""

    @abstractmethod
    def unpack(
        self,
        data: bytes,
        dictionary: Optional[HashDictionary],
        options: ConverterOptions,
    ) -> List[ConverterOutput]:
        """Convert a binary container into its JSON document (plus extras)."""

    @abstractmethod
    def pack(self, document: Any, options: ConverterOptions) -> List[ConverterOutput]:
        """Convert a parsed JSON document back into a binary container.

        The single output's suffix is the container extension to use when
        the document's file name does not already end with one.
        """
