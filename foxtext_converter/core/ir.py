"""In-memory model of subtitle packs and language packs.

WHY: The binary codecs and the JSON document mappers need one shared,
well-typed model to hand data across. Neither side should know about the
other's representation: the codec never sees JSON, the document layer
never sees byte offsets.

HOW: Plain dataclasses form a hierarchy:
  ContainerHeader — format variant plus packed sort/version/language/voice
  SubtitleLine    — one timed line of subtitle text
  SubtitleEntry   — hash, optional identifier, ordered lines
  SubtitlePack    — header + ordered SubtitleEntry list + active encoding
  LangEntry       — hash, optional identifier, colour, text
  LangPack        — version + sort order + ordered LangEntry list

RULES:
- ``hash`` is the on-disk identity (unsigned 32-bit StrCode32)
- ``identifier`` is None when the dictionary could not resolve the hash
- Entry order is significant and preserved on read
- Entries belong to exactly one pack; the write path may refresh hashes
  from identifiers in place
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional


class SortOrder(enum.IntEnum):
    """2-bit sort-order class packed into container headers."""

    NONE = 0
    ASCENDING = 1
    RESERVED_2 = 2
    RESERVED_3 = 3


SORT_ORDER_NAMES = {
    SortOrder.NONE: "none",
    SortOrder.ASCENDING: "ascending",
    SortOrder.RESERVED_2: "reserved2",
    SortOrder.RESERVED_3: "reserved3",
}


def sort_order_from_name(name: str) -> SortOrder:
    """Inverse of SORT_ORDER_NAMES; raises ValueError for unknown names."""
    for order, order_name in SORT_ORDER_NAMES.items():
        if order_name == name:
            return order
    raise ValueError("Unknown sort order '{}'".format(name))


@dataclass
class ContainerHeader:
    """Header metadata of a subtitle pack.

    RULES:
    - variant: "legacy" (magic 0x0113, no flags) or "tagged"
    - sort_order / version / language_id / voice only exist on disk for
      the tagged variant; legacy headers keep the defaults
    - version is a 4-bit value (0-15)
    - the header language decides the encoding only when sort_order is
      ASCENDING (see encoding_authoritative)
    """

    variant: str = "legacy"
    sort_order: SortOrder = SortOrder.NONE
    version: int = 0
    language_id: Optional[int] = None
    voice: int = 0

    @property
    def ascending(self) -> bool:
        return self.sort_order == SortOrder.ASCENDING

    @property
    def encoding_authoritative(self) -> bool:
        return (
            self.variant == "tagged"
            and self.ascending
            and self.language_id is not None
        )


@dataclass
class SubtitleLine:
    """One subtitle line with its display window in frames."""

    start: int
    end: int
    text: str


@dataclass
class SubtitleEntry:
    """A subtitle addressed by StrCode32 of its subtitle id."""

    hash: int
    identifier: Optional[str] = None
    lines: List[SubtitleLine] = field(default_factory=list)


@dataclass
class SubtitlePack:
    """The complete contents of one .subp file.

    RULES:
    - encoding: codec the payload text was decoded with (read path) or
      the document declared (pack path); None when never resolved
    """

    header: ContainerHeader = field(default_factory=ContainerHeader)
    entries: List[SubtitleEntry] = field(default_factory=list)
    encoding: Optional[str] = None


@dataclass
class LangEntry:
    """A language-pack string addressed by StrCode32 of its lang id."""

    hash: int
    identifier: Optional[str] = None
    color: int = 0
    text: str = ""


@dataclass
class LangPack:
    """The complete contents of one .lng/.lng2 file.

    RULES:
    - version: 2 for .lng, 3 for .lng2
    """

    version: int = 3
    sort_order: SortOrder = SortOrder.NONE
    entries: List[LangEntry] = field(default_factory=list)

    @property
    def ascending(self) -> bool:
        return self.sort_order == SortOrder.ASCENDING
