"""Subtitle pack (.subp) container codec.

WHY: This is the binary side of subtitle conversion: turn a .subp file
into a SubtitlePack the document layer can render, and turn an edited
SubtitlePack back into bytes the engine's loader accepts unchanged.

HOW: read_subtitle_pack() parses the header, resolves the text encoding,
and lets codec.container walk the index table with the subtitle payload
decoder. write_subtitle_pack() refreshes hashes, writes the header, and
runs the two-pass writer into an in-memory buffer.

RULES:
- Encoding precedence follows codec.encoding.resolve_encoding()
- write_subtitle_pack(read_subtitle_pack(data)) == data for packs whose
  sort order is not ASCENDING and whose line offsets are sequential
- Ascending packs are re-sorted by hash on write
- The returned bytes are complete; nothing is written on failure
"""

from __future__ import annotations

import io
import logging
from typing import Optional

from foxtext_converter.codec.container import read_entries, refresh_hashes, write_entries
from foxtext_converter.codec.encoding import canonical_encoding, resolve_encoding
from foxtext_converter.codec.entry import read_subtitle_entry, write_subtitle_entry
from foxtext_converter.codec.header import read_subp_header, write_subp_header
from foxtext_converter.core.dictionary import HashDictionary
from foxtext_converter.core.ir import SubtitlePack

logger = logging.getLogger(__name__)


def read_subtitle_pack(
    data: bytes,
    dictionary: Optional[HashDictionary] = None,
    encoding: Optional[str] = None,
) -> SubtitlePack:
    """Decode a complete subtitle pack.

    Args:
        data: Raw .subp file contents.
        dictionary: Reverse lookup for subtitle ids; None leaves hashes bare.
        encoding: Caller-requested text encoding (overridden by an
                  authoritative header).

    Returns:
        The decoded SubtitlePack with ``encoding`` set to the codec used.

    Raises:
        ContainerFormatError: Corrupt header, index, or payload.
        EntryEncodingError: Payload bytes invalid in the resolved encoding.
    """
    header, count, header_size = read_subp_header(data)
    active = resolve_encoding(header=header, requested=encoding)
    if encoding and header.encoding_authoritative and active != canonical_encoding(encoding):
        logger.info("Header language overrides requested encoding %s with %s", encoding, active)

    entries = read_entries(
        data,
        header_size,
        count,
        lambda buf, record: read_subtitle_entry(buf, record.offset, record.hash, active),
        dictionary,
    )
    return SubtitlePack(header=header, entries=entries, encoding=active)


def write_subtitle_pack(pack: SubtitlePack, encoding: Optional[str] = None) -> bytes:
    """Encode a subtitle pack to bytes.

    Args:
        pack: The pack to write. Entry hashes are refreshed in place from
              their identifiers; ascending packs come back sorted.
        encoding: Caller-requested text encoding.

    Returns:
        The complete .subp file contents.
    """
    active = resolve_encoding(header=pack.header, requested=encoding, declared=pack.encoding)
    refresh_hashes(pack.entries)

    buffer = io.BytesIO()
    buffer.write(write_subp_header(pack.header, len(pack.entries)))
    pack.entries = write_entries(
        buffer,
        pack.entries,
        lambda buf, entry: write_subtitle_entry(buf, entry, active),
        ascending=pack.header.ascending,
    )
    logger.debug("Wrote %d subtitle entries (%d bytes)", len(pack.entries), buffer.tell())
    return buffer.getvalue()
