"""Entry payload codecs for subtitle and language entries.

WHY: Payloads are variable length, so the container codec needs a
reader that decodes one entry at an arbitrary offset without overrunning
the file, and a writer that appends one entry to the output buffer.

HOW: Subtitle payload:
  u16 line_count, u16 text_size,
  line_count × (u16 text_offset, u32 start, u32 end),
  text block of NUL-terminated line strings (text_offset is relative to
  the block start).
Language payload: u16 color, then NUL-terminated UTF-8 text.

RULES:
- Reads never go past file_end; a truncated payload is a ContainerFormatError
- Text is decoded/encoded strictly; failures raise EntryEncodingError
- Text containing NUL cannot be stored (it is the terminator)
- Line text offsets are laid out sequentially on write
"""

from __future__ import annotations

import struct
from typing import BinaryIO, List

from foxtext_converter.config import LANG_ENCODING
from foxtext_converter.core.errors import ContainerFormatError, EntryEncodingError
from foxtext_converter.core.ir import LangEntry, SubtitleEntry, SubtitleLine

_SUBP_ENTRY_HEAD = struct.Struct("<HH")
_SUBP_TIMING = struct.Struct("<HII")
_LANG_ENTRY_HEAD = struct.Struct("<H")

_MAX_U16 = 0xFFFF


def _require(data: bytes, end: int, entry_hash: int, what: str) -> None:
    if end > len(data):
        raise ContainerFormatError(
            "Entry {} {} ends at byte {}, past end of file ({} bytes)".format(
                entry_hash, what, end, len(data)
            )
        )


def _decode(raw: bytes, encoding: str, entry_hash: int) -> str:
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise EntryEncodingError(entry_hash, encoding, str(e)) from e


def _encode(text: str, encoding: str, entry_hash: int) -> bytes:
    try:
        raw = text.encode(encoding)
    except UnicodeEncodeError as e:
        raise EntryEncodingError(entry_hash, encoding, str(e)) from e
    if b"\0" in raw:
        raise EntryEncodingError(entry_hash, encoding, "text contains a NUL character")
    return raw


def read_subtitle_entry(data: bytes, offset: int, entry_hash: int, encoding: str) -> SubtitleEntry:
    """Decode the subtitle payload at ``offset``.

    Args:
        data: The complete container bytes.
        offset: Payload offset taken from the index record.
        entry_hash: Hash from the index record, attached to the entry.
        encoding: The container's resolved text encoding.
    """
    _require(data, offset + _SUBP_ENTRY_HEAD.size, entry_hash, "header")
    line_count, text_size = _SUBP_ENTRY_HEAD.unpack_from(data, offset)

    timings_start = offset + _SUBP_ENTRY_HEAD.size
    text_start = timings_start + line_count * _SUBP_TIMING.size
    text_end = text_start + text_size
    _require(data, text_end, entry_hash, "payload")
    block = data[text_start:text_end]

    lines: List[SubtitleLine] = []
    for i in range(line_count):
        text_offset, start, end = _SUBP_TIMING.unpack_from(data, timings_start + i * _SUBP_TIMING.size)
        terminator = block.find(b"\0", text_offset)
        if text_offset >= len(block) or terminator < 0:
            raise ContainerFormatError(
                "Entry {} line {} text offset {} is not a terminated string in its {}-byte block".format(
                    entry_hash, i, text_offset, len(block)
                )
            )
        text = _decode(block[text_offset:terminator], encoding, entry_hash)
        lines.append(SubtitleLine(start=start, end=end, text=text))

    return SubtitleEntry(hash=entry_hash, lines=lines)


def write_subtitle_entry(buffer: BinaryIO, entry: SubtitleEntry, encoding: str) -> None:
    """Append one subtitle payload to ``buffer``."""
    encoded = [_encode(line.text, encoding, entry.hash) + b"\0" for line in entry.lines]
    if len(encoded) > _MAX_U16:
        raise ContainerFormatError("Entry {} has too many lines ({})".format(entry.hash, len(encoded)))

    timings = []
    text_offset = 0
    for line, raw in zip(entry.lines, encoded):
        if text_offset > _MAX_U16:
            raise ContainerFormatError("Entry {} text block is too large".format(entry.hash))
        try:
            timings.append(_SUBP_TIMING.pack(text_offset, line.start, line.end))
        except struct.error as e:
            raise ContainerFormatError(
                "Entry {} line timing {}-{} is out of range: {}".format(entry.hash, line.start, line.end, e)
            ) from e
        text_offset += len(raw)
    if text_offset > _MAX_U16:
        raise ContainerFormatError("Entry {} text block is too large".format(entry.hash))

    buffer.write(_SUBP_ENTRY_HEAD.pack(len(encoded), text_offset))
    buffer.write(b"".join(timings))
    buffer.write(b"".join(encoded))


def read_lang_entry(data: bytes, offset: int, entry_hash: int) -> LangEntry:
    """Decode the language payload at ``offset``."""
    _require(data, offset + _LANG_ENTRY_HEAD.size, entry_hash, "header")
    (color,) = _LANG_ENTRY_HEAD.unpack_from(data, offset)
    text_start = offset + _LANG_ENTRY_HEAD.size
    terminator = data.find(b"\0", text_start)
    if terminator < 0:
        raise ContainerFormatError("Entry {} text is not NUL-terminated".format(entry_hash))
    text = _decode(data[text_start:terminator], LANG_ENCODING, entry_hash)
    return LangEntry(hash=entry_hash, color=color, text=text)


def write_lang_entry(buffer: BinaryIO, entry: LangEntry) -> None:
    buffer.write(_LANG_ENTRY_HEAD.pack(entry.color))
    buffer.write(_encode(entry.text, LANG_ENCODING, entry.hash))
    buffer.write(b"\0")
