"""Container headers for subtitle packs and language packs.

WHY: The header is the first thing the engine's loader checks. Its
discriminator tells the two subtitle-pack variants apart, and its packed
flag byte carries the sort-order class and sub-version that drive the
write path and encoding resolution.

HOW: struct formats describe each layout. pack_flags()/unpack_flags()
handle the bit packing shared by both container kinds. Readers work on
the complete file bytes and return (header, entry_count, header_size).

RULES:
- Legacy subp:  u16 magic 0x0113, u16 entry_count
- Tagged subp:  u8 tag 0x02, u8 flags, u8 language_id, u8 voice, u16 entry_count
- Lang:         4s "LANG", u8 version, u8 flags, u16 reserved, u32 entry_count
- subp flags:   bits 0-1 sort order class, bits 2-5 sub-version, bits 6-7 zero
- lang flags:   bits 0-1 sort order class, bits 2-7 zero; reserved u16 zero
- Nonzero bits that the writer cannot reproduce are a ContainerFormatError
- Any other discriminator or a truncated header is a ContainerFormatError
"""

from __future__ import annotations

import struct
from typing import Tuple

from foxtext_converter.core.errors import ContainerFormatError
from foxtext_converter.core.ir import ContainerHeader, SortOrder

SUBP_LEGACY_MAGIC = 0x0113
SUBP_TAGGED_TAG = 0x02
LANG_MAGIC = b"LANG"
LANG_VERSIONS = (2, 3)

SUBP_MAX_ENTRIES = 0xFFFF
LANG_MAX_ENTRIES = 0xFFFFFFFF

_LEGACY = struct.Struct("<HH")
_TAGGED = struct.Struct("<BBBBH")
_LANG = struct.Struct("<4sBBHI")

_SORT_MASK = 0x03
_VERSION_SHIFT = 2
_VERSION_MASK = 0x0F
_SPARE_FLAG_BITS = 0xC0


def pack_flags(sort_order: int, version: int = 0) -> int:
    """Pack a sort-order class and 4-bit sub-version into one byte."""
    if not 0 <= sort_order <= _SORT_MASK:
        raise ContainerFormatError("Sort order class {} does not fit in 2 bits".format(sort_order))
    if not 0 <= version <= _VERSION_MASK:
        raise ContainerFormatError("Sub-version {} does not fit in 4 bits".format(version))
    return sort_order | (version << _VERSION_SHIFT)


def unpack_flags(flags: int) -> Tuple[SortOrder, int]:
    """Split a flag byte into (sort order class, sub-version).

    Raises:
        ContainerFormatError: Bits 6-7 are set; they cannot be written back.
    """
    if flags & _SPARE_FLAG_BITS:
        raise ContainerFormatError("Flag byte 0x{:02x} sets unused bits 6-7".format(flags))
    return SortOrder(flags & _SORT_MASK), (flags >> _VERSION_SHIFT) & _VERSION_MASK


def read_subp_header(data: bytes) -> Tuple[ContainerHeader, int, int]:
    """Parse a subtitle-pack header.

    Returns:
        (header, entry_count, header_size)

    Raises:
        ContainerFormatError: Truncated header or unknown discriminator.
    """
    if len(data) < _LEGACY.size:
        raise ContainerFormatError(
            "File is too short for a subtitle pack header ({} bytes)".format(len(data))
        )

    magic, count = _LEGACY.unpack_from(data, 0)
    if magic == SUBP_LEGACY_MAGIC:
        return ContainerHeader(variant="legacy"), count, _LEGACY.size

    if data[0] == SUBP_TAGGED_TAG:
        if len(data) < _TAGGED.size:
            raise ContainerFormatError(
                "File is too short for a tagged subtitle pack header ({} bytes)".format(len(data))
            )
        _tag, flags, language_id, voice, count = _TAGGED.unpack_from(data, 0)
        sort_order, version = unpack_flags(flags)
        header = ContainerHeader(
            variant="tagged",
            sort_order=sort_order,
            version=version,
            language_id=language_id,
            voice=voice,
        )
        return header, count, _TAGGED.size

    raise ContainerFormatError("Unknown subtitle pack discriminator 0x{:04x}".format(magic))


def write_subp_header(header: ContainerHeader, entry_count: int) -> bytes:
    """Serialize a subtitle-pack header for ``entry_count`` entries."""
    if entry_count > SUBP_MAX_ENTRIES:
        raise ContainerFormatError(
            "Subtitle packs hold at most {} entries, got {}".format(SUBP_MAX_ENTRIES, entry_count)
        )
    if header.variant == "legacy":
        return _LEGACY.pack(SUBP_LEGACY_MAGIC, entry_count)
    if header.variant == "tagged":
        flags = pack_flags(int(header.sort_order), header.version)
        language_id = header.language_id if header.language_id is not None else 0xFF
        return _TAGGED.pack(SUBP_TAGGED_TAG, flags, language_id, header.voice, entry_count)
    raise ContainerFormatError("Unknown subtitle pack variant '{}'".format(header.variant))


def read_lang_header(data: bytes) -> Tuple[int, SortOrder, int, int]:
    """Parse a language-pack header.

    Returns:
        (version, sort_order, entry_count, header_size)
    """
    if len(data) < _LANG.size:
        raise ContainerFormatError(
            "File is too short for a language pack header ({} bytes)".format(len(data))
        )
    magic, version, flags, reserved, count = _LANG.unpack_from(data, 0)
    if magic != LANG_MAGIC:
        raise ContainerFormatError("Not a language pack (magic {!r})".format(magic))
    if version not in LANG_VERSIONS:
        raise ContainerFormatError("Unsupported language pack version {}".format(version))
    if reserved != 0:
        raise ContainerFormatError("Language pack reserved field is 0x{:04x}, expected 0".format(reserved))
    sort_order, sub_version = unpack_flags(flags)
    if sub_version != 0:
        raise ContainerFormatError("Language pack flag byte 0x{:02x} sets bits 2-5".format(flags))
    return version, sort_order, count, _LANG.size


def write_lang_header(version: int, sort_order: int, entry_count: int) -> bytes:
    if version not in LANG_VERSIONS:
        raise ContainerFormatError("Unsupported language pack version {}".format(version))
    if entry_count > LANG_MAX_ENTRIES:
        raise ContainerFormatError("Too many language pack entries: {}".format(entry_count))
    return _LANG.pack(LANG_MAGIC, version, pack_flags(int(sort_order)), 0, entry_count)
