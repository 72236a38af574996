"""Language pack (.lng/.lng2) container codec.

WHY: Language packs hold UI strings keyed by StrCode32 of a lang id. They
share the hash index and two-pass layout with subtitle packs but carry a
"LANG" header, a colour per entry, and always UTF-8 text.

HOW: Same shape as codec.subp: header, shared index walk, payload codec.

RULES:
- Version 2 is .lng, version 3 is .lng2
- Text is always UTF-8; no caller override applies
- Ascending packs are re-sorted by hash on write
"""

from __future__ import annotations

import io
from typing import Optional

from foxtext_converter.codec.container import read_entries, refresh_hashes, write_entries
from foxtext_converter.codec.entry import read_lang_entry, write_lang_entry
from foxtext_converter.codec.header import read_lang_header, write_lang_header
from foxtext_converter.core.dictionary import HashDictionary
from foxtext_converter.core.ir import LangPack


def read_lang_pack(data: bytes, dictionary: Optional[HashDictionary] = None) -> LangPack:
    """Decode a complete language pack."""
    version, sort_order, count, header_size = read_lang_header(data)
    entries = read_entries(
        data,
        header_size,
        count,
        lambda buf, record: read_lang_entry(buf, record.offset, record.hash),
        dictionary,
    )
    return LangPack(version=version, sort_order=sort_order, entries=entries)


def write_lang_pack(pack: LangPack) -> bytes:
    """Encode a language pack to bytes, refreshing hashes in place."""
    refresh_hashes(pack.entries)

    buffer = io.BytesIO()
    buffer.write(write_lang_header(pack.version, pack.sort_order, len(pack.entries)))
    pack.entries = write_entries(buffer, pack.entries, write_lang_entry, ascending=pack.ascending)
    return buffer.getvalue()
