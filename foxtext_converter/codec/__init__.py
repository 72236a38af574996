"""Binary codecs for hash-indexed containers.

WHY: Subtitle packs and language packs share one on-disk shape: header,
(hash, offset) index table, variable-length payloads. This package holds
that shape and the two container kinds built on it.

HOW: header.py, index.py, and entry.py are the building blocks;
container.py holds the shared read walk and two-pass writer; subp.py and
lang.py are the public per-format entry points; encoding.py decides the
text encoding for subtitle packs.

RULES:
- Codecs work on complete in-memory byte strings, never partial files
- All integers are little-endian
"""

from foxtext_converter.codec.lang import read_lang_pack, write_lang_pack
from foxtext_converter.codec.subp import read_subtitle_pack, write_subtitle_pack

__all__ = [
    "read_lang_pack",
    "read_subtitle_pack",
    "write_lang_pack",
    "write_subtitle_pack",
]
