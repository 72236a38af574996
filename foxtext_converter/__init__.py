"""Fox Engine text-pack converter for subtitle packs and language packs.

WHY: The engine stores subtitles (.subp) and UI strings (.lng/.lng2) in
binary containers addressed by StrCode32 hashes instead of readable ids.
Translators need an editable form that packs back byte-compatibly.

HOW: Three layers: codec (binary containers with a hash index and a
two-pass writer), documents (schema-validated JSON), converters (the
registry the CLI drives). A hash dictionary built from a word list
recovers readable ids on unpack.

RULES:
- The IR in core/ir.py is the only contract between codec and documents
- Unpack then pack reproduces the original bytes for unsorted packs
- Identifiers missing from the dictionary stay hash-only
"""

__version__ = "0.1.0"
