"""Integration tests for the subtitle pack codec.

WHY: These files ship inside game archives. A pack that does not come
back byte-for-byte, or an ascending pack written out of order, breaks
subtitle lookup in the engine.

HOW: Tests read hand-built containers from conftest, write them back,
and inspect the index table directly with struct.

RULES:
- Encodings are compared through canonical_encoding()
- Read order is table order; only the writer sorts
"""

import logging
import struct

import pytest

from conftest import (
    SAMPLE_WORDS,
    build_container,
    index_hashes,
    index_offsets,
    legacy_header,
    subtitle_payload,
    tagged_header,
)
from foxtext_converter.codec.encoding import canonical_encoding
from foxtext_converter.codec.subp import read_subtitle_pack, write_subtitle_pack
from foxtext_converter.core.errors import ContainerFormatError, EntryEncodingError
from foxtext_converter.core.ir import (
    ContainerHeader,
    SortOrder,
    SubtitleEntry,
    SubtitleLine,
    SubtitlePack,
)
from foxtext_converter.core.strcode import strcode32


class TestReadSubtitlePack:
    """read_subtitle_pack decodes headers, index, and payloads."""

    def test_table_order_preserved(self, legacy_subp_bytes):
        pack = read_subtitle_pack(legacy_subp_bytes)
        assert [entry.hash for entry in pack.entries] == [30, 10, 20]
        assert pack.entries[0].lines == [SubtitleLine(0, 45, "Snake?"), SubtitleLine(50, 90, "Snake!")]
        assert pack.entries[2].lines == []

    def test_default_encoding(self, legacy_subp_bytes):
        pack = read_subtitle_pack(legacy_subp_bytes)
        assert pack.encoding == canonical_encoding("iso-8859-1")

    def test_resolves_identifiers(self, hello_subp_bytes, sample_dictionary):
        pack = read_subtitle_pack(hello_subp_bytes, sample_dictionary)
        assert pack.entries[0].identifier == "HELLO"
        assert pack.entries[0].hash == strcode32("HELLO")

    def test_unknown_hashes_stay_bare(self, legacy_subp_bytes, sample_dictionary):
        pack = read_subtitle_pack(legacy_subp_bytes, sample_dictionary)
        assert all(entry.identifier is None for entry in pack.entries)

    def test_empty_pack(self):
        pack = read_subtitle_pack(legacy_header(0))
        assert pack.entries == []

    def test_requested_encoding_used_for_legacy(self):
        raw = "Привет, Снейк".encode("iso-8859-5")
        data = build_container(legacy_header(1), [(4, subtitle_payload([(0, 10, raw)]))])
        pack = read_subtitle_pack(data, encoding="iso-8859-5")
        assert pack.entries[0].lines[0].text == "Привет, Снейк"
        assert pack.encoding == canonical_encoding("iso-8859-5")

    def test_header_overrides_requested_encoding(self, utf8_tagged_subp_bytes, caplog):
        with caplog.at_level(logging.INFO, logger="foxtext_converter.codec.subp"):
            pack = read_subtitle_pack(utf8_tagged_subp_bytes, encoding="iso-8859-1")
        assert pack.encoding == canonical_encoding("utf-8")
        assert pack.entries[0].lines[0].text == "こんにちは、スネーク"
        assert "overrides" in caplog.text

    def test_unsorted_tagged_header_is_not_authoritative(self):
        raw = "Привет".encode("iso-8859-5")
        data = build_container(
            tagged_header(1, sort_order=0, language_id=0),
            [(4, subtitle_payload([(0, 10, raw)]))],
        )
        pack = read_subtitle_pack(data, encoding="iso-8859-5")
        assert pack.encoding == canonical_encoding("iso-8859-5")

    def test_undecodable_text(self):
        data = build_container(legacy_header(1), [(9, subtitle_payload([(0, 1, b"\xc3\x28")]))])
        with pytest.raises(EntryEncodingError):
            read_subtitle_pack(data, encoding="utf-8")

    def test_truncated_index(self):
        with pytest.raises(ContainerFormatError):
            read_subtitle_pack(legacy_header(5) + b"\0" * 8)

    @pytest.mark.parametrize("bad_offset", [0, 11, 1000])
    def test_offset_outside_payload_region(self, bad_offset):
        payload = subtitle_payload([])
        data = legacy_header(1) + struct.pack("<II", 1, bad_offset) + payload
        with pytest.raises(ContainerFormatError, match="outside the payload region"):
            read_subtitle_pack(data)

    def test_offset_at_file_end(self):
        data = legacy_header(1) + struct.pack("<II", 1, 12)
        with pytest.raises(ContainerFormatError):
            read_subtitle_pack(data)

    def test_unknown_discriminator(self):
        with pytest.raises(ContainerFormatError):
            read_subtitle_pack(b"\xff\xff\x00\x00")


class TestWriteSubtitlePack:
    """write_subtitle_pack lays out containers the loader accepts."""

    def test_legacy_round_trip_is_byte_identical(self, legacy_subp_bytes):
        assert write_subtitle_pack(read_subtitle_pack(legacy_subp_bytes)) == legacy_subp_bytes

    def test_round_trip_with_dictionary(self, hello_subp_bytes, sample_dictionary):
        pack = read_subtitle_pack(hello_subp_bytes, sample_dictionary)
        assert write_subtitle_pack(pack) == hello_subp_bytes

    def test_utf8_round_trip_ignores_requested_encoding(self, utf8_tagged_subp_bytes):
        pack = read_subtitle_pack(utf8_tagged_subp_bytes, encoding="iso-8859-1")
        assert write_subtitle_pack(pack, encoding="iso-8859-1") == utf8_tagged_subp_bytes

    def test_empty_pack(self):
        assert write_subtitle_pack(SubtitlePack()) == legacy_header(0)

    def test_ascending_pack_is_sorted(self):
        entries = [
            (30, subtitle_payload([(0, 1, b"c")])),
            (10, subtitle_payload([(0, 1, b"a")])),
            (20, subtitle_payload([(0, 1, b"b")])),
        ]
        data = build_container(tagged_header(3, sort_order=1, language_id=1), entries)
        pack = read_subtitle_pack(data)
        assert [entry.hash for entry in pack.entries] == [30, 10, 20]

        written = write_subtitle_pack(pack)
        assert index_hashes(written, 6, 3) == [10, 20, 30]
        assert [entry.hash for entry in pack.entries] == [10, 20, 30]
        assert read_subtitle_pack(written).entries[0].lines[0].text == "a"

    def test_unsorted_pack_keeps_order(self, legacy_subp_bytes):
        written = write_subtitle_pack(read_subtitle_pack(legacy_subp_bytes))
        assert index_hashes(written, 4, 3) == [30, 10, 20]

    def test_sorts_by_hash_of_identifiers(self):
        pack = SubtitlePack(
            header=ContainerHeader("tagged", SortOrder.ASCENDING, 1, 1, 0),
            entries=[SubtitleEntry(hash=0, identifier=word) for word in SAMPLE_WORDS],
        )
        written = write_subtitle_pack(pack)
        assert index_hashes(written, 6, len(SAMPLE_WORDS)) == sorted(strcode32(w) for w in SAMPLE_WORDS)

    def test_hashes_recomputed_from_identifiers(self):
        pack = SubtitlePack(entries=[SubtitleEntry(hash=1, identifier="HELLO")])
        written = write_subtitle_pack(pack)
        assert index_hashes(written, 4, 1) == [strcode32("HELLO")]
        assert pack.entries[0].hash == strcode32("HELLO")

    def test_offsets_point_at_sequential_payloads(self):
        pack = SubtitlePack(
            entries=[
                SubtitleEntry(hash=1, lines=[SubtitleLine(0, 10, "one")]),
                SubtitleEntry(hash=2),
            ]
        )
        written = write_subtitle_pack(pack)
        first, second = index_offsets(written, 4, 2)
        assert first == 4 + 16
        assert second == first + len(subtitle_payload([(0, 10, b"one")]))
        assert second < len(written)

    def test_document_encoding_used_when_not_requested(self):
        pack = SubtitlePack(
            entries=[SubtitleEntry(hash=1, lines=[SubtitleLine(0, 10, "Привет")])],
            encoding="iso-8859-5",
        )
        written = write_subtitle_pack(pack)
        assert "Привет".encode("iso-8859-5") in written

    def test_requested_encoding_beats_document(self):
        pack = SubtitlePack(
            entries=[SubtitleEntry(hash=1, lines=[SubtitleLine(0, 10, "é")])],
            encoding="iso-8859-1",
        )
        written = write_subtitle_pack(pack, encoding="utf-8")
        assert "é".encode("utf-8") + b"\0" in written

    def test_unencodable_text(self):
        pack = SubtitlePack(entries=[SubtitleEntry(hash=1, lines=[SubtitleLine(0, 1, "Привет")])])
        with pytest.raises(EntryEncodingError):
            write_subtitle_pack(pack)

    def test_too_many_entries(self):
        pack = SubtitlePack(entries=[SubtitleEntry(hash=i) for i in range(0x10000)])
        with pytest.raises(ContainerFormatError):
            write_subtitle_pack(pack)
