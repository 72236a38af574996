"""Unit tests for entry payload codecs.

WHY: Payload decoding runs at arbitrary offsets in untrusted files and
payload encoding decides whether translated text survives the round trip.

HOW: Tests decode hand-built payloads, encode entries into BytesIO, and
cover truncation and encoding failures.
"""

import io
import struct

import pytest

from conftest import lang_payload, subtitle_payload
from foxtext_converter.codec.entry import (
    read_lang_entry,
    read_subtitle_entry,
    write_lang_entry,
    write_subtitle_entry,
)
from foxtext_converter.core.errors import ContainerFormatError, EntryEncodingError
from foxtext_converter.core.ir import LangEntry, SubtitleEntry, SubtitleLine


class TestSubtitleEntry:

    def test_read_lines(self):
        data = b"pad" + subtitle_payload([(0, 45, b"Snake?"), (50, 90, b"Snake!")])
        entry = read_subtitle_entry(data, 3, 99, "iso-8859-1")
        assert entry.hash == 99
        assert entry.identifier is None
        assert entry.lines == [SubtitleLine(0, 45, "Snake?"), SubtitleLine(50, 90, "Snake!")]

    def test_write_matches_layout(self):
        entry = SubtitleEntry(hash=1, lines=[SubtitleLine(0, 45, "Snake?"), SubtitleLine(50, 90, "Snake!")])
        buffer = io.BytesIO()
        write_subtitle_entry(buffer, entry, "iso-8859-1")
        assert buffer.getvalue() == subtitle_payload([(0, 45, b"Snake?"), (50, 90, b"Snake!")])

    def test_empty_entry(self):
        buffer = io.BytesIO()
        write_subtitle_entry(buffer, SubtitleEntry(hash=1), "utf-8")
        assert buffer.getvalue() == struct.pack("<HH", 0, 0)
        assert read_subtitle_entry(buffer.getvalue(), 0, 1, "utf-8").lines == []

    def test_cyrillic_single_byte(self):
        raw = "Привет".encode("iso-8859-5")
        entry = read_subtitle_entry(subtitle_payload([(1, 2, raw)]), 0, 5, "iso-8859-5")
        assert entry.lines[0].text == "Привет"

    def test_truncated_text_block(self):
        data = subtitle_payload([(0, 10, b"Hello")])[:-3]
        with pytest.raises(ContainerFormatError, match="past end of file"):
            read_subtitle_entry(data, 0, 1, "utf-8")

    def test_truncated_entry_header(self):
        with pytest.raises(ContainerFormatError):
            read_subtitle_entry(b"\x01", 0, 1, "utf-8")

    def test_text_offset_outside_block(self):
        data = struct.pack("<HH", 1, 3) + struct.pack("<HII", 9, 0, 1) + b"ab\0"
        with pytest.raises(ContainerFormatError, match="text offset"):
            read_subtitle_entry(data, 0, 1, "utf-8")

    def test_undecodable_bytes(self):
        data = subtitle_payload([(0, 1, b"\xff\xfe")])
        with pytest.raises(EntryEncodingError) as excinfo:
            read_subtitle_entry(data, 0, 1234, "utf-8")
        assert excinfo.value.entry_hash == 1234

    def test_unencodable_text(self):
        entry = SubtitleEntry(hash=8, lines=[SubtitleLine(0, 1, "Привет")])
        with pytest.raises(EntryEncodingError):
            write_subtitle_entry(io.BytesIO(), entry, "iso-8859-1")

    def test_nul_in_text(self):
        entry = SubtitleEntry(hash=8, lines=[SubtitleLine(0, 1, "a\0b")])
        with pytest.raises(EntryEncodingError, match="NUL"):
            write_subtitle_entry(io.BytesIO(), entry, "utf-8")

    def test_negative_timing(self):
        entry = SubtitleEntry(hash=8, lines=[SubtitleLine(-1, 1, "a")])
        with pytest.raises(ContainerFormatError, match="out of range"):
            write_subtitle_entry(io.BytesIO(), entry, "utf-8")


class TestLangEntry:

    def test_read(self):
        data = lang_payload(3, "Téléphone".encode("utf-8"))
        assert read_lang_entry(data, 0, 11) == LangEntry(hash=11, color=3, text="Téléphone")

    def test_write_matches_layout(self):
        buffer = io.BytesIO()
        write_lang_entry(buffer, LangEntry(hash=1, color=2, text="Hi"))
        assert buffer.getvalue() == lang_payload(2, b"Hi")

    def test_missing_terminator(self):
        with pytest.raises(ContainerFormatError, match="NUL-terminated"):
            read_lang_entry(struct.pack("<H", 0) + b"abc", 0, 1)
