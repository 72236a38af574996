"""Shared test fixtures for the foxtext_converter test suite.

WHY: Most codec tests need binary containers. Building them here by hand,
with struct and without the package's own writer, keeps the read-path
tests independent of the write path they are compared against.

HOW: Plain helper functions assemble headers, index tables, and payloads
byte by byte. Pytest fixtures provide a small word list, its dictionary,
and ready-made legacy, tagged, and language containers.

RULES:
- Helpers lay payloads out sequentially, in index order, the same way
  the writer does, so write(read(x)) == x holds for these fixtures
- Hashes for fixtures without identifiers are small literal numbers
"""

import struct
from typing import List, Sequence, Tuple

import pytest

from foxtext_converter.core.dictionary import HashDictionary
from foxtext_converter.core.strcode import strcode32

SAMPLE_WORDS = ["HELLO", "gz_cassette_001", "tpp_intro_002", "mission_start"]


def subtitle_payload(lines: Sequence[Tuple[int, int, bytes]]) -> bytes:
    """Encode subtitle lines given as (start, end, encoded_text)."""
    block = b""
    timings = b""
    for start, end, raw in lines:
        timings += struct.pack("<HII", len(block), start, end)
        block += raw + b"\0"
    return struct.pack("<HH", len(lines), len(block)) + timings + block


def lang_payload(color: int, raw: bytes) -> bytes:
    return struct.pack("<H", color) + raw + b"\0"


def build_container(header: bytes, entries: Sequence[Tuple[int, bytes]]) -> bytes:
    """Header + index table + sequential payloads for (hash, payload) pairs."""
    offset = len(header) + 8 * len(entries)
    index = b""
    for code, payload in entries:
        index += struct.pack("<II", code, offset)
        offset += len(payload)
    return header + index + b"".join(payload for _, payload in entries)


def legacy_header(count: int) -> bytes:
    return struct.pack("<HH", 0x0113, count)


def tagged_header(count: int, sort_order: int = 0, version: int = 1, language_id: int = 1, voice: int = 0) -> bytes:
    return struct.pack("<BBBBH", 0x02, sort_order | (version << 2), language_id, voice, count)


def lang_header(count: int, version: int = 3, sort_order: int = 0) -> bytes:
    return struct.pack("<4sBBHI", b"LANG", version, sort_order, 0, count)


def index_hashes(data: bytes, header_size: int, count: int) -> List[int]:
    return [struct.unpack_from("<II", data, header_size + 8 * i)[0] for i in range(count)]


def index_offsets(data: bytes, header_size: int, count: int) -> List[int]:
    return [struct.unpack_from("<II", data, header_size + 8 * i)[1] for i in range(count)]


@pytest.fixture
def sample_words():
    return list(SAMPLE_WORDS)


@pytest.fixture
def sample_dictionary():
    return HashDictionary.from_words(SAMPLE_WORDS)


@pytest.fixture
def legacy_subp_bytes():
    """Legacy pack: three entries stored out of hash order (30, 10, 20)."""
    return build_container(
        legacy_header(3),
        [
            (30, subtitle_payload([(0, 45, b"Snake?"), (50, 90, b"Snake!")])),
            (10, subtitle_payload([(100, 160, b"Kept you waiting, huh?")])),
            (20, subtitle_payload([])),
        ],
    )


@pytest.fixture
def hello_subp_bytes():
    """Legacy pack whose single entry is keyed by strcode32("HELLO")."""
    return build_container(
        legacy_header(1),
        [(strcode32("HELLO"), subtitle_payload([(0, 30, b"Hello there")]))],
    )


@pytest.fixture
def utf8_tagged_subp_bytes():
    """Tagged ascending pack in Japanese (language id 0 → UTF-8)."""
    return build_container(
        tagged_header(1, sort_order=1, version=2, language_id=0, voice=1),
        [(77, subtitle_payload([(10, 70, "こんにちは、スネーク".encode("utf-8"))]))],
    )


@pytest.fixture
def lang_bytes():
    return build_container(
        lang_header(2, version=3),
        [
            (strcode32("mission_start"), lang_payload(1, "Mission start".encode("utf-8"))),
            (5, lang_payload(0, "Téléphone".encode("utf-8"))),
        ],
    )
