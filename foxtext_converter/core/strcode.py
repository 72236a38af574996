"""StrCode hashing, the engine's string-to-id function.

WHY: Subtitle packs and language packs never store their string keys.
Every entry is addressed by StrCode32 of its identifier, so reading an
identifier back requires hashing candidate words exactly the way the
engine did. A single differing bit means the dictionary silently stops
resolving anything.

HOW: StrCode is CityHash64WithSeeds (CityHash v1.0.x) over the encoded
string, seeded with a fixed constant and with the last eight bytes of the
string packed in reverse order. The 64-bit result is masked to 50 bits;
StrCode32 keeps the low 32 bits of that.

RULES:
- All arithmetic is modulo 2**64 (every intermediate is masked with _MASK64)
- Pure functions, no module state beyond constants
- The empty string hashes fine (CityHash returns k2 for zero-length input)
- CityHash v1.0.x, not v1.1; the 0-16 and over-64-byte paths differ between them
"""

from __future__ import annotations

import struct

_MASK64 = 0xFFFFFFFFFFFFFFFF
_MASK32 = 0xFFFFFFFF

_K0 = 0xC3A5C85C97CB3127
_K1 = 0xB492B66FBE98F273
_K2 = 0x9AE16A3B2F90404F
_K3 = 0xC949D7C7509E6557
_KMUL = 0x9DDFEA08EB382D69

STRCODE_SEED0 = 0x9AE16A3B2F90404F
STRCODE_MASK = 0x3FFFFFFFFFFFF

_U64 = struct.Struct("<Q")
_U32 = struct.Struct("<I")


def _fetch64(data: bytes, pos: int) -> int:
    return _U64.unpack_from(data, pos)[0]


def _fetch32(data: bytes, pos: int) -> int:
    return _U32.unpack_from(data, pos)[0]


def _rotate(value: int, shift: int) -> int:
    if shift == 0:
        return value
    return ((value >> shift) | (value << (64 - shift))) & _MASK64


def _rotate_by_at_least_1(value: int, shift: int) -> int:
    return ((value >> shift) | (value << (64 - shift))) & _MASK64


def _shift_mix(value: int) -> int:
    return value ^ (value >> 47)


def _hash_len16(u: int, v: int) -> int:
    """Hash128to64 on the (low=u, high=v) pair."""
    a = ((u ^ v) * _KMUL) & _MASK64
    a ^= a >> 47
    b = ((v ^ a) * _KMUL) & _MASK64
    b ^= b >> 47
    return (b * _KMUL) & _MASK64


def _hash_len0to16(data: bytes) -> int:
    length = len(data)
    if length > 8:
        a = _fetch64(data, 0)
        b = _fetch64(data, length - 8)
        return _hash_len16(a, _rotate_by_at_least_1((b + length) & _MASK64, length)) ^ b
    if length >= 4:
        a = _fetch32(data, 0)
        return _hash_len16((length + (a << 3)) & _MASK64, _fetch32(data, length - 4))
    if length > 0:
        a = data[0]
        b = data[length >> 1]
        c = data[length - 1]
        y = (a + (b << 8)) & _MASK32
        z = (length + (c << 2)) & _MASK32
        return (_shift_mix(((y * _K2) ^ (z * _K3)) & _MASK64) * _K2) & _MASK64
    return _K2


def _hash_len17to32(data: bytes) -> int:
    length = len(data)
    a = (_fetch64(data, 0) * _K1) & _MASK64
    b = _fetch64(data, 8)
    c = (_fetch64(data, length - 8) * _K2) & _MASK64
    d = (_fetch64(data, length - 16) * _K0) & _MASK64
    return _hash_len16(
        (_rotate((a - b) & _MASK64, 43) + _rotate(c, 30) + d) & _MASK64,
        (a + _rotate(b ^ _K3, 20) - c + length) & _MASK64,
    )


def _weak_hash_len32_with_seeds(data: bytes, pos: int, a: int, b: int) -> tuple[int, int]:
    w = _fetch64(data, pos)
    x = _fetch64(data, pos + 8)
    y = _fetch64(data, pos + 16)
    z = _fetch64(data, pos + 24)
    a = (a + w) & _MASK64
    b = _rotate((b + a + z) & _MASK64, 21)
    c = a
    a = (a + x) & _MASK64
    a = (a + y) & _MASK64
    b = (b + _rotate(a, 44)) & _MASK64
    return (a + z) & _MASK64, (b + c) & _MASK64


def _hash_len33to64(data: bytes) -> int:
    length = len(data)
    z = _fetch64(data, 24)
    a = (_fetch64(data, 0) + (length + _fetch64(data, length - 16)) * _K0) & _MASK64
    b = _rotate((a + z) & _MASK64, 52)
    c = _rotate(a, 37)
    a = (a + _fetch64(data, 8)) & _MASK64
    c = (c + _rotate(a, 7)) & _MASK64
    a = (a + _fetch64(data, 16)) & _MASK64
    vf = (a + z) & _MASK64
    vs = (b + _rotate(a, 31) + c) & _MASK64
    a = (_fetch64(data, 16) + _fetch64(data, length - 32)) & _MASK64
    z = _fetch64(data, length - 8)
    b = _rotate((a + z) & _MASK64, 52)
    c = _rotate(a, 37)
    a = (a + _fetch64(data, length - 24)) & _MASK64
    c = (c + _rotate(a, 7)) & _MASK64
    a = (a + _fetch64(data, length - 16)) & _MASK64
    wf = (a + z) & _MASK64
    ws = (b + _rotate(a, 31) + c) & _MASK64
    r = _shift_mix(((vf + ws) * _K2 + (wf + vs) * _K0) & _MASK64)
    return (_shift_mix((r * _K0 + vs) & _MASK64) * _K2) & _MASK64


def city_hash64(data: bytes) -> int:
    """CityHash64 (v1.0.x) of a byte string."""
    length = len(data)
    if length <= 32:
        if length <= 16:
            return _hash_len0to16(data)
        return _hash_len17to32(data)
    if length <= 64:
        return _hash_len33to64(data)

    # Over 64 bytes: hash the tail first, then walk 64-byte chunks.
    x = _fetch64(data, 0)
    y = _fetch64(data, length - 16) ^ _K1
    z = _fetch64(data, length - 56) ^ _K0
    v = _weak_hash_len32_with_seeds(data, length - 64, length, y)
    w = _weak_hash_len32_with_seeds(data, length - 32, (length * _K1) & _MASK64, _K0)
    z = (z + _shift_mix(v[1]) * _K1) & _MASK64
    x = (_rotate((z + x) & _MASK64, 39) * _K1) & _MASK64
    y = (_rotate(y, 33) * _K1) & _MASK64

    remaining = (length - 1) & ~63
    pos = 0
    while True:
        x = (_rotate((x + y + v[0] + _fetch64(data, pos + 16)) & _MASK64, 37) * _K1) & _MASK64
        y = (_rotate((y + v[1] + _fetch64(data, pos + 48)) & _MASK64, 42) * _K1) & _MASK64
        x ^= w[1]
        y ^= v[0]
        z = _rotate(z ^ w[0], 33)
        v = _weak_hash_len32_with_seeds(data, pos, (v[1] * _K1) & _MASK64, (x + w[0]) & _MASK64)
        w = _weak_hash_len32_with_seeds(data, pos + 32, (z + w[1]) & _MASK64, y)
        z, x = x, z
        pos += 64
        remaining -= 64
        if remaining == 0:
            break

    return _hash_len16(
        (_hash_len16(v[0], w[0]) + _shift_mix(y) * _K1 + z) & _MASK64,
        (_hash_len16(v[1], w[1]) + x) & _MASK64,
    )


def city_hash64_with_seeds(data: bytes, seed0: int, seed1: int) -> int:
    """CityHash64WithSeeds (v1.0.x)."""
    return _hash_len16((city_hash64(data) - seed0) & _MASK64, seed1 & _MASK64)


def _strcode_seed1(data: bytes) -> int:
    # Up to eight trailing bytes, last byte first, read as little-endian u64.
    tail = data[::-1][:8]
    return int.from_bytes(tail, "little")


def strcode64(text: str, encoding: str = "utf-8") -> int:
    """Full-width StrCode of ``text`` (masked to 50 bits).

    Args:
        text: The identifier to hash.
        encoding: Codec used to turn ``text`` into bytes before hashing.

    Returns:
        The masked 64-bit StrCode value.
    """
    data = text.encode(encoding)
    return city_hash64_with_seeds(data, STRCODE_SEED0, _strcode_seed1(data)) & STRCODE_MASK


def strcode32(text: str, encoding: str = "utf-8") -> int:
    """StrCode32 of ``text``: the 32-bit id stored in subp and lang indices.

    WHY: This is the on-disk identity of every entry. The write path calls
    it to refresh hashes from (possibly hand-edited) identifiers; the
    dictionary calls it on every word-list line.

    HOW: Low 32 bits of strcode64().

    RULES:
    - Deterministic across calls and processes
    - Never raises for text encodable in ``encoding``
    """
    return strcode64(text, encoding) & _MASK32
