"""64-bit xxHash (XXH64), used to pick a shard for a key."""

from __future__ import annotations

from typing import Union

_MASK = (1 << 64) - 1

_P1 = 11400714785074694791
_P2 = 14029467366897019727
_P3 = 1609587929392839161
_P4 = 9650029242287828579
_P5 = 2870177450012600261


def _rotl(value: int, bits: int) -> int:
    return ((value << bits) | (value >> (64 - bits))) & _MASK


def _round(acc: int, lane: int) -> int:
    acc = (acc + lane * _P2) & _MASK
    acc = _rotl(acc, 31)
    return (acc * _P1) & _MASK


def _merge(acc: int, lane: int) -> int:
    acc ^= _round(0, lane)
    return (acc * _P1 + _P4) & _MASK


def xxhash64(data: Union[bytes, bytearray, memoryview, str], seed: int = 0) -> int:
    """Return the XXH64 digest of ``data`` as an unsigned 64-bit integer.

    Strings are hashed as their UTF-8 bytes.
    """
    buf = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    seed &= _MASK
    length = len(buf)
    pos = 0

    if length >= 32:
        v1 = (seed + _P1 + _P2) & _MASK
        v2 = (seed + _P2) & _MASK
        v3 = seed
        v4 = (seed - _P1) & _MASK
        limit = length - 32
        while pos <= limit:
            v1 = _round(v1, int.from_bytes(buf[pos:pos + 8], "little"))
            v2 = _round(v2, int.from_bytes(buf[pos + 8:pos + 16], "little"))
            v3 = _round(v3, int.from_bytes(buf[pos + 16:pos + 24], "little"))
            v4 = _round(v4, int.from_bytes(buf[pos + 24:pos + 32], "little"))
            pos += 32
        h = (_rotl(v1, 1) + _rotl(v2, 7) + _rotl(v3, 12) + _rotl(v4, 18)) & _MASK
        for lane in (v1, v2, v3, v4):
            h = _merge(h, lane)
    else:
        h = (seed + _P5) & _MASK

    h = (h + length) & _MASK

    while pos + 8 <= length:
        k1 = _round(0, int.from_bytes(buf[pos:pos + 8], "little"))
        h ^= k1
        h = (_rotl(h, 27) * _P1 + _P4) & _MASK
        pos += 8

    if pos + 4 <= length:
        h ^= (int.from_bytes(buf[pos:pos + 4], "little") * _P1) & _MASK
        h = (_rotl(h, 23) * _P2 + _P3) & _MASK
        pos += 4

    for byte in buf[pos:]:
        h ^= (byte * _P5) & _MASK
        h = (_rotl(h, 11) * _P1) & _MASK

    h ^= h >> 33
    h = (h * _P2) & _MASK
    h ^= h >> 29
    h = (h * _P3) & _MASK
    h ^= h >> 32
    return h