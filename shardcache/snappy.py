"""Snappy block-format compression and decompression."""

from __future__ import annotations

MAX_BLOCK_SIZE = 0xFFFFFFFF


class SnappyError(ValueError):
    """Raised for input too large to encode or a corrupt compressed block."""


def _literal(out: bytearray, chunk: bytes) -> None:
    if not chunk:
        return
    n = len(chunk) - 1
    if n < 60:
        out.append(n << 2)
    else:
        width = (n.bit_length() + 7) // 8
        out.append((59 + width) << 2)
        out += n.to_bytes(width, "little")
    out += chunk


def _copy(out: bytearray, offset: int, length: int) -> None:
    while length >= 68:
        out += bytes([63 << 2 | 2]) + offset.to_bytes(2, "little")
        length -= 64
    if length > 64:
        out += bytes([59 << 2 | 2]) + offset.to_bytes(2, "little")
        length -= 60
    if length >= 12 or offset >= 2048:
        out += bytes([(length - 1) << 2 | 2]) + offset.to_bytes(2, "little")
    else:
        out += bytes([(offset >> 8) << 5 | (length - 4) << 2 | 1, offset & 0xFF])


def encode(data: bytes) -> bytes:
    """Compress ``data`` into one Snappy block."""
    src = bytes(data)
    size = len(src)
    if size > MAX_BLOCK_SIZE:
        raise SnappyError("snappy: block too large")
    out = bytearray()
    n = size
    while n >= 0x80:
        out.append((n & 0x7F) | 0x80)
        n >>= 7
    out.append(n)
    table: dict = {}
    start = pos = 0
    while pos + 4 <= size:
        window = src[pos:pos + 4]
        candidate = table.get(window)
        table[window] = pos
        if candidate is None or pos - candidate > 0xFFFF:
            pos += 1
            continue
        length = 4
        while pos + length < size and src[candidate + length] == src[pos + length]:
            length += 1
        _literal(out, src[start:pos])
        _copy(out, pos - candidate, length)
        pos = start = pos + length
    _literal(out, src[start:])
    return bytes(out)


def decode(data: bytes) -> bytes:
    """Decompress one Snappy block, raising SnappyError if it is corrupt."""
    src = bytes(data)
    corrupt = SnappyError("snappy: corrupt input")
    expected = pos = 0
    for pos, byte in enumerate(src[:10], 1):
        expected |= (byte & 0x7F) << (7 * (pos - 1))
        if byte < 0x80:
            break
    else:
        raise corrupt
    if expected > MAX_BLOCK_SIZE:
        raise SnappyError("snappy: decoded block is too large")
    out = bytearray()
    end = len(src)
    while pos < end:
        tag = src[pos]
        kind = tag & 0x03
        if kind == 0:
            length = tag >> 2
            pos += 1
            if length >= 60:
                extra = length - 59
                if pos + extra > end:
                    raise corrupt
                length = int.from_bytes(src[pos:pos + extra], "little")
                pos += extra
            length += 1
            if pos + length > end or len(out) + length > expected:
                raise corrupt
            out += src[pos:pos + length]
            pos += length
            continue
        if kind == 1:
            width, length = 1, 4 + ((tag >> 2) & 0x07)
        else:
            width, length = (2 if kind == 2 else 4), 1 + (tag >> 2)
        if pos + 1 + width > end:
            raise corrupt
        offset = int.from_bytes(src[pos + 1:pos + 1 + width], "little")
        if kind == 1:
            offset |= (tag >> 5) << 8
        pos += 1 + width
        if offset == 0 or offset > len(out) or len(out) + length > expected:
            raise corrupt
        for _ in range(length):
            out.append(out[-offset])
    if len(out) != expected:
        raise corrupt
    return bytes(out)