# hc/framing.py
"""Binary frames carrying a CompressedPayload over a byte stream.

Layout, integers big-endian and unsigned::

    u8   table marker, 0x00 = no table (disconnect), 0x01 = table follows
    u32  number of entries
         per entry: u16 symbol, u16 code length in bits, packed code bits
    u32  bit count
    u32  byte length == ceil(bit count / 8)
         payload bytes

A disconnect frame is the single marker byte 0x00. An empty text message
is a present table with zero entries, bit count 0 and no payload.
"""

import asyncio
import struct

from hc.bits import pack_bits, unpack_bits
from hc.exceptions import InvalidCodeTable, MalformedBitstream, TransportError
from hc.huffman_codec import CompressedPayload

NO_TABLE = 0x00
TABLE_PRESENT = 0x01

# One entry per 16-bit symbol at most.
MAX_TABLE_ENTRIES = 0x10000

_U8 = struct.Struct(">B")
_U32 = struct.Struct(">I")
_ENTRY = struct.Struct(">HH")
_COUNTS = struct.Struct(">II")


def encode_frame(payload):
    code_table, bit_count, data = payload
    parts = [_U8.pack(TABLE_PRESENT), _U32.pack(len(code_table))]
    for symbol in sorted(code_table):
        code = code_table[symbol]
        parts.append(_ENTRY.pack(symbol, len(code)))
        parts.append(pack_bits(code))
    parts.append(_COUNTS.pack(bit_count, len(data)))
    parts.append(bytes(data))
    return b"".join(parts)


def encode_disconnect():
    return _U8.pack(NO_TABLE)


async def _read(reader, size):
    try:
        return await reader.readexactly(size)
    except asyncio.IncompleteReadError as exc:
        raise TransportError(
            f"connection closed after {len(exc.partial)} of {size} expected bytes"
        ) from exc
    except OSError as exc:
        raise TransportError(str(exc) or exc.__class__.__name__) from exc


async def _read_code_table(reader):
    (count,) = _U32.unpack(await _read(reader, _U32.size))
    if count > MAX_TABLE_ENTRIES:
        raise InvalidCodeTable(f"code table claims {count} entries")

    code_table = {}
    for _ in range(count):
        symbol, length = _ENTRY.unpack(await _read(reader, _ENTRY.size))
        if length == 0:
            raise InvalidCodeTable(f"symbol {symbol:#06x} has an empty code")
        if symbol in code_table:
            raise InvalidCodeTable(f"symbol {symbol:#06x} appears twice in the code table")
        packed = await _read(reader, (length + 7) // 8)
        code_table[symbol] = unpack_bits(packed, length)
    return code_table


async def read_frame(reader):
    """Read one frame from ``reader`` (anything with ``async readexactly``).

    Returns a CompressedPayload, or None for the disconnect sentinel.
    """
    (marker,) = _U8.unpack(await _read(reader, _U8.size))
    if marker == NO_TABLE:
        return None
    if marker != TABLE_PRESENT:
        raise InvalidCodeTable(f"unknown code table marker {marker:#04x}")

    code_table = await _read_code_table(reader)
    bit_count, byte_length = _COUNTS.unpack(await _read(reader, _COUNTS.size))
    if byte_length != (bit_count + 7) // 8:
        raise MalformedBitstream(
            f"{bit_count} bits need {(bit_count + 7) // 8} bytes, frame declares {byte_length}"
        )
    data = await _read(reader, byte_length)
    return CompressedPayload(code_table, bit_count, data)


class BufferReader:
    """readexactly() over an in-memory frame, for message-oriented transports."""

    def __init__(self, data):
        self.data = bytes(data)
        self.offset = 0

    async def readexactly(self, n):
        chunk = self.data[self.offset:self.offset + n]
        self.offset += len(chunk)
        if len(chunk) < n:
            raise asyncio.IncompleteReadError(chunk, n)
        return chunk

    def remaining(self):
        return len(self.data) - self.offset


async def decode_frame(data):
    """Parse exactly one frame from ``data``; trailing bytes are an error."""
    reader = BufferReader(data)
    payload = await read_frame(reader)
    if reader.remaining():
        raise MalformedBitstream(f"{reader.remaining()} unexpected bytes after the frame")
    return payload
