import asyncio
import errno

import pytest

from hc.connection import write_frame
from hc.exceptions import InvalidCodeTable, MalformedBitstream, TransportError
from hc.framing import decode_frame, encode_disconnect, encode_frame, read_frame
from hc.huffman_codec import CompressedPayload, compress, decompress

AAB_FRAME = bytes.fromhex(
    "01"          # table present
    "00000002"    # two entries
    "0061" "0001" "80"
    "0062" "0001" "00"
    "00000003"    # bit count
    "00000001"    # byte length
    "c0"
)


def stream_of(data):
    reader = asyncio.StreamReader()
    reader.feed_data(data)
    reader.feed_eof()
    return reader


def test_wire_layout():
    assert encode_frame(compress("aab")) == AAB_FRAME


def test_disconnect_is_single_marker_byte():
    assert encode_disconnect() == b"\x00"


def test_empty_message_differs_from_disconnect():
    frame = encode_frame(compress(""))
    assert frame == b"\x01" + b"\x00" * 12
    assert frame != encode_disconnect()


async def test_decode_disconnect():
    assert await decode_frame(b"\x00") is None


async def test_decode_empty_message():
    payload = await decode_frame(encode_frame(compress("")))
    assert payload == CompressedPayload({}, 0, b"")
    assert decompress(*payload) == ""


async def test_decode_known_frame():
    payload = await decode_frame(AAB_FRAME)
    assert payload == compress("aab")


async def test_read_frames_from_stream():
    text = "Huffman coding is a data compression algorithm."
    reader = stream_of(encode_frame(compress(text)) + encode_frame(compress("hi")) + encode_disconnect())
    assert decompress(*await read_frame(reader)) == text
    assert decompress(*await read_frame(reader)) == "hi"
    assert await read_frame(reader) is None


async def test_long_codes_survive_framing():
    # Fibonacci frequencies give a maximally skewed tree
    fib = [1, 1, 2, 3, 5, 8, 13, 21, 34, 55, 89]
    text = "".join(chr(0x41 + i) * n for i, n in enumerate(fib))
    payload = compress(text)
    assert max(len(code) for code in payload.code_table.values()) > 8
    assert await decode_frame(encode_frame(payload)) == payload


async def test_truncated_frame_is_transport_error():
    with pytest.raises(TransportError):
        await decode_frame(AAB_FRAME[:-1])
    with pytest.raises(TransportError):
        await read_frame(stream_of(AAB_FRAME[:5]))
    with pytest.raises(TransportError):
        await read_frame(stream_of(b""))


async def test_trailing_bytes_rejected():
    with pytest.raises(MalformedBitstream):
        await decode_frame(AAB_FRAME + b"\x00")


async def test_unknown_marker_rejected():
    with pytest.raises(InvalidCodeTable):
        await decode_frame(b"\x02" + AAB_FRAME[1:])


async def test_byte_length_mismatch_rejected():
    frame = AAB_FRAME[:-5] + bytes.fromhex("00000002") + b"\xc0\x00"
    with pytest.raises(MalformedBitstream):
        await decode_frame(frame)


async def test_empty_code_rejected():
    frame = bytes.fromhex("01" "00000001" "0061" "0000" "00000000" "00000000")
    with pytest.raises(InvalidCodeTable):
        await decode_frame(frame)


async def test_duplicate_symbol_rejected():
    frame = bytes.fromhex("01" "00000002" "0061" "0001" "00" "0061" "0001" "80" "00000000" "00000000")
    with pytest.raises(InvalidCodeTable):
        await decode_frame(frame)


async def test_oversized_table_rejected():
    with pytest.raises(InvalidCodeTable):
        await decode_frame(bytes.fromhex("01" "00010001"))


async def test_shared_code_frame_rejected_on_decompress():
    frame = bytes.fromhex("01" "00000002" "0061" "0001" "00" "0062" "0001" "00" "00000001" "00000001" "00")
    payload = await decode_frame(frame)
    assert payload.code_table == {ord("a"): "0", ord("b"): "0"}
    with pytest.raises(InvalidCodeTable):
        decompress(*payload)


class TimedOutReader:
    async def readexactly(self, n):
        raise TimeoutError(errno.ETIMEDOUT, "Connection timed out")


class UnreachableWriter:
    def write(self, data):
        raise OSError(errno.EHOSTUNREACH, "No route to host")

    async def drain(self):
        pass


async def test_socket_errors_are_transport_errors():
    with pytest.raises(TransportError):
        await read_frame(TimedOutReader())
    with pytest.raises(TransportError):
        await write_frame(UnreachableWriter(), encode_disconnect())
