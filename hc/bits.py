# hc/bits.py

from hc.exceptions import MalformedBitstream


def pack_bits(bits):
    """Pack a string of '0'/'1' characters into bytes, most significant bit first.

    The last byte is padded with zero bits.
    """
    out = bytearray((len(bits) + 7) // 8)
    for i, bit in enumerate(bits):
        if bit == "1":
            out[i // 8] |= 1 << (7 - i % 8)
    return bytes(out)


def unpack_bits(data, bit_count):
    """Inverse of pack_bits: return exactly ``bit_count`` bits of ``data``."""
    if bit_count < 0 or bit_count > len(data) * 8:
        raise MalformedBitstream(
            f"bit count {bit_count} does not fit in {len(data)} bytes"
        )
    bitstring = "".join(f"{byte:08b}" for byte in data)
    return bitstring[:bit_count]
