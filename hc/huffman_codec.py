# hc/huffman_codec.py

import heapq
import struct
from collections import Counter, namedtuple

from hc.bits import pack_bits, unpack_bits
from hc.exceptions import InvalidCodeTable, MalformedBitstream

# Symbol pushed next to the only real symbol of a one-symbol message.
DUMMY_SYMBOL = 0x0000

CompressedPayload = namedtuple("CompressedPayload", ["code_table", "bit_count", "data"])


class HuffmanNode:
    def __init__(self, symbol=None, freq=0, left=None, right=None, order=0):
        self.symbol = symbol
        self.freq = freq
        self.left = left
        self.right = right
        # Tie-break for equal frequencies: symbol value for leaves,
        # creation order (after every leaf) for internal nodes.
        self.order = order

    def is_leaf(self):
        return self.left is None and self.right is None

    def __lt__(self, other):
        return (self.freq, self.order) < (other.freq, other.order)


def text_to_symbols(text):
    """Split text into 16-bit code units (UTF-16, surrogate pairs kept as two units)."""
    data = text.encode("utf-16-be", "surrogatepass")
    return list(struct.unpack(f">{len(data) // 2}H", data))


def symbols_to_text(symbols):
    data = struct.pack(f">{len(symbols)}H", *symbols)
    return data.decode("utf-16-be", "surrogatepass")


def count_frequencies(symbols):
    return dict(Counter(symbols))


def build_tree(frequency):
    if not frequency:
        raise ValueError("cannot build a Huffman tree from an empty frequency table")

    heap = [HuffmanNode(symbol, freq, order=symbol) for symbol, freq in frequency.items()]
    if len(heap) == 1:
        dummy = DUMMY_SYMBOL if heap[0].symbol != DUMMY_SYMBOL else DUMMY_SYMBOL + 1
        heap.append(HuffmanNode(dummy, 0, order=dummy))
    heapq.heapify(heap)

    next_order = 0x10000
    while len(heap) > 1:
        left = heapq.heappop(heap)
        right = heapq.heappop(heap)
        merged = HuffmanNode(freq=left.freq + right.freq, left=left, right=right, order=next_order)
        next_order += 1
        heapq.heappush(heap, merged)

    return heap[0]


def generate_codes(node, current="", codes=None):
    if codes is None:
        codes = {}

    if node.is_leaf():
        codes[node.symbol] = current or "0"
        return codes

    generate_codes(node.left, current + "0", codes)
    generate_codes(node.right, current + "1", codes)
    return codes


def build_code_map(text):
    """Code table for ``text``; empty text gives an empty table."""
    frequency = count_frequencies(text_to_symbols(text))
    if not frequency:
        return {}
    return generate_codes(build_tree(frequency))


def compress(text):
    symbols = text_to_symbols(text)
    if not symbols:
        return CompressedPayload({}, 0, b"")

    codes = generate_codes(build_tree(count_frequencies(symbols)))
    bits = "".join(codes[symbol] for symbol in symbols)
    return CompressedPayload(codes, len(bits), pack_bits(bits))


def as_symbol(key):
    """Accept a code unit (int) or a one-character string keyed table."""
    if isinstance(key, str) and len(key) == 1:
        key = ord(key)
    if not isinstance(key, int) or isinstance(key, bool) or not 0 <= key <= 0xFFFF:
        raise InvalidCodeTable(f"{key!r} is not a 16-bit symbol")
    return key


def reverse_code_table(code_table):
    reverse_codes = {}
    for key, code in code_table.items():
        symbol = as_symbol(key)
        if not isinstance(code, str) or not code or code.strip("01"):
            raise InvalidCodeTable(f"symbol {symbol:#06x} has an invalid code {code!r}")
        if code in reverse_codes:
            raise InvalidCodeTable(
                f"symbols {reverse_codes[code]:#06x} and {symbol:#06x} share code {code!r}"
            )
        reverse_codes[code] = symbol
    return reverse_codes


def decompress(code_table, bit_count, data):
    if not code_table:
        return ""

    reverse_codes = reverse_code_table(code_table)
    bitstring = unpack_bits(data, bit_count)

    symbols = []
    buffer = ""
    for bit in bitstring:
        buffer += bit
        if buffer in reverse_codes:
            symbols.append(reverse_codes[buffer])
            buffer = ""

    if buffer:
        raise MalformedBitstream(f"{len(buffer)} trailing bits do not match any code")

    return symbols_to_text(symbols)
