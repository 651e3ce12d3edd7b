# filename: huffman_payload.py

from bit_streams import END_OF_INPUT
from huffman_core import BITS_PER_WORD, PSEUDO_EOF
from huffman_errors import InvalidSymbolError, TruncatedStreamError


def write_compressed_bits(bit_in, codes, bit_out):
    """Encode every remaining byte of `bit_in`, then the end-of-stream code.

    Returns the number of payload bits written.
    """
    # Resolve bit-strings once instead of per byte
    table = {symbol: (len(code), int(code, 2) if code else 0) for symbol, code in codes.items()}
    written = 0
    value = bit_in.read_bits(BITS_PER_WORD)
    while value != END_OF_INPUT:
        length, bits = table[value]
        bit_out.write_bits(length, bits)
        written += length
        value = bit_in.read_bits(BITS_PER_WORD)

    length, bits = table[PSEUDO_EOF]
    bit_out.write_bits(length, bits)
    return written + length


def read_compressed_bits(root, bit_in, bit_out):
    """Walk the tree bit by bit until the end-of-stream leaf; return bytes decoded."""
    if root.is_leaf:
        if root.symbol == PSEUDO_EOF:
            return 0
        raise InvalidSymbolError(root.symbol, "single-leaf tree has no end-of-stream code")

    decoded = 0
    current = root
    while True:
        bit = bit_in.read_bits(1)
        if bit == END_OF_INPUT:
            raise TruncatedStreamError("the payload, before the end-of-stream code")
        current = current.right if bit else current.left
        if current.is_leaf:
            if current.symbol == PSEUDO_EOF:
                return decoded
            bit_out.write_bits(BITS_PER_WORD, current.symbol)
            decoded += 1
            current = root
