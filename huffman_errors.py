# filename: huffman_errors.py


class HuffmanError(Exception):
    """Base class for every failure raised while reading a compressed stream."""


class MalformedMagicError(HuffmanError):
    def __init__(self, magic):
        self.magic = magic
        super().__init__(f"bad input, unrecognized magic number 0x{magic & 0xFFFFFFFF:08x}")


class TruncatedStreamError(HuffmanError):
    def __init__(self, expected):
        self.expected = expected
        super().__init__(f"compressed stream ended while reading {expected}")


class InvalidSymbolError(HuffmanError):
    def __init__(self, symbol, reason="outside the alphabet"):
        self.symbol = symbol
        super().__init__(f"invalid leaf symbol {symbol}: {reason}")


class UnsupportedHeaderError(HuffmanError):
    def __init__(self, header):
        self.header = header
        super().__init__(f"header format {header} is not supported")
