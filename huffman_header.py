# filename: huffman_header.py

import enum

from bit_streams import END_OF_INPUT
from huffman_core import HuffmanNode, PSEUDO_EOF
from huffman_errors import (
    InvalidSymbolError,
    MalformedMagicError,
    TruncatedStreamError,
    UnsupportedHeaderError,
)

BITS_PER_INT = 32
LEAF_BITS = 9

HUFF_NUMBER = 0xFACE8200
HUFF_TREE = HUFF_NUMBER | 1
HUFF_COUNTS = HUFF_NUMBER | 2

TREE_MAGICS = (HUFF_TREE, HUFF_NUMBER)


class Header(enum.Enum):
    TREE_HEADER = "tree"
    COUNT_HEADER = "counts"


def write_header(root, bit_out):
    """Write the magic number and the tree in pre-order.

    A leaf is a 1 bit followed by its 9-bit symbol, an internal node is a
    0 bit followed by its left and then its right subtree.
    """
    bit_out.write_bits(BITS_PER_INT, HUFF_TREE)
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_leaf:
            bit_out.write_bits(1, 1)
            bit_out.write_bits(LEAF_BITS, node.symbol)
        else:
            bit_out.write_bits(1, 0)
            stack.append(node.right)
            stack.append(node.left)


def read_magic(bit_in):
    magic = bit_in.read_bits(BITS_PER_INT)
    if magic == END_OF_INPUT:
        raise TruncatedStreamError("the magic number")
    if magic == HUFF_COUNTS:
        raise UnsupportedHeaderError(Header.COUNT_HEADER)
    if magic not in TREE_MAGICS:
        raise MalformedMagicError(magic)
    return magic


def read_tree(bit_in):
    """Rebuild a tree written by write_header, consuming exactly its bits."""
    root = None
    # Internal nodes still waiting for one or both children
    pending = []
    while True:
        flag = bit_in.read_bits(1)
        if flag == END_OF_INPUT:
            raise TruncatedStreamError("the tree header")
        if flag == 1:
            symbol = bit_in.read_bits(LEAF_BITS)
            if symbol == END_OF_INPUT:
                raise TruncatedStreamError("a leaf symbol")
            if symbol > PSEUDO_EOF:
                raise InvalidSymbolError(symbol)
            node = HuffmanNode(symbol, 0)
        else:
            node = HuffmanNode(None, 0, order=-1)

        if root is None:
            root = node
        else:
            parent = pending[-1]
            if parent.left is None:
                parent.left = node
            else:
                parent.right = node
                pending.pop()

        if flag == 0:
            pending.append(node)
        if not pending:
            return root


def read_header(bit_in):
    read_magic(bit_in)
    return read_tree(bit_in)
