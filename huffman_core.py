# filename: huffman_core.py

import heapq
from collections import Counter
from itertools import count

from bit_streams import END_OF_INPUT

BITS_PER_WORD = 8
ALPH_SIZE = 1 << BITS_PER_WORD
PSEUDO_EOF = ALPH_SIZE


class HuffmanNode:
    """A leaf (symbol set, no children) or an internal node with two children.

    `order` breaks ties between equal weights: leaves use their symbol,
    internal nodes their creation sequence. Leaves sort before internal
    nodes of the same weight.
    """

    def __init__(self, symbol, weight, left=None, right=None, order=None):
        self.symbol = symbol
        self.weight = weight
        self.left = left
        self.right = right
        self.order = symbol if order is None else order

    @property
    def is_leaf(self):
        return self.left is None and self.right is None

    def sort_key(self):
        return (self.weight, 0 if self.is_leaf else 1, self.order)

    def __lt__(self, other):
        return self.sort_key() < other.sort_key()

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode(symbol={self.symbol}, weight={self.weight})"
        return f"HuffmanNode(weight={self.weight})"


class HuffmanLogic:
    def count_frequencies(self, bit_in):
        # Single pass over the whole source, one counter per byte value
        counts = [0] * ALPH_SIZE
        value = bit_in.read_bits(BITS_PER_WORD)
        while value != END_OF_INPUT:
            counts[value] += 1
            value = bit_in.read_bits(BITS_PER_WORD)
        return counts

    def count_frequencies_bytes(self, data):
        freqs = Counter(data)
        return [freqs.get(byte, 0) for byte in range(ALPH_SIZE)]

    def build_tree(self, counts):
        sequence = count(ALPH_SIZE + 1)
        # Every byte value gets a leaf, even with a zero count, plus the sentinel
        priority_queue = [HuffmanNode(byte, weight) for byte, weight in enumerate(counts)]
        priority_queue.append(HuffmanNode(PSEUDO_EOF, 0))
        heapq.heapify(priority_queue)

        while len(priority_queue) > 1:
            left = heapq.heappop(priority_queue)
            right = heapq.heappop(priority_queue)
            merged = HuffmanNode(None, left.weight + right.weight, left, right, order=next(sequence))
            heapq.heappush(priority_queue, merged)

        return priority_queue[0]

    def generate_codes(self, root):
        """Map every leaf symbol to its root path, '0' for left and '1' for right."""
        codes = {}
        stack = [(root, "")]
        while stack:
            node, path = stack.pop()
            if node.is_leaf:
                codes[node.symbol] = path
                continue
            stack.append((node.right, path + "1"))
            stack.append((node.left, path + "0"))
        return codes


def iter_leaves(root):
    """Yield leaves left to right."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_leaf:
            yield node
        else:
            stack.append(node.right)
            stack.append(node.left)


def tree_depth(root):
    deepest = 0
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if node.is_leaf:
            deepest = max(deepest, depth)
        else:
            stack.append((node.left, depth + 1))
            stack.append((node.right, depth + 1))
    return deepest
