import random

from bit_streams import BitInputStream
from huffman_core import ALPH_SIZE, PSEUDO_EOF, HuffmanLogic, HuffmanNode, iter_leaves, tree_depth


def _internal_nodes(root):
	stack = [root]
	while stack:
		node = stack.pop()
		if not node.is_leaf:
			yield node
			stack.append(node.left)
			stack.append(node.right)


def _assert_prefix_free(codes):
	ordered = sorted(codes.values())
	for a, b in zip(ordered, ordered[1:]):
		assert not b.startswith(a)


def test_count_frequencies_reads_whole_source():
	logic = HuffmanLogic()
	bits = BitInputStream(b"AAAB")
	counts = logic.count_frequencies(bits)
	assert len(counts) == ALPH_SIZE
	assert counts[0x41] == 3
	assert counts[0x42] == 1
	assert sum(counts) == 4
	assert bits.bits_read == 32


def test_count_frequencies_matches_counter_variant():
	logic = HuffmanLogic()
	rng = random.Random(7)
	data = bytes(rng.getrandbits(8) for _ in range(2000))
	assert logic.count_frequencies(BitInputStream(data)) == logic.count_frequencies_bytes(data)


def test_tree_has_every_symbol_and_sentinel():
	logic = HuffmanLogic()
	root = logic.build_tree(logic.count_frequencies_bytes(b"hello world"))
	symbols = [leaf.symbol for leaf in iter_leaves(root)]
	assert sorted(symbols) == list(range(PSEUDO_EOF + 1))


def test_tree_weight_invariant():
	logic = HuffmanLogic()
	data = b"abracadabra" * 17
	counts = logic.count_frequencies_bytes(data)
	root = logic.build_tree(counts)
	assert root.weight == len(data)
	for node in _internal_nodes(root):
		assert node.left is not None and node.right is not None
		assert node.weight == node.left.weight + node.right.weight
	for leaf in iter_leaves(root):
		expected = 0 if leaf.symbol == PSEUDO_EOF else counts[leaf.symbol]
		assert leaf.weight == expected


def test_most_frequent_byte_gets_shortest_code():
	logic = HuffmanLogic()
	root = logic.build_tree(logic.count_frequencies_bytes(b"AAAB"))
	codes = logic.generate_codes(root)
	assert codes[0x41] == "1"
	assert codes[0x42] == "01"
	assert len(codes[0x41]) == min(len(code) for code in codes.values())


def test_codes_complete_and_prefix_free():
	logic = HuffmanLogic()
	data = b"the quick brown fox jumps over the lazy dog"
	codes = logic.generate_codes(logic.build_tree(logic.count_frequencies_bytes(data)))
	for byte in set(data):
		assert byte in codes
	assert PSEUDO_EOF in codes
	assert len(codes) == PSEUDO_EOF + 1
	_assert_prefix_free(codes)


def test_build_tree_is_deterministic():
	logic = HuffmanLogic()
	counts = logic.count_frequencies_bytes(b"mississippi river banks")
	first = logic.generate_codes(logic.build_tree(counts))
	second = HuffmanLogic().generate_codes(HuffmanLogic().build_tree(list(counts)))
	assert first == second


def test_all_zero_counts_build_valid_tree():
	logic = HuffmanLogic()
	root = logic.build_tree([0] * ALPH_SIZE)
	assert root.weight == 0
	codes = logic.generate_codes(root)
	assert len(codes) == PSEUDO_EOF + 1
	assert all(codes.values())
	_assert_prefix_free(codes)


def test_skewed_counts_build_deep_tree():
	logic = HuffmanLogic()
	counts = [0] * ALPH_SIZE
	a, b = 1, 1
	for i in range(40):
		counts[i] = a
		a, b = b, a + b
	root = logic.build_tree(counts)
	assert tree_depth(root) >= 30
	codes = logic.generate_codes(root)
	assert len(codes) == PSEUDO_EOF + 1
	_assert_prefix_free(codes)


def test_leaf_root_gets_empty_code():
	logic = HuffmanLogic()
	assert logic.generate_codes(HuffmanNode(PSEUDO_EOF, 0)) == {PSEUDO_EOF: ""}


def test_tie_break_orders_leaves_before_internal_nodes():
	leaf_low = HuffmanNode(3, 1)
	leaf_high = HuffmanNode(200, 1)
	internal = HuffmanNode(None, 1, HuffmanNode(0, 0), HuffmanNode(1, 1), order=300)
	assert leaf_low < leaf_high
	assert leaf_high < internal
	assert not internal < leaf_low
	assert HuffmanNode(9, 0) < leaf_low
