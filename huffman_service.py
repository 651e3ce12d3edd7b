# filename: huffman_service.py

import io
import logging

from bit_streams import BitInputStream, BitOutputStream
from huffman_core import HuffmanLogic, tree_depth
from huffman_errors import UnsupportedHeaderError
from huffman_header import Header, read_header, write_header
from huffman_payload import read_compressed_bits, write_compressed_bits

logger = logging.getLogger(__name__)


class HuffmanService:
    def __init__(self, header=Header.TREE_HEADER):
        self.logic = HuffmanLogic()
        self.header = header

    def set_header(self, header):
        self.header = header
        logger.info("header set to %s", header.name)

    def compress_stream(self, bit_in, bit_out):
        """Compress everything in `bit_in` into `bit_out`.

        The source is read twice, so it must support reset(). Returns the
        number of bits written, before padding.
        """
        if self.header is not Header.TREE_HEADER:
            raise UnsupportedHeaderError(self.header)

        counts = self.logic.count_frequencies(bit_in)
        root = self.logic.build_tree(counts)
        codes = self.logic.generate_codes(root)
        logger.debug("built tree over %d input bytes, depth %d", root.weight, tree_depth(root))

        start = bit_out.bits_written
        write_header(root, bit_out)
        logger.debug("header is %d bits", bit_out.bits_written - start)

        bit_in.reset()
        write_compressed_bits(bit_in, codes, bit_out)
        return bit_out.bits_written - start

    def decompress_stream(self, bit_in, bit_out):
        """Decode one compressed stream; returns the number of bytes produced."""
        root = read_header(bit_in)
        logger.debug("read tree of depth %d", tree_depth(root))
        return read_compressed_bits(root, bit_in, bit_out)

    def compress(self, data):
        sink = io.BytesIO()
        bit_out = BitOutputStream(sink)
        self.compress_stream(BitInputStream(data), bit_out)
        bit_out.flush()
        compressed = sink.getvalue()
        logger.debug("compressed %d bytes to %d bytes", len(data), len(compressed))
        return compressed

    def decompress(self, data):
        sink = io.BytesIO()
        bit_out = BitOutputStream(sink)
        self.decompress_stream(BitInputStream(data), bit_out)
        bit_out.flush()
        return sink.getvalue()

    def compress_file(self, src, dst):
        with open(src, "rb") as fin, open(dst, "wb") as fout:
            bit_out = BitOutputStream(fout)
            self.compress_stream(BitInputStream(fin), bit_out)
            bit_out.flush()
            return fin.seek(0, io.SEEK_END), fout.tell()

    def decompress_file(self, src, dst):
        with open(src, "rb") as fin, open(dst, "wb") as fout:
            bit_out = BitOutputStream(fout)
            self.decompress_stream(BitInputStream(fin), bit_out)
            bit_out.flush()
            return fin.seek(0, io.SEEK_END), fout.tell()
