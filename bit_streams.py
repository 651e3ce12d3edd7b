# filename: bit_streams.py

import io

from bitarray import bitarray
from bitarray.util import ba2int, int2ba

BLOCK = 4096
END_OF_INPUT = -1


class BitInputStream:
    """Reads big-endian bit fields from a seekable binary source.

    `source` may be a binary file object opened for reading, or any
    bytes-like value.
    """

    def __init__(self, source):
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))
        self.source = source
        self.bits_read = 0
        self._bits = bitarray()
        self._pos = 0
        self._exhausted = False

    def _fill(self, needed):
        while len(self._bits) - self._pos < needed and not self._exhausted:
            chunk = self.source.read(BLOCK)
            if not chunk:
                self._exhausted = True
                break
            # Drop what has already been consumed before growing the buffer
            del self._bits[:self._pos]
            self._pos = 0
            self._bits.frombytes(chunk)

    def read_bits(self, n):
        """Return the next `n` bits as an unsigned int, or END_OF_INPUT."""
        self._fill(n)
        available = len(self._bits) - self._pos
        if available < n:
            self._pos = len(self._bits)
            self.bits_read += available
            return END_OF_INPUT
        value = ba2int(self._bits[self._pos:self._pos + n])
        self._pos += n
        self.bits_read += n
        return value

    def reset(self):
        self.source.seek(0)
        self._bits = bitarray()
        self._pos = 0
        self._exhausted = False
        self.bits_read = 0

    def close(self):
        self.source.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class BitOutputStream:
    """Buffers big-endian bit fields and writes them to a binary sink.

    Whole bytes go to the sink a block at a time; the last partial byte is
    padded with zero bits by flush().
    """

    def __init__(self, sink):
        self.sink = sink
        self.bits_written = 0
        self._bits = bitarray()

    def write_bits(self, n, value):
        if n <= 0:
            return
        self._bits.extend(int2ba(value & ((1 << n) - 1), length=n))
        self.bits_written += n
        if len(self._bits) >= BLOCK * 8:
            self._write_whole_bytes()

    def _write_whole_bytes(self):
        whole = len(self._bits) - len(self._bits) % 8
        if whole:
            self.sink.write(self._bits[:whole].tobytes())
            del self._bits[:whole]

    def flush(self):
        self._write_whole_bytes()
        if self._bits:
            # tobytes() pads the final byte with zero bits
            self.sink.write(self._bits.tobytes())
            self._bits = bitarray()
        if hasattr(self.sink, "flush"):
            self.sink.flush()

    def close(self):
        self.flush()
        self.sink.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        # A failed run must not commit its buffered tail
        if exc_type is None:
            self.close()
        else:
            self.sink.close()
