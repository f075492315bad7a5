# filename: huffman_bits.py

from huffman_errors import TruncatedBitstreamError


class BitWriter:
    """Packs bits most-significant-bit first into a byte buffer."""

    def __init__(self):
        self._out = bytearray()
        self._acc = 0
        self._acc_bits = 0
        self._bit_count = 0
        self._closed = False

    @property
    def bit_count(self):
        # Meaningful bits only, padding excluded.
        return self._bit_count

    def write_bit(self, bit):
        self.write_bits(1 if bit else 0, 1)

    def write_bits(self, value, count):
        if self._closed:
            raise ValueError("write to closed BitWriter")
        if count < 0:
            raise ValueError("bit count must be non-negative")
        if value >> count:
            raise ValueError(f"value {value} does not fit in {count} bits")
        self._acc = (self._acc << count) | value
        self._acc_bits += count
        self._bit_count += count
        while self._acc_bits >= 8:
            self._acc_bits -= 8
            self._out.append((self._acc >> self._acc_bits) & 0xFF)
        self._acc &= (1 << self._acc_bits) - 1

    def write_code(self, code):
        # code is a '0'/'1' string as produced by HuffmanLogic.generate_codes
        if code:
            self.write_bits(int(code, 2), len(code))

    def close(self):
        """Flush the partial byte, zero-padded, and return the buffer."""
        if not self._closed:
            if self._acc_bits:
                pad_bits = 8 - self._acc_bits
                self._out.append((self._acc << pad_bits) & 0xFF)
                self._acc = 0
                self._acc_bits = 0
            self._closed = True
        return bytes(self._out)


class BitReader:
    """Yields bits MSB-first, stopping at the declared meaningful-bit count.

    Padding bits in the final byte are never returned.
    """

    def __init__(self, data, bit_count):
        if bit_count < 0:
            raise ValueError("bit count must be non-negative")
        if bit_count > len(data) * 8:
            raise TruncatedBitstreamError(
                f"buffer holds {len(data) * 8} bits, {bit_count} declared"
            )
        self._data = data
        self._bit_count = bit_count
        self._pos = 0

    @property
    def position(self):
        return self._pos

    @property
    def remaining(self):
        return self._bit_count - self._pos

    def read_bit(self):
        if self._pos >= self._bit_count:
            raise TruncatedBitstreamError(
                f"bitstream exhausted after {self._bit_count} bits"
            )
        byte = self._data[self._pos >> 3]
        bit = (byte >> (7 - (self._pos & 7))) & 1
        self._pos += 1
        return bit

    def read_bits(self, count):
        if count > self.remaining:
            raise TruncatedBitstreamError(
                f"requested {count} bits, {self.remaining} remaining"
            )
        value = 0
        for _ in range(count):
            value = (value << 1) | self.read_bit()
        return value

    def __iter__(self):
        while self._pos < self._bit_count:
            yield self.read_bit()
