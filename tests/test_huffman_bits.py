import os
import sys
import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

from huffman_bits import BitReader, BitWriter
from huffman_errors import TruncatedBitstreamError


def test_writer_packs_msb_first_with_zero_padding():
	writer = BitWriter()
	for bit in (0, 0, 1):
		writer.write_bit(bit)
	assert writer.bit_count == 3
	assert writer.close() == bytes([0b00100000])


def test_writer_spans_byte_boundaries():
	writer = BitWriter()
	writer.write_bits(0b101, 3)
	writer.write_bits(0b11110000, 8)
	writer.write_code('01')
	assert writer.bit_count == 13
	assert writer.close() == bytes([0b10111110, 0b00001000])


def test_writer_full_bytes_have_no_padding():
	writer = BitWriter()
	writer.write_bits(0xABCD, 16)
	assert writer.close() == b'\xab\xcd'
	assert writer.bit_count == 16


def test_writer_empty():
	writer = BitWriter()
	writer.write_code('')
	assert writer.close() == b''
	assert writer.bit_count == 0


def test_writer_rejects_oversized_value():
	with pytest.raises(ValueError):
		BitWriter().write_bits(4, 2)


def test_writer_closed():
	writer = BitWriter()
	writer.write_bit(1)
	assert writer.close() == writer.close() == b'\x80'
	with pytest.raises(ValueError):
		writer.write_bit(1)


def test_reader_stops_at_meaningful_bits():
	reader = BitReader(bytes([0b00111111]), 3)
	assert list(reader) == [0, 0, 1]
	assert reader.remaining == 0
	with pytest.raises(TruncatedBitstreamError):
		reader.read_bit()


def test_reader_groups():
	reader = BitReader(b'\xab\xcd', 16)
	assert reader.read_bits(4) == 0xA
	assert reader.read_bits(8) == 0xBC
	assert reader.position == 12
	with pytest.raises(TruncatedBitstreamError):
		reader.read_bits(5)
	assert reader.read_bits(4) == 0xD


def test_reader_rejects_short_buffer():
	with pytest.raises(TruncatedBitstreamError):
		BitReader(b'\x00', 9)


def test_writer_reader_agree():
	codes = ['1', '01', '001', '0001', '00001', '000001', '0000001', '00000001', '0']
	writer = BitWriter()
	for code in codes:
		writer.write_code(code)
	reader = BitReader(writer.close(), writer.bit_count)
	assert ''.join(str(bit) for bit in reader) == ''.join(codes)
