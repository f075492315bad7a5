# filename: huffman_service.py

import logging
import struct
from dataclasses import dataclass

from huffman_bits import BitReader, BitWriter
from huffman_config import CodecConfig
from huffman_core import HuffmanLogic, count_frequencies
from huffman_errors import (
    InvariantViolationError,
    MalformedArtifactError,
    TruncatedBitstreamError,
)

logger = logging.getLogger(__name__)

MAGIC = b"HUFF"
FORMAT_VERSION = 1
# magic, version, original length, meaningful bit count, tree section length
HEADER = struct.Struct(">4sBQQH")


@dataclass(frozen=True)
class CompressionStats:
    original_bytes: int
    compressed_bytes: int
    payload_bits: int
    distinct_symbols: int

    @property
    def average_code_length(self):
        """Bits per input byte in the body, header excluded."""
        if not self.original_bytes:
            return 0.0
        return self.payload_bits / self.original_bytes

    @property
    def ratio(self):
        if not self.compressed_bytes:
            return 0.0
        return self.original_bytes / self.compressed_bytes


class HuffmanService:
    def __init__(self, config=None):
        self.logic = HuffmanLogic()
        self.config = config if config is not None else CodecConfig.from_env()

    def compress(self, data):
        data = bytes(data)
        if not data:
            return HEADER.pack(MAGIC, FORMAT_VERSION, 0, 0, 0)

        freqs = count_frequencies(data)
        tree = self.logic.build_tree(freqs)
        codes = self.logic.generate_codes(tree)
        tree_bytes = self.logic.serialize_tree(tree)
        if self.config.log_code_table:
            for char, code in sorted(codes.items(), key=lambda item: (len(item[1]), item[0])):
                logger.debug("code %3d -> %s", char, code)

        # Integer form of each code so the writer never touches strings per byte.
        packed_codes = {char: (int(code, 2), len(code)) for char, code in codes.items()}
        writer = BitWriter()
        for char in data:
            entry = packed_codes.get(char)
            if entry is None:
                logger.error("no code for byte %d present in input", char)
                raise InvariantViolationError(f"no code for byte {char}")
            writer.write_bits(*entry)
        body = writer.close()

        header = HEADER.pack(MAGIC, FORMAT_VERSION, len(data), writer.bit_count, len(tree_bytes))
        logger.debug(
            "compressed %d bytes (%d symbols) into %d bits + %d header bytes",
            len(data), len(freqs), writer.bit_count, len(header) + len(tree_bytes),
        )
        return header + tree_bytes + body

    def decompress(self, artifact):
        artifact = bytes(artifact)
        if len(artifact) < HEADER.size:
            logger.error("artifact of %d bytes is shorter than header", len(artifact))
            raise MalformedArtifactError("artifact shorter than header")
        magic, version, length, bit_count, tree_len = HEADER.unpack_from(artifact)
        if magic != MAGIC:
            logger.error("bad magic %r", magic)
            raise MalformedArtifactError(f"bad magic {magic!r}")
        if version != FORMAT_VERSION:
            logger.error("unsupported format version %d", version)
            raise MalformedArtifactError(f"unsupported format version {version}")
        if length > self.config.max_output_length:
            logger.error("declared length %d exceeds limit %d", length, self.config.max_output_length)
            raise MalformedArtifactError(
                f"declared length {length} exceeds limit {self.config.max_output_length}"
            )

        tree_start = HEADER.size
        body_start = tree_start + tree_len
        if len(artifact) < body_start:
            logger.error("tree section truncated")
            raise MalformedArtifactError("tree section truncated")
        tree = self.logic.parse_tree(artifact[tree_start:body_start])
        body = artifact[body_start:]

        if tree is None:
            if length or bit_count or body:
                logger.error("artifact declares no symbols but carries data")
                raise MalformedArtifactError("no symbols declared but length is non-zero")
            return b""
        if not length:
            logger.error("artifact carries a tree but declares no output")
            raise MalformedArtifactError("tree present but declared length is zero")

        if len(body) > (bit_count + 7) // 8:
            logger.error("%d bytes trail the bitstream", len(body) - (bit_count + 7) // 8)
            raise MalformedArtifactError("trailing bytes after bitstream")

        try:
            reader = BitReader(body, bit_count)
            out = self._walk(tree, reader, length)
        except TruncatedBitstreamError as e:
            logger.error("truncated bitstream: %s", e)
            raise
        if reader.remaining:
            logger.error("%d meaningful bits left after %d bytes", reader.remaining, length)
            raise MalformedArtifactError("bit count disagrees with declared length")
        return out

    def _walk(self, root, reader, length):
        out = bytearray()
        node = root
        while len(out) < length:
            node = node.right if reader.read_bit() else node.left
            if node.is_leaf:
                if node.char is None:
                    raise MalformedArtifactError("bitstream reaches placeholder node")
                out.append(node.char)
                node = root
        return bytes(out)

    def codes(self, data):
        """Code table ('0'/'1' strings) that compress would use for data."""
        data = bytes(data)
        if not data:
            return {}
        return self.logic.generate_codes(self.logic.build_tree(count_frequencies(data)))

    def stats(self, data):
        data = bytes(data)
        artifact = self.compress(data)
        _, _, _, bit_count, _ = HEADER.unpack_from(artifact)
        return CompressionStats(
            original_bytes=len(data),
            compressed_bytes=len(artifact),
            payload_bits=bit_count,
            distinct_symbols=len(set(data)),
        )


def encode(data):
    return HuffmanService().compress(data)


def decode(artifact):
    return HuffmanService().decompress(artifact)
