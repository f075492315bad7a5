# filename: huffman_errors.py


class HuffmanError(Exception):
    """Base class for every error raised by the codec."""


class MalformedArtifactError(HuffmanError, ValueError):
    """The artifact header or tree section cannot be parsed."""


class TruncatedBitstreamError(MalformedArtifactError):
    """The bitstream ran out before the declared length was decoded."""


class InvariantViolationError(HuffmanError, RuntimeError):
    """Internal bug: the encoder has no code for a byte of its own input."""
