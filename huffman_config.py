# filename: huffman_config.py

import logging
import os
from dataclasses import dataclass

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# 1 GiB
DEFAULT_MAX_OUTPUT_LENGTH = 1 << 30


def configure_logging(level=None):
    # Host applications normally own logging; this is for scripts and debugging.
    if level is None:
        level = os.environ.get("HUFFMAN_LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class CodecConfig:
    """Knobs for HuffmanService.

    max_output_length caps the original length an artifact may declare, so a
    corrupted header cannot make the decoder allocate without bound.
    log_code_table writes each byte's code at DEBUG level during compress.
    """
    max_output_length: int = DEFAULT_MAX_OUTPUT_LENGTH
    log_code_table: bool = False

    def __post_init__(self):
        if self.max_output_length < 0:
            raise ValueError("max_output_length must be non-negative")

    @classmethod
    def from_env(cls):
        raw_max = os.environ.get("HUFFMAN_MAX_OUTPUT_LENGTH")
        return cls(
            max_output_length=int(raw_max) if raw_max else DEFAULT_MAX_OUTPUT_LENGTH,
            log_code_table=_env_flag("HUFFMAN_LOG_CODE_TABLE", False),
        )
