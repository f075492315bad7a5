import os
import sys
import logging
import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

import huffman_config
from huffman_config import CodecConfig


def test_defaults():
	config = CodecConfig()
	assert config.max_output_length == huffman_config.DEFAULT_MAX_OUTPUT_LENGTH
	assert config.log_code_table is False


def test_negative_limit_rejected():
	with pytest.raises(ValueError):
		CodecConfig(max_output_length=-1)


def test_from_env(monkeypatch):
	monkeypatch.setenv('HUFFMAN_MAX_OUTPUT_LENGTH', '1024')
	monkeypatch.setenv('HUFFMAN_LOG_CODE_TABLE', 'yes')
	config = CodecConfig.from_env()
	assert config.max_output_length == 1024
	assert config.log_code_table is True


def test_from_env_defaults(monkeypatch):
	monkeypatch.delenv('HUFFMAN_MAX_OUTPUT_LENGTH', raising=False)
	monkeypatch.delenv('HUFFMAN_LOG_CODE_TABLE', raising=False)
	assert CodecConfig.from_env() == CodecConfig()


def test_configure_logging_reads_env(monkeypatch):
	calls = []
	monkeypatch.setattr(logging, 'basicConfig', lambda **kwargs: calls.append(kwargs))
	monkeypatch.setenv('HUFFMAN_LOG_LEVEL', 'debug')
	huffman_config.configure_logging()
	assert calls == [{'level': logging.DEBUG, 'format': huffman_config.LOG_FORMAT}]


def test_configure_logging_unknown_level_falls_back(monkeypatch):
	calls = []
	monkeypatch.setattr(logging, 'basicConfig', lambda **kwargs: calls.append(kwargs))
	huffman_config.configure_logging('chatty')
	assert calls[0]['level'] == logging.WARNING
