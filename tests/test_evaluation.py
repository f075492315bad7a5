import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
EVAL_DIR = os.path.join(REPO_ROOT, 'evaluation')
if EVAL_DIR not in sys.path:
	sys.path.insert(0, EVAL_DIR)

import evaluation


def test_parse_pytest_verbose_output():
	output = '\n'.join([
		'tests/test_huffman_core.py::test_aab_codes_pinned PASSED         [ 10%]',
		'tests/test_huffman_bits.py::test_writer_empty FAILED             [ 20%]',
		'tests/test_huffman_service.py::test_performance_5mb_baseline SKIPPED (slow) [ 30%]',
		'collected 3 items',
	])
	tests = evaluation.parse_pytest_verbose_output(output)
	assert [(t['name'], t['outcome']) for t in tests] == [
		('test_aab_codes_pinned', 'passed'),
		('test_writer_empty', 'failed'),
		('test_performance_5mb_baseline', 'skipped'),
	]
	assert tests[0]['nodeid'] == 'tests/test_huffman_core.py::test_aab_codes_pinned'


def test_environment_info_keys():
	info = evaluation.get_environment_info()
	assert {'python_version', 'platform', 'git_commit', 'git_branch', 'codec_config'} <= set(info)


def test_environment_info_records_codec_config(monkeypatch):
	monkeypatch.setenv('HUFFMAN_MAX_OUTPUT_LENGTH', '2048')
	monkeypatch.setenv('HUFFMAN_LOG_CODE_TABLE', '1')
	info = evaluation.get_environment_info()
	assert info['codec_config'] == {'max_output_length': 2048, 'log_code_table': True}
