"""Tests for environment configuration helpers"""

import logging

import pytest

from sshdscan.utils import get_bool_env, get_int_env, get_max_file_size_bytes, get_str_env, setup_logging


class TestEnvHelpers:
    def test_int_env(self, monkeypatch):
        assert get_int_env('SSHDSCAN_TEST_INT') == 0
        monkeypatch.setenv('SSHDSCAN_TEST_INT', '42')
        assert get_int_env('SSHDSCAN_TEST_INT') == 42
        monkeypatch.setenv('SSHDSCAN_TEST_INT', 'lots')
        assert get_int_env('SSHDSCAN_TEST_INT') == 0

    def test_str_env(self, monkeypatch):
        assert get_str_env('SSHDSCAN_TEST_STR', 'x') == 'x'
        monkeypatch.setenv('SSHDSCAN_TEST_STR', 'y')
        assert get_str_env('SSHDSCAN_TEST_STR', 'x') == 'y'

    @pytest.mark.parametrize(
        'value,expected',
        [('true', True), ('YES', True), ('1', True), ('false', False), ('No', False), ('0', False), ('maybe', True)],
    )
    def test_bool_env(self, monkeypatch, value, expected):
        monkeypatch.setenv('SSHDSCAN_TEST_BOOL', value)
        assert get_bool_env('SSHDSCAN_TEST_BOOL', True) is expected

    def test_bool_env_default(self):
        assert get_bool_env('SSHDSCAN_TEST_BOOL', False) is False


class TestMaxFileSize:
    def test_default(self):
        assert get_max_file_size_bytes() == 10 * 1024 * 1024

    def test_override(self, monkeypatch):
        monkeypatch.setenv('SSHDSCAN_MAX_FILE_SIZE_MB', '2')
        assert get_max_file_size_bytes() == 2 * 1024 * 1024

    @pytest.mark.parametrize('value', ['0', '-5', 'big'])
    def test_invalid_falls_back(self, monkeypatch, value):
        monkeypatch.setenv('SSHDSCAN_MAX_FILE_SIZE_MB', value)
        assert get_max_file_size_bytes() == 10 * 1024 * 1024


class TestSetupLogging:
    def test_unknown_level_does_not_raise(self, monkeypatch):
        monkeypatch.setenv('SSHDSCAN_LOG_LEVEL', 'chatty')
        setup_logging()

    def test_known_level(self, monkeypatch, caplog):
        monkeypatch.setenv('SSHDSCAN_LOG_LEVEL', 'debug')
        setup_logging()
        with caplog.at_level(logging.INFO, logger='sshdscan'):
            logging.getLogger('sshdscan.test').info('hello')
        assert 'hello' in caplog.text
