"""
Tests for redicore/utils.py and redicore/config.py
"""

import pytest

from redicore.config import Config, DEFAULT_CONFIG, get_config, init_config
from redicore.utils import (
    to_bytes, to_str, format_number, parse_score, parse_version, parse_info
)


def test_to_bytes():
    assert to_bytes(b'abc') == b'abc'
    assert to_bytes('abc') == b'abc'
    assert to_bytes(bytearray(b'xy')) == b'xy'
    assert to_bytes(12) == b'12'
    assert to_bytes(0.5) == b'0.5'
    assert to_bytes(2.0) == b'2'
    with pytest.raises(TypeError):
        to_bytes(None)


def test_to_str():
    assert to_str(b'abc') == 'abc'
    assert to_str('abc') == 'abc'
    assert to_str(None) == ''
    assert to_str(3) == '3'


def test_format_number():
    assert format_number(3) == '3'
    assert format_number(3.0) == '3'
    assert format_number(0.1) == '0.1'
    assert format_number(2.5e-05) == '0.000025'
    assert format_number(123456.789) == '123456.789'


def test_parse_score():
    assert parse_score(b'1.5') == 1.5
    assert parse_score('3') == 3.0
    assert parse_score(7) == 7.0
    assert parse_score(b'+inf') == float('inf')
    assert parse_score(b'-inf') == float('-inf')
    for bad in (b'x', None, True, b'nan', [b'1'], b'1_000', '1_0.5', ' 1.5 ', b'1.5\r\n'):
        with pytest.raises(ValueError):
            parse_score(bad)


def test_parse_version():
    assert parse_version('7.2.4') == (7, 2, 4)
    assert parse_version(b'7.1.242') == (7, 1, 242)
    assert parse_version('7.2.4-rc1') == (7, 2, 4)
    assert parse_version('255.255.255') == (255, 255, 255)
    assert parse_version((6, 2)) == (6, 2)
    assert parse_version('7.0.15') < parse_version('7.1.242') <= parse_version('7.2.0')


def test_parse_info():
    info = parse_info(b'# Server\r\nredis_version:7.2.4\r\nos:Linux 6.1 x86_64\r\n\r\n# Clients\r\n')
    assert info == {'redis_version': '7.2.4', 'os': 'Linux 6.1 x86_64'}


def test_config_defaults():
    """Test Config defaults and key filtering."""
    print("Testing Config...")

    config = Config({'port': 6380, 'unknown': 1})
    assert config.get('port') == 6380
    assert config.get('host') == DEFAULT_CONFIG['host']
    assert config.get('unknown') is None
    assert config.get('lib_name') == 'redicore'
    assert config.get('setinfo_min_version') == '7.1.242'

    assert config.set('socket_timeout', 5) is True
    assert config.set('nope', 1) is False
    assert config.get_all()['socket_timeout'] == 5

    print("  [OK] Config")


def test_global_config():
    try:
        config = init_config({'host': 'redis.example'})
        assert get_config() is config
        assert get_config().get('host') == 'redis.example'
    finally:
        init_config()
    assert get_config().get('host') == 'localhost'
