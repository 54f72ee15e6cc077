"""
redicore Utility Functions

Provides conversions between wire values and Python values, server version
parsing, and number formatting shared by the builders and the connection.
"""

import math
from decimal import Decimal


def to_bytes(value, encoding='utf-8'):
    """
    Convert a command token to bytes.

    Args:
        value: bytes, str, int, or float - Token to convert
        encoding: str - Encoding for str tokens (default: utf-8)

    Returns:
        bytes: Token as bytes

    Raises:
        TypeError: If the value has no wire representation
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode(encoding)
    if isinstance(value, bool):
        raise TypeError('bool is not a valid command token')
    if isinstance(value, int):
        return str(value).encode('ascii')
    if isinstance(value, float):
        return format_number(value).encode('ascii')
    raise TypeError(f'Cannot encode type {type(value).__name__} as a command token')


def to_str(value, encoding='utf-8'):
    """
    Convert value to string.

    Args:
        value: Any - Value to convert
        encoding: str - Encoding for bytes (default: utf-8)

    Returns:
        str: Value as string
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode(encoding)
    if value is None:
        return ''
    return str(value)


def format_number(value):
    """
    Format a finite number as a plain decimal string.

    Integral values print without a fractional part (1.0 -> '1'); other
    values keep full round-trip precision and never use exponent notation
    (1e-07 -> '0.0000001'). Output is locale independent.

    Args:
        value: int or float - Finite number

    Returns:
        str: Decimal representation
    """
    if isinstance(value, int):
        return str(value)
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if 'e' in text or 'E' in text:
        text = format(Decimal(text), 'f')
    return text


def parse_score(value):
    """
    Parse a sorted set score from a reply element.

    Accepts RESP2 bulk strings (b'1.5', b'inf', b'-inf') and native numbers
    (RESP3 doubles). Padding and underscore digit separators, which
    float() would tolerate, are rejected.

    Args:
        value: bytes, str, int, or float - Score element

    Returns:
        float: Parsed score

    Raises:
        ValueError: If the element is not numeric
    """
    if isinstance(value, bool):
        raise ValueError('bool is not a score')
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, bytes):
        value = value.decode('ascii')
    if not isinstance(value, str):
        raise ValueError(f'score has type {type(value).__name__}')
    if '_' in value or value != value.strip():
        raise ValueError(f'malformed score {value!r}')
    score = float(value)
    if math.isnan(score):
        raise ValueError('score is NaN')
    return score


def parse_version(value):
    """
    Parse a dotted version string into a comparable tuple.

    Non-numeric trailing parts are ignored ('7.2.4-rc1' -> (7, 2, 4)).

    Args:
        value: str, bytes, or tuple - Version to parse

    Returns:
        tuple: Version components as ints
    """
    if isinstance(value, tuple):
        return value
    value = to_str(value).strip()
    parts = []
    for part in value.split('.'):
        digits = ''
        for ch in part:
            if not ch.isdigit():
                break
            digits += ch
        if not digits:
            break
        parts.append(int(digits))
        if len(digits) != len(part):
            break
    return tuple(parts)


def parse_info(text):
    """
    Parse an INFO reply into a dictionary.

    Args:
        text: bytes or str - INFO payload ('key:value' lines, '#' sections)

    Returns:
        dict: {key: value} with str keys and values
    """
    result = {}
    for line in to_str(text).splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        key, sep, value = line.partition(':')
        if sep:
            result[key] = value
    return result
