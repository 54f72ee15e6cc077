"""
redicore Core Module

Shared building blocks used by the command layer:
- constants: protocol markers, command names and keywords
- protocol: RESP2 request encoder and reply parser
- types: modifiers, attributes and pop result types
"""

from .constants import (
    BZMPOP,
    BZPOPMIN,
    BZPOPMAX,
    CLIENT,
    SETINFO,
    CRLF,
    SETINFO_MIN_VERSION,
)
from .protocol import encode_command, RESPReader, INCOMPLETE
from .types import (
    MinMaxModifier,
    Order,
    SetInfoAttr,
    ScoredEntry,
    PopResult,
    BatchPopResult,
)

__all__ = [
    'BZMPOP',
    'BZPOPMIN',
    'BZPOPMAX',
    'CLIENT',
    'SETINFO',
    'CRLF',
    'SETINFO_MIN_VERSION',
    'encode_command',
    'RESPReader',
    'INCOMPLETE',
    'MinMaxModifier',
    'Order',
    'SetInfoAttr',
    'ScoredEntry',
    'PopResult',
    'BatchPopResult',
]
