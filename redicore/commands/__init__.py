"""
redicore Commands Module

- builder: token lists for BZMPOP, BZPOPMIN, BZPOPMAX, CLIENT SETINFO
- decoder: typed results from raw replies, selected by command name
- core: CoreCommands / AsyncCoreCommands facades
"""

from .builder import (
    format_timeout,
    build_bzmpop,
    build_bzpop,
    build_bzpopmin,
    build_bzpopmax,
    build_client_setinfo,
)
from .decoder import (
    decode_bzmpop,
    decode_bzpop,
    ok_to_boolean,
    decode_reply,
)
from .core import CoreCommands, AsyncCoreCommands

__all__ = [
    'format_timeout',
    'build_bzmpop',
    'build_bzpop',
    'build_bzpopmin',
    'build_bzpopmax',
    'build_client_setinfo',
    'decode_bzmpop',
    'decode_bzpop',
    'ok_to_boolean',
    'decode_reply',
    'CoreCommands',
    'AsyncCoreCommands',
]
