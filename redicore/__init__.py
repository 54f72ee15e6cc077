"""
redicore - Command construction and reply decoding for Redis core commands.

redicore sits between application code and a Redis connection. It builds
protocol-correct argument lists for the blocking sorted-set pop family and
for client library identification, hands them to a connection's execute
primitive, and decodes the raw replies back into typed results.

Supported commands:
- BZMPOP: pop up to N entries from the first non-empty sorted set
- BZPOPMIN / BZPOPMAX: pop one entry from the first non-empty sorted set
- CLIENT SETINFO: announce library name and version for the connection

Usage:
    from redicore import Connection, CoreCommands, MinMaxModifier

    with Connection('localhost', 6379) as conn:
        commands = CoreCommands(conn)
        result = commands.bzmpop(0.5, 'my-set', MinMaxModifier.MIN, count=2)
        if result is not None:
            key, entries = result
"""

__version__ = '1.0.0'

from .core.types import (
    MinMaxModifier,
    Order,
    SetInfoAttr,
    ScoredEntry,
    PopResult,
    BatchPopResult,
)
from .exceptions import (
    RedisError,
    InvalidArgumentError,
    ProtocolDecodeError,
    ResponseError,
    TransportError,
    RedisConnectionError,
    RedisTimeoutError,
)
from .commands.core import CoreCommands, AsyncCoreCommands
from .features.identification import IdentificationState, get_identification_state
from .network.connection import Connection, AsyncConnection

__all__ = [
    '__version__',
    'MinMaxModifier',
    'Order',
    'SetInfoAttr',
    'ScoredEntry',
    'PopResult',
    'BatchPopResult',
    'RedisError',
    'InvalidArgumentError',
    'ProtocolDecodeError',
    'ResponseError',
    'TransportError',
    'RedisConnectionError',
    'RedisTimeoutError',
    'CoreCommands',
    'AsyncCoreCommands',
    'IdentificationState',
    'get_identification_state',
    'Connection',
    'AsyncConnection',
]
