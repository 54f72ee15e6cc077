"""
redicore Features Module

Cross-cutting behaviour layered over plain command execution:
- identification: one-time CLIENT SETINFO handshake per context
"""

from .identification import (
    IdentificationState,
    get_identification_state,
    default_lib_name,
    default_lib_version,
)

__all__ = [
    'IdentificationState',
    'get_identification_state',
    'default_lib_name',
    'default_lib_version',
]
