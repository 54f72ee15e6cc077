"""
redicore Network Module

Request/reply connections providing the execute primitive used by the
command facades.
"""

from .connection import Connection, AsyncConnection

__all__ = ['Connection', 'AsyncConnection']
