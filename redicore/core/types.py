"""
Data types shared by builders, decoders and the command facade.

Pop results are named tuples so they unpack like the plain tuples the
server sends: ``key, entries = result``.
"""

from enum import Enum
from typing import Any, List, NamedTuple

from .constants import KW_MIN, KW_MAX, KW_LIB_NAME, KW_LIB_VER


class Order(Enum):
    """Generic ordering used by sorted-set range helpers."""

    ASCENDING = 'ascending'
    DESCENDING = 'descending'

    def to_min_max(self):
        """Map ASCENDING to MinMaxModifier.MIN and DESCENDING to MAX."""
        return MinMaxModifier.from_order(self)


class MinMaxModifier(Enum):
    """Which end of a sorted set to pop from."""

    MIN = KW_MIN
    MAX = KW_MAX

    @classmethod
    def from_order(cls, order):
        if order is Order.ASCENDING:
            return cls.MIN
        if order is Order.DESCENDING:
            return cls.MAX
        raise ValueError(f'not an Order: {order!r}')

    def to_order(self):
        return Order.ASCENDING if self is MinMaxModifier.MIN else Order.DESCENDING


class SetInfoAttr(Enum):
    """Attributes accepted by CLIENT SETINFO."""

    LIBRARY_NAME = KW_LIB_NAME
    LIBRARY_VERSION = KW_LIB_VER


class ScoredEntry(NamedTuple):
    """A sorted set member paired with its score."""

    member: Any
    score: float


class PopResult(NamedTuple):
    """Single entry popped by BZPOPMIN/BZPOPMAX, with its source key."""

    key: Any
    entry: ScoredEntry


class BatchPopResult(NamedTuple):
    """Entries popped by BZMPOP, in server order, with their source key."""

    key: Any
    entries: List[ScoredEntry]
