"""
Command builders for the blocking sorted-set pop family and CLIENT SETINFO.

Each builder validates its parameters and returns the exact token list the
server expects. Nothing here performs I/O; invalid combinations raise
InvalidArgumentError before any protocol interaction.

Grammar:
    BZMPOP <timeout> <numkeys> <key> [<key> ...] <MIN|MAX> [COUNT <count>]
    BZPOPMIN <key> [<key> ...] <timeout>
    BZPOPMAX <key> [<key> ...] <timeout>
    CLIENT SETINFO <LIB-NAME|LIB-VER> <value>

BZMPOP and BZPOPMIN/BZPOPMAX place their keywords differently, so they are
built separately.
"""

import math

from ..core.constants import (
    BZMPOP, BZPOPMIN, BZPOPMAX, CLIENT, SETINFO, KW_COUNT
)
from ..core.types import MinMaxModifier, Order, SetInfoAttr
from ..exceptions import InvalidArgumentError
from ..utils import format_number


def format_timeout(timeout):
    """
    Validate and format a server-side timeout in seconds.

    int and float timeouts share one path: 2 and 2.0 both produce '2',
    0.5 produces '0.5', and no value is ever written in exponent notation.
    A timeout of 0 blocks indefinitely on the server.

    Args:
        timeout: int or float - Non-negative number of seconds

    Returns:
        str: Timeout token

    Raises:
        InvalidArgumentError: If timeout is negative, not finite, or not a number
    """
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise InvalidArgumentError(f'timeout must be a number, got {type(timeout).__name__}')
    if isinstance(timeout, float) and not math.isfinite(timeout):
        raise InvalidArgumentError('timeout must be finite')
    if timeout < 0:
        raise InvalidArgumentError('timeout must not be negative')
    return format_number(timeout)


def normalize_keys(keys):
    """
    Turn a single key or a sequence of keys into a non-empty list.

    Args:
        keys: str, bytes, or sequence of keys

    Returns:
        list: Keys in caller order

    Raises:
        InvalidArgumentError: If no keys were given or keys is not iterable
    """
    if isinstance(keys, (str, bytes, bytearray, memoryview)):
        return [keys]
    if keys is None:
        raise InvalidArgumentError('at least one key should be provided')
    try:
        keys = list(keys)
    except TypeError:
        raise InvalidArgumentError(f'keys must be a key or an iterable of keys, not {type(keys).__name__}') from None
    if not keys:
        raise InvalidArgumentError('at least one key should be provided')
    return keys


def _check_modifier(modifier):
    if isinstance(modifier, Order):
        return modifier.to_min_max()
    if not isinstance(modifier, MinMaxModifier):
        raise InvalidArgumentError(f'modifier must be a MinMaxModifier, got {modifier!r}')
    return modifier


def _check_count(count):
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidArgumentError(f'count must be an integer, got {type(count).__name__}')
    if count <= 0:
        raise InvalidArgumentError('count must be positive')
    return count


def build_bzmpop(timeout, keys, modifier, count=None):
    """
    Build a BZMPOP command.

    Args:
        timeout: int or float - Server-side wait in seconds (0 = forever)
        keys: key or sequence of keys - Sorted sets to check, in order
        modifier: MinMaxModifier or Order - Which end to pop from
        count: int or None - Maximum entries to pop (None = server default of 1)

    Returns:
        list: Command tokens
    """
    keys = normalize_keys(keys)
    tokens = [BZMPOP, format_timeout(timeout), str(len(keys))]
    tokens.extend(keys)
    tokens.append(_check_modifier(modifier).value)
    if count is not None:
        tokens.append(KW_COUNT)
        tokens.append(str(_check_count(count)))
    return tokens


def build_bzpop(keys, timeout, modifier):
    """
    Build a BZPOPMIN or BZPOPMAX command.

    Args:
        keys: key or sequence of keys - Sorted sets to check, in order
        timeout: int or float - Server-side wait in seconds (0 = forever)
        modifier: MinMaxModifier - MIN for BZPOPMIN, MAX for BZPOPMAX

    Returns:
        list: Command tokens
    """
    keys = normalize_keys(keys)
    command = BZPOPMIN if _check_modifier(modifier) is MinMaxModifier.MIN else BZPOPMAX
    return [command] + keys + [format_timeout(timeout)]


def build_bzpopmin(keys, timeout):
    return build_bzpop(keys, timeout, MinMaxModifier.MIN)


def build_bzpopmax(keys, timeout):
    return build_bzpop(keys, timeout, MinMaxModifier.MAX)


def build_client_setinfo(attr, value):
    """
    Build a CLIENT SETINFO command.

    The value is passed through as-is; the server rejects characters it
    does not accept (spaces, newlines) with an error reply.

    Args:
        attr: SetInfoAttr - LIBRARY_NAME or LIBRARY_VERSION
        value: str - Attribute value

    Returns:
        list: Command tokens
    """
    if not isinstance(attr, SetInfoAttr):
        raise InvalidArgumentError(f'attr must be a SetInfoAttr, got {attr!r}')
    if not isinstance(value, (str, bytes)):
        raise InvalidArgumentError(f'value must be a string, got {type(value).__name__}')
    return [CLIENT, SETINFO, attr.value, value]
