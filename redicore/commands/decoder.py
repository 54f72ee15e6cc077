"""
Reply decoders for the blocking sorted-set pop family and CLIENT SETINFO.

Decoders are pure: they never mutate the reply and never perform I/O.
Which decoder applies is decided by the command that produced the reply,
never by looking at the reply alone (decode_reply takes the command name).

Reply shapes:
    BZMPOP          nil | [key, [[member, score], ...]]
    BZPOPMIN/MAX    nil | [key, member, score]
    CLIENT SETINFO  +OK
"""

from ..core.constants import BZMPOP, BZPOPMIN, BZPOPMAX, CLIENT, OK
from ..core.types import ScoredEntry, PopResult, BatchPopResult
from ..exceptions import ProtocolDecodeError
from ..utils import parse_score


def _as_sequence(reply, arity, what):
    if not isinstance(reply, (list, tuple)):
        raise ProtocolDecodeError(f'{what}: expected an array, got {type(reply).__name__}')
    if arity is not None and len(reply) != arity:
        raise ProtocolDecodeError(f'{what}: expected {arity} elements, got {len(reply)}')
    return reply


def _scored_entry(member, score, what):
    try:
        return ScoredEntry(member, parse_score(score))
    except (ValueError, UnicodeDecodeError):
        raise ProtocolDecodeError(f'{what}: score is not a number: {score!r}') from None


def decode_bzmpop(reply):
    """
    Decode a BZMPOP reply.

    Args:
        reply: None or [key, [[member, score], ...]]

    Returns:
        BatchPopResult or None if the server timeout expired. An empty entry
        list is kept as an empty list.

    Raises:
        ProtocolDecodeError: If the reply shape does not match
    """
    if reply is None:
        return None
    key, raw_entries = _as_sequence(reply, 2, 'BZMPOP reply')
    raw_entries = _as_sequence(raw_entries, None, 'BZMPOP entries')

    entries = []
    for raw in raw_entries:
        member, score = _as_sequence(raw, 2, 'BZMPOP entry')
        entries.append(_scored_entry(member, score, 'BZMPOP entry'))
    return BatchPopResult(key, entries)


def decode_bzpop(reply):
    """
    Decode a BZPOPMIN or BZPOPMAX reply.

    Member and score are siblings of the key here, not a nested pair.

    Args:
        reply: None or [key, member, score]

    Returns:
        PopResult or None if the server timeout expired

    Raises:
        ProtocolDecodeError: If the reply shape does not match
    """
    if reply is None:
        return None
    key, member, score = _as_sequence(reply, 3, 'BZPOP reply')
    return PopResult(key, _scored_entry(member, score, 'BZPOP reply'))


def ok_to_boolean(reply):
    """Return True for the literal OK acknowledgement, False for anything else."""
    if isinstance(reply, bytes):
        return reply == OK.encode('ascii')
    return reply == OK


_DECODERS = {
    BZMPOP: decode_bzmpop,
    BZPOPMIN: decode_bzpop,
    BZPOPMAX: decode_bzpop,
    CLIENT: ok_to_boolean,
}


def decode_reply(command, reply):
    """
    Decode a reply with the decoder registered for the command.

    Args:
        command: str - Command name that produced the reply (e.g. 'BZMPOP')
        reply: Raw reply value

    Returns:
        Decoded result

    Raises:
        ProtocolDecodeError: If no decoder is registered for the command
    """
    name = command.decode('ascii') if isinstance(command, bytes) else command
    decoder = _DECODERS.get(name.upper())
    if decoder is None:
        raise ProtocolDecodeError(f'no decoder for command {name!r}')
    return decoder(reply)
