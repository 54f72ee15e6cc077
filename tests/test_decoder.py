"""
Tests for redicore/commands/decoder.py

Covers absent replies, BZMPOP/BZPOP shapes, OK acknowledgement and
rejection of malformed replies.
"""

import copy

import pytest

from redicore.commands.decoder import (
    decode_bzmpop, decode_bzpop, ok_to_boolean, decode_reply
)
from redicore.core.types import ScoredEntry, PopResult, BatchPopResult
from redicore.exceptions import ProtocolDecodeError


def test_absent_reply():
    """The null reply decodes to None for every pop command."""
    assert decode_bzmpop(None) is None
    assert decode_bzpop(None) is None
    for command in ('BZMPOP', 'BZPOPMIN', 'BZPOPMAX'):
        assert decode_reply(command, None) is None


def test_bzmpop_entries_keep_order():
    for n in (0, 1, 5):
        raw = [[f'm{i}'.encode(), str(i + 0.5).encode()] for i in range(n)]
        result = decode_bzmpop([b'key', raw])
        assert isinstance(result, BatchPopResult)
        assert result.key == b'key'
        assert len(result.entries) == n
        assert [entry.member for entry in result.entries] == [f'm{i}'.encode() for i in range(n)]
        assert [entry.score for entry in result.entries] == [i + 0.5 for i in range(n)]


def test_bzmpop_empty_entries_is_not_absent():
    result = decode_bzmpop([b'key', []])
    assert result is not None
    assert result.entries == []


def test_bzmpop_unpacks_like_tuple():
    key, entries = decode_bzmpop([b's', [[b'a', b'1.5'], [b'c', b'3.7']]])
    assert key == b's'
    assert entries == [ScoredEntry(b'a', 1.5), ScoredEntry(b'c', 3.7)]
    member, score = entries[0]
    assert (member, score) == (b'a', 1.5)


def test_bzmpop_native_scores():
    """RESP3 doubles arrive as floats and are accepted as-is."""
    result = decode_bzmpop(['s', [['a', 1.5], ['b', 2]]])
    assert result.entries == [ScoredEntry('a', 1.5), ScoredEntry('b', 2.0)]
    assert isinstance(result.entries[1].score, float)


def test_bzmpop_infinite_scores():
    result = decode_bzmpop([b's', [[b'a', b'-inf'], [b'b', b'inf']]])
    assert result.entries[0].score == float('-inf')
    assert result.entries[1].score == float('inf')


def test_bzmpop_malformed():
    bad_replies = [
        b'OK',
        [b'key'],
        [b'key', [[b'a', b'1'], [b'b', b'2']], b'extra'],
        [b'key', b'not-a-list'],
        [b'key', [[b'a']]],
        [b'key', [[b'a', b'1', b'2']]],
        [b'key', [[b'a', b'abc']]],
        [b'key', [[b'a', None]]],
        [b'key', [[b'a', b'nan']]],
        [b'key', [[b'a', b'1_000']]],
        [b'key', [[b'a', b' 1.5 ']]],
    ]
    for reply in bad_replies:
        with pytest.raises(ProtocolDecodeError):
            decode_bzmpop(reply)


def test_bzpop_flat_shape():
    """BZPOPMIN/MAX replies carry member and score as siblings of the key."""
    result = decode_bzpop([b'my-set', b'a', b'1.5'])
    assert result == PopResult(b'my-set', ScoredEntry(b'a', 1.5))
    key, (member, score) = result
    assert key == b'my-set' and member == b'a' and score == 1.5


def test_bzpop_rejects_nested_shape():
    """The batch shape is not accepted by the single-entry decoder."""
    with pytest.raises(ProtocolDecodeError):
        decode_bzpop([b'my-set', [[b'a', b'1.5']]])
    with pytest.raises(ProtocolDecodeError):
        decode_bzpop([b'my-set', b'a'])
    with pytest.raises(ProtocolDecodeError):
        decode_bzpop([b'my-set', b'a', b'x'])
    with pytest.raises(ProtocolDecodeError):
        decode_bzpop(42)


def test_decoders_do_not_mutate_input():
    reply = [b's', [[b'a', b'1.5'], [b'b', b'2']]]
    snapshot = copy.deepcopy(reply)
    decode_bzmpop(reply)
    assert reply == snapshot

    reply = [b's', b'a', b'1.5']
    decode_bzpop(reply)
    assert reply == [b's', b'a', b'1.5']


def test_ok_to_boolean():
    assert ok_to_boolean('OK') is True
    assert ok_to_boolean(b'OK') is True
    assert ok_to_boolean('QUEUED') is False
    assert ok_to_boolean(None) is False
    assert ok_to_boolean(1) is False
    assert ok_to_boolean('ok') is False


def test_decode_reply_dispatch():
    """Decoder choice follows the command name, not the reply shape."""
    assert decode_reply('BZPOPMIN', [b'k', b'm', b'1']) == PopResult(b'k', ScoredEntry(b'm', 1.0))
    assert decode_reply(b'bzmpop', [b'k', []]) == BatchPopResult(b'k', [])
    assert decode_reply('CLIENT', 'OK') is True

    # A BZMPOP-shaped reply handed to the BZPOPMAX decoder is an error
    with pytest.raises(ProtocolDecodeError):
        decode_reply('BZPOPMAX', [b'k', [[b'm', b'1']]])

    with pytest.raises(ProtocolDecodeError):
        decode_reply('GET', b'value')
