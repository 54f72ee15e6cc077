"""
redicore RESP2 Protocol

Request encoding and a streaming reply parser for the Redis Serialization
Protocol version 2 (RESP2).

Requests are always sent as arrays of bulk strings:
    *3\r\n$3\r\nSET\r\n$3\r\nkey\r\n$5\r\nvalue\r\n

Replies map to Python values:
    +OK          -> 'OK' (str)
    -ERR msg     -> ResponseError instance (the connection raises it)
    :42          -> 42
    $5 hello     -> b'hello'
    $-1 / *-1    -> None
    *N ...       -> list (nested arrays allowed)
"""

from .constants import (
    SIMPLE_STRING, ERROR, INTEGER, BULK_STRING, ARRAY, CRLF, MAX_ARRAY_DEPTH
)
from ..exceptions import ResponseError, ProtocolDecodeError
from ..utils import to_bytes

# Returned by RESPReader.parse() when the buffer holds no complete reply.
# None cannot be used because it is a valid (null) reply.
INCOMPLETE = object()


def encode_command(tokens, encoding='utf-8'):
    """
    Encode a command as a RESP2 array of bulk strings.

    Args:
        tokens: sequence - Command name followed by its arguments
                (bytes, str, int, or float)
        encoding: str - Encoding for str tokens

    Returns:
        bytes: Encoded request

    Raises:
        TypeError: If a token has no wire representation
    """
    parts = [b'*' + str(len(tokens)).encode('ascii') + CRLF]
    for token in tokens:
        data = to_bytes(token, encoding)
        parts.append(b'$' + str(len(data)).encode('ascii') + CRLF)
        parts.append(data)
        parts.append(CRLF)
    return b''.join(parts)


class RESPReader:
    """
    Streaming RESP2 reply parser.

    Bytes are appended with feed(); parse() returns the next complete reply
    or INCOMPLETE. A reply is consumed only once it is complete, so a reply
    split across several socket reads parses correctly.

    Usage:
        reader = RESPReader()
        reader.feed(chunk)
        reply = reader.parse()
        if reply is not INCOMPLETE:
            ...
    """

    __slots__ = (
        '_buffer',   # bytearray: Received, not yet consumed data
        '_offset',   # int: Start of the next unparsed reply
    )

    def __init__(self):
        self._buffer = bytearray()
        self._offset = 0

    def feed(self, data):
        """
        Append received bytes to the buffer.

        Consumed bytes are dropped first so the buffer does not grow with
        the lifetime of the connection.
        """
        if not data:
            return
        if self._offset:
            del self._buffer[:self._offset]
            self._offset = 0
        self._buffer.extend(data)

    def parse(self):
        """
        Parse the next complete reply.

        Returns:
            The decoded reply, or INCOMPLETE if more data is needed

        Raises:
            ProtocolDecodeError: If the data is not valid RESP2
        """
        result = self._parse_at(self._offset, 0)
        if result is INCOMPLETE:
            return INCOMPLETE
        value, end = result
        self._offset = end
        return value

    def has_pending(self):
        """Return True if unconsumed bytes remain in the buffer."""
        return self._offset < len(self._buffer)

    def reset(self):
        """Discard all buffered data."""
        self._buffer = bytearray()
        self._offset = 0

    def _read_line(self, pos):
        """
        Read one CRLF-terminated line starting at pos.

        Returns:
            tuple: (line bytes without CRLF, position after CRLF),
                   or INCOMPLETE
        """
        crlf_pos = self._buffer.find(CRLF, pos)
        if crlf_pos == -1:
            return INCOMPLETE
        return bytes(self._buffer[pos:crlf_pos]), crlf_pos + 2

    def _parse_at(self, pos, depth):
        if pos >= len(self._buffer):
            return INCOMPLETE

        marker = self._buffer[pos]
        result = self._read_line(pos + 1)
        if result is INCOMPLETE:
            return INCOMPLETE
        line, pos = result

        if marker == SIMPLE_STRING:
            return line.decode('utf-8', 'replace'), pos

        if marker == ERROR:
            return ResponseError.from_reply(line), pos

        if marker == INTEGER:
            return self._parse_int(line), pos

        if marker == BULK_STRING:
            length = self._parse_int(line)
            if length == -1:
                return None, pos
            if length < -1:
                raise ProtocolDecodeError(f'Invalid bulk string length: {length}')
            end = pos + length
            if end + 2 > len(self._buffer):
                return INCOMPLETE
            if self._buffer[end:end + 2] != CRLF:
                raise ProtocolDecodeError('Bulk string not terminated by CRLF')
            return bytes(self._buffer[pos:end]), end + 2

        if marker == ARRAY:
            count = self._parse_int(line)
            if count == -1:
                return None, pos
            if count < -1:
                raise ProtocolDecodeError(f'Invalid array length: {count}')
            if depth >= MAX_ARRAY_DEPTH:
                raise ProtocolDecodeError(f'Array nesting too deep: > {MAX_ARRAY_DEPTH}')
            items = []
            for _ in range(count):
                result = self._parse_at(pos, depth + 1)
                if result is INCOMPLETE:
                    return INCOMPLETE
                item, pos = result
                items.append(item)
            return items, pos

        raise ProtocolDecodeError(f'Unknown reply type marker: {chr(marker)!r}')

    @staticmethod
    def _parse_int(line):
        try:
            return int(line)
        except ValueError:
            raise ProtocolDecodeError(f'Invalid integer in reply: {line!r}') from None
