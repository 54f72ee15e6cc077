"""
redicore Exceptions Module

Defines the exception hierarchy for redicore error handling.
Every error carries a RESP-style prefix so that server error replies and
locally detected faults print the same way.

Taxonomy:
- InvalidArgumentError: rejected locally, never sent to the server
- ProtocolDecodeError: reply shape does not match the invoked command
- ResponseError: the server answered with an error reply
- TransportError: the connection could not complete the round-trip
"""


class RedisError(Exception):
    """
    Base exception for all redicore errors.

    Attributes:
        prefix: str - Error prefix (e.g., 'ERR', 'WRONGTYPE')
    """

    prefix = 'ERR'

    def __init__(self, message=None):
        """
        Initialize Redis error.

        Args:
            message: str - Error message (without prefix)
        """
        self.message = message
        if message:
            super().__init__(f'{self.prefix} {message}')
        else:
            super().__init__(self.prefix)


class InvalidArgumentError(RedisError, ValueError):
    """
    Raised when command parameters are rejected before any protocol call.

    Example: empty key list for BZMPOP, non-positive COUNT, negative timeout.
    """

    def __init__(self, message='invalid argument'):
        super().__init__(message)


class ProtocolDecodeError(RedisError):
    """
    Raised when a reply does not have the shape expected for its command.

    Indicates a server/transport contract violation; never retried.
    """

    prefix = 'PROTOCOL'

    def __init__(self, message='unexpected reply shape'):
        super().__init__(message)


class ResponseError(RedisError):
    """
    Error reply received from the server.

    The prefix is taken from the first word of the reply line, so
    '-WRONGTYPE Operation against ...' keeps 'WRONGTYPE'.
    """

    def __init__(self, message=None, prefix=None):
        if prefix is not None:
            self.prefix = prefix
        super().__init__(message)

    @classmethod
    def from_reply(cls, line):
        """
        Build an error from a raw error reply line (without '-' and CRLF).

        Args:
            line: bytes or str - Error line, e.g. b'ERR unknown command'

        Returns:
            ResponseError: Error with prefix and message split apart
        """
        if isinstance(line, bytes):
            line = line.decode('utf-8', 'replace')
        prefix, _, message = line.partition(' ')
        if not message:
            return cls(prefix, prefix='ERR')
        return cls(message, prefix=prefix)


class TransportError(RedisError):
    """
    Raised when the connection fails to send a command or read its reply.
    """

    prefix = 'TRANSPORT'

    def __init__(self, message='transport failure'):
        super().__init__(message)


class RedisConnectionError(TransportError):
    """
    Raised when the socket is closed or cannot be used.
    """

    def __init__(self, message='Connection closed by server'):
        super().__init__(message)


class RedisTimeoutError(TransportError):
    """
    Raised when the client-side socket timeout expires.

    BZMPOP/BZPOPMIN/BZPOPMAX with a server timeout of 0 block forever on the
    server; the socket timeout is the only client-side bound.
    """

    prefix = 'TIMEOUT'

    def __init__(self, message='Timeout reading from socket'):
        super().__init__(message)
