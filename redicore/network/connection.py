"""
redicore Connections

Minimal request/reply connections that provide the execute primitive the
command facades need. One command is in flight per connection at a time.
There is no pooling and no retry: socket failures are
raised as TransportError subclasses and the socket is closed (the next
command opens a new one).

- Connection: blocking socket, for CoreCommands
- AsyncConnection: asyncio streams, for AsyncCoreCommands
"""

import asyncio
import logging
import socket

from ..config import get_config
from ..core.constants import BUFFER_SIZE, INFO
from ..core.protocol import encode_command, RESPReader, INCOMPLETE
from ..exceptions import (
    RedisError, ResponseError, ProtocolDecodeError, RedisConnectionError,
    RedisTimeoutError,
)
from ..utils import parse_info, parse_version

logger = logging.getLogger(__name__)


def _settings(config, **overrides):
    if config is None:
        config = get_config()
    settings = {
        key: config.get(key)
        for key in ('host', 'port', 'socket_timeout', 'socket_connect_timeout', 'encoding')
    }
    for key, value in overrides.items():
        if value is not None:
            settings[key] = value
    return settings


def _version_from_info(reply):
    info = parse_info(reply)
    version = info.get('redis_version') or info.get('valkey_version')
    if version is None:
        raise ProtocolDecodeError('INFO reply has no server version')
    return parse_version(version)


class Connection:
    """
    Blocking connection to a Redis server.

    Usage:
        with Connection('localhost', 6379, socket_timeout=5) as conn:
            conn.execute(['PING'])
    """

    __slots__ = (
        'host',
        'port',
        'socket_timeout',
        'socket_connect_timeout',
        'encoding',
        '_sock',
        '_reader',
        '_server_version',
    )

    def __init__(self, host=None, port=None, socket_timeout=None,
                 socket_connect_timeout=None, config=None):
        """
        Args:
            host: str - Server host (default from config)
            port: int - Server port (default from config)
            socket_timeout: float or None - Client-side bound on each
                            round-trip; None blocks until the server replies
            socket_connect_timeout: float or None - Bound on connecting
            config: Config or None (global config)
        """
        settings = _settings(
            config,
            host=host,
            port=port,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_connect_timeout,
        )
        self.host = settings['host']
        self.port = settings['port']
        self.socket_timeout = settings['socket_timeout']
        self.socket_connect_timeout = settings['socket_connect_timeout']
        self.encoding = settings['encoding']
        self._sock = None
        self._reader = RESPReader()
        self._server_version = None

    def connect(self):
        """Open the socket if it is not already open."""
        if self._sock is not None:
            return
        try:
            sock = socket.create_connection(
                (self.host, self.port), timeout=self.socket_connect_timeout
            )
        except socket.timeout:
            raise RedisTimeoutError(f'Timeout connecting to {self.host}:{self.port}') from None
        except OSError as e:
            raise RedisConnectionError(f'Error connecting to {self.host}:{self.port}: {e}') from e
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        sock.settimeout(self.socket_timeout)
        self._sock = sock
        logger.debug('Connected to %s:%s', self.host, self.port)

    def execute(self, tokens):
        """
        Send one command and read its reply.

        Args:
            tokens: sequence - Command name and arguments

        Returns:
            Decoded reply

        Raises:
            ResponseError: If the server answered with an error reply
            RedisTimeoutError: If socket_timeout expired
            RedisConnectionError: If the socket failed or was closed
        """
        self.connect()
        try:
            self._sock.sendall(encode_command(tokens, self.encoding))
            reply = self._read_reply()
        except socket.timeout:
            self.close()
            raise RedisTimeoutError() from None
        except OSError as e:
            self.close()
            raise RedisConnectionError(f'Error while talking to {self.host}:{self.port}: {e}') from e
        except RedisError:
            # EOF or a malformed reply leaves the stream unusable
            self.close()
            raise
        except BaseException:
            # Interrupted mid-exchange (KeyboardInterrupt): the reply may
            # still be in flight and would be read by the next command
            self.close()
            raise
        if isinstance(reply, ResponseError):
            raise reply
        return reply

    def server_version(self):
        """
        Return the server version, read once from INFO server.

        Returns:
            tuple: Version components, e.g. (7, 2, 4)
        """
        if self._server_version is None:
            self._server_version = _version_from_info(self.execute([INFO, 'server']))
        return self._server_version

    def close(self):
        """Close the socket and drop buffered data."""
        if self._sock is None:
            return
        sock, self._sock = self._sock, None
        try:
            sock.close()
        except OSError:
            pass
        self._reader.reset()

    def _read_reply(self):
        while True:
            reply = self._reader.parse()
            if reply is not INCOMPLETE:
                return reply
            data = self._sock.recv(BUFFER_SIZE)
            if not data:
                raise RedisConnectionError()
            self._reader.feed(data)

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, *exc_info):
        self.close()


class AsyncConnection:
    """
    asyncio connection to a Redis server.

    Usage:
        conn = AsyncConnection('localhost', 6379)
        await conn.connect()
        await conn.execute(['PING'])
        await conn.close()
    """

    __slots__ = (
        'host',
        'port',
        'socket_timeout',
        'socket_connect_timeout',
        'encoding',
        '_stream_reader',
        '_writer',
        '_reader',
        '_server_version',
        '_lock',
    )

    def __init__(self, host=None, port=None, socket_timeout=None,
                 socket_connect_timeout=None, config=None):
        settings = _settings(
            config,
            host=host,
            port=port,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_connect_timeout,
        )
        self.host = settings['host']
        self.port = settings['port']
        self.socket_timeout = settings['socket_timeout']
        self.socket_connect_timeout = settings['socket_connect_timeout']
        self.encoding = settings['encoding']
        self._stream_reader = None
        self._writer = None
        self._reader = RESPReader()
        self._server_version = None
        # One request/reply exchange at a time per connection
        self._lock = asyncio.Lock()

    async def connect(self):
        if self._writer is not None:
            return
        try:
            self._stream_reader, self._writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port),
                timeout=self.socket_connect_timeout,
            )
        except asyncio.TimeoutError:
            raise RedisTimeoutError(f'Timeout connecting to {self.host}:{self.port}') from None
        except OSError as e:
            raise RedisConnectionError(f'Error connecting to {self.host}:{self.port}: {e}') from e
        logger.debug('Connected to %s:%s', self.host, self.port)

    async def execute(self, tokens):
        """Async version of Connection.execute()."""
        async with self._lock:
            await self.connect()
            try:
                reply = await asyncio.wait_for(self._exchange(tokens), timeout=self.socket_timeout)
            except asyncio.TimeoutError:
                # Unsent request data may still be buffered; close() would wait on it
                self._abort()
                raise RedisTimeoutError() from None
            except OSError as e:
                await self.close()
                raise RedisConnectionError(f'Error while talking to {self.host}:{self.port}: {e}') from e
            except RedisError:
                await self.close()
                raise
            except BaseException:
                # Cancelled mid-exchange: the reply may still be in flight
                # and would be read by the next command
                self._abort()
                raise
        if isinstance(reply, ResponseError):
            raise reply
        return reply

    async def server_version(self):
        if self._server_version is None:
            self._server_version = _version_from_info(await self.execute([INFO, 'server']))
        return self._server_version

    async def close(self):
        if self._writer is None:
            return
        writer, self._writer = self._writer, None
        self._stream_reader = None
        try:
            writer.close()
            await writer.wait_closed()
        except (OSError, RuntimeError):
            # Socket already closed or event loop shutting down
            pass
        self._reader.reset()

    def _abort(self):
        """Drop the transport without flushing or waiting."""
        if self._writer is None:
            return
        writer, self._writer = self._writer, None
        self._stream_reader = None
        writer.transport.abort()
        self._reader.reset()

    async def _exchange(self, tokens):
        self._writer.write(encode_command(tokens, self.encoding))
        await self._writer.drain()
        return await self._read_reply()

    async def _read_reply(self):
        while True:
            reply = self._reader.parse()
            if reply is not INCOMPLETE:
                return reply
            data = await self._stream_reader.read(BUFFER_SIZE)
            if not data:
                raise RedisConnectionError()
            self._reader.feed(data)

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, *exc_info):
        await self.close()
