"""
Command facade: BZMPOP, BZPOPMIN, BZPOPMAX, CLIENT SETINFO and generic
command execution with the one-time identification handshake.

A facade wraps any connection object providing:
    execute(tokens) -> raw reply
    server_version() -> version tuple or string

AsyncCoreCommands expects both to be coroutines.

Blocking pops: a timeout of 0 waits forever on the server. The only
client-side bound is the connection's own socket timeout; when it expires
the connection raises and the error reaches the caller unchanged.
"""

import logging

from .builder import (
    build_bzmpop, build_bzpopmin, build_bzpopmax, build_client_setinfo
)
from .decoder import decode_bzmpop, decode_bzpop, ok_to_boolean
from ..config import get_config
from ..core.types import SetInfoAttr
from ..features.identification import (
    get_identification_state, default_lib_name, default_lib_version
)
from ..utils import parse_version

logger = logging.getLogger(__name__)


class _CommandsBase:
    """State and policy shared by the sync and async facades."""

    __slots__ = ('connection', 'identification', 'lib_name_suffix', 'config')

    def __init__(self, connection, identification=None, lib_name_suffix=None, config=None):
        """
        Args:
            connection: Object with execute() and server_version()
            identification: IdentificationState or None (process-wide state)
            lib_name_suffix: str or None - Extra identity added to the
                             announced library name; also the handshake context
            config: Config or None (global config)
        """
        self.connection = connection
        if identification is None:
            identification = get_identification_state()
        self.identification = identification
        self.lib_name_suffix = lib_name_suffix
        self.config = config if config is not None else get_config()

    def _setinfo_supported(self, version):
        supported = parse_version(version) >= parse_version(self.config.get('setinfo_min_version'))
        if not supported:
            logger.debug('CLIENT SETINFO skipped: server version %s is too old', version)
        return supported

    def _handshake(self):
        """Return SETINFO pairs to send, or an empty list if already identified."""
        if not self.identification.claim(self.lib_name_suffix):
            return []
        logger.debug('Identifying client (context %r)', self.lib_name_suffix)
        return [
            (SetInfoAttr.LIBRARY_NAME, default_lib_name(self.lib_name_suffix, self.config)),
            (SetInfoAttr.LIBRARY_VERSION, default_lib_version()),
        ]


class CoreCommands(_CommandsBase):
    """
    Blocking sorted-set pops and client identification over a sync connection.

    Usage:
        commands = CoreCommands(connection)
        result = commands.bzpopmin('my-set', 0.5)
        if result is not None:
            key, (member, score) = result
    """

    __slots__ = ()

    def execute(self, *tokens):
        """
        Execute an arbitrary command and return its raw reply.

        The first call for this facade's identification context is
        preceded by the CLIENT SETINFO handshake. Handshake failures are
        logged and do not affect the command.

        Args:
            *tokens: Command name and arguments

        Returns:
            Raw reply
        """
        for attr, value in self._handshake():
            try:
                self.client_setinfo(attr, value)
            except Exception:
                logger.warning('CLIENT SETINFO %s failed, continuing', attr.value, exc_info=True)
        return self.connection.execute(list(tokens))

    def bzmpop(self, timeout, keys, modifier, count=None):
        """
        Pop up to count entries from the first non-empty sorted set in keys.

        Args:
            timeout: int or float - Server-side wait in seconds (0 = forever)
            keys: key or sequence of keys
            modifier: MinMaxModifier or Order - Which end to pop from
            count: int or None - Maximum entries (None = server default)

        Returns:
            BatchPopResult or None if the server timeout expired
        """
        command = build_bzmpop(timeout, keys, modifier, count)
        return decode_bzmpop(self.connection.execute(command))

    def bzpopmin(self, keys, timeout):
        """
        Pop the lowest-scored entry from the first non-empty sorted set.

        Returns:
            PopResult or None if the server timeout expired
        """
        return decode_bzpop(self.connection.execute(build_bzpopmin(keys, timeout)))

    def bzpopmax(self, keys, timeout):
        """
        Pop the highest-scored entry from the first non-empty sorted set.

        Returns:
            PopResult or None if the server timeout expired
        """
        return decode_bzpop(self.connection.execute(build_bzpopmax(keys, timeout)))

    def client_setinfo(self, attr, value):
        """
        Set a client library attribute on the connection.

        Servers older than 7.1.242 do not know CLIENT SETINFO; for them
        nothing is sent and False is returned.

        Args:
            attr: SetInfoAttr - Attribute to set
            value: str - Attribute value

        Returns:
            bool: True if the server acknowledged with OK

        Raises:
            ResponseError: If the server rejects the value
        """
        command = build_client_setinfo(attr, value)
        if not self._setinfo_supported(self.connection.server_version()):
            return False
        return ok_to_boolean(self.connection.execute(command))


class AsyncCoreCommands(_CommandsBase):
    """
    asyncio version of CoreCommands; every command method is a coroutine.

    Usage:
        commands = AsyncCoreCommands(connection)
        result = await commands.bzmpop(0, ['a', 'b'], MinMaxModifier.MAX)
    """

    __slots__ = ()

    async def execute(self, *tokens):
        for attr, value in self._handshake():
            try:
                await self.client_setinfo(attr, value)
            except Exception:
                logger.warning('CLIENT SETINFO %s failed, continuing', attr.value, exc_info=True)
        return await self.connection.execute(list(tokens))

    async def bzmpop(self, timeout, keys, modifier, count=None):
        command = build_bzmpop(timeout, keys, modifier, count)
        return decode_bzmpop(await self.connection.execute(command))

    async def bzpopmin(self, keys, timeout):
        return decode_bzpop(await self.connection.execute(build_bzpopmin(keys, timeout)))

    async def bzpopmax(self, keys, timeout):
        return decode_bzpop(await self.connection.execute(build_bzpopmax(keys, timeout)))

    async def client_setinfo(self, attr, value):
        command = build_client_setinfo(attr, value)
        if not self._setinfo_supported(await self.connection.server_version()):
            return False
        return ok_to_boolean(await self.connection.execute(command))
