"""
In-memory stand-ins for a Redis connection.

FakeServer implements the execute()/server_version() contract used by the
command facades, with enough server behaviour for the tests: sorted sets
(ZADD, BZMPOP, BZPOPMIN, BZPOPMAX), CLIENT SETINFO / CLIENT INFO, PING.
Blocking pops never block: an empty result stands for an expired server
timeout. Every executed command is recorded in `calls`.

Sorted sets use the dual structure of a score dict plus a bisect-sorted
list of (score, member) tuples.
"""

import bisect

from redicore.exceptions import ResponseError
from redicore.utils import to_bytes, parse_version


def _format_score(score):
    return repr(float(score)).encode('ascii')


class FakeServer:
    """Synchronous fake connection."""

    def __init__(self, version='7.2.4'):
        self.version = version
        self.calls = []
        self.version_queries = 0
        self.fail_setinfo = False
        self.client_info = {}
        self._zsets = {}

    # -- connection contract ------------------------------------------------

    def execute(self, tokens):
        tokens = [to_bytes(token) for token in tokens]
        self.calls.append(tokens)
        command = tokens[0].upper()
        handler = getattr(self, '_cmd_' + command.decode('ascii').lower(), None)
        if handler is None:
            raise ResponseError(f"unknown command '{command.decode()}'")
        return handler(tokens[1:])

    def server_version(self):
        self.version_queries += 1
        return parse_version(self.version)

    # -- helpers for tests ---------------------------------------------------

    def commands(self):
        """Return the upper-cased command names executed so far."""
        return [call[0].upper().decode('ascii') for call in self.calls]

    def zadd(self, key, mapping):
        args = [to_bytes(key)]
        for member, score in mapping.items():
            args.append(_format_score(score))
            args.append(to_bytes(member))
        return self._cmd_zadd(args)

    # -- sorted sets ---------------------------------------------------------

    def _cmd_zadd(self, args):
        key = args[0]
        scores, sorted_list = self._zsets.setdefault(key, ({}, []))
        added = 0
        for i in range(1, len(args), 2):
            score = float(args[i])
            member = args[i + 1]
            old_score = scores.get(member)
            if old_score is not None:
                sorted_list.remove((old_score, member))
            else:
                added += 1
            scores[member] = score
            bisect.insort(sorted_list, (score, member))
        return added

    def _pop(self, key, from_max, count):
        scores, sorted_list = self._zsets[key]
        popped = []
        for _ in range(min(count, len(sorted_list))):
            score, member = sorted_list.pop() if from_max else sorted_list.pop(0)
            del scores[member]
            popped.append((member, score))
        if not sorted_list:
            del self._zsets[key]
        return popped

    def _first_non_empty(self, keys):
        for key in keys:
            if key in self._zsets:
                return key
        return None

    def _cmd_bzmpop(self, args):
        numkeys = int(args[1])
        keys = args[2:2 + numkeys]
        rest = args[2 + numkeys:]
        from_max = rest[0].upper() == b'MAX'
        count = int(rest[2]) if len(rest) > 2 and rest[1].upper() == b'COUNT' else 1
        key = self._first_non_empty(keys)
        if key is None:
            return None
        popped = self._pop(key, from_max, count)
        return [key, [[member, _format_score(score)] for member, score in popped]]

    def _bzpop(self, args, from_max):
        key = self._first_non_empty(args[:-1])
        if key is None:
            return None
        member, score = self._pop(key, from_max, 1)[0]
        return [key, member, _format_score(score)]

    def _cmd_bzpopmin(self, args):
        return self._bzpop(args, False)

    def _cmd_bzpopmax(self, args):
        return self._bzpop(args, True)

    # -- client --------------------------------------------------------------

    def _cmd_client(self, args):
        sub = args[0].upper()
        if sub == b'SETINFO':
            if parse_version(self.version) < (7, 1, 242):
                raise ResponseError("unknown subcommand 'SETINFO'")
            if self.fail_setinfo:
                raise ResponseError('simulated SETINFO failure')
            attr, value = args[1].upper(), args[2]
            if b' ' in value or b'\n' in value:
                raise ResponseError(f'{attr.decode().lower()} cannot contain spaces, newlines or special characters.')
            self.client_info[attr.decode().lower()] = value.decode()
            return 'OK'
        if sub == b'INFO':
            name = self.client_info.get('lib-name', '')
            ver = self.client_info.get('lib-ver', '')
            return f'id=3 addr=127.0.0.1:50000 lib-name={name} lib-ver={ver}\n'.encode()
        raise ResponseError(f"unknown subcommand '{sub.decode()}'")

    def _cmd_ping(self, args):
        return 'PONG'


class AsyncFakeServer:
    """Coroutine wrapper around FakeServer for the async facade."""

    def __init__(self, version='7.2.4'):
        self.server = FakeServer(version)

    async def execute(self, tokens):
        return self.server.execute(tokens)

    async def server_version(self):
        return self.server.server_version()
