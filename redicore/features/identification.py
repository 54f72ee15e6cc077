"""
Client library identification (CLIENT SETINFO handshake).

The first command sent through the generic execute path for a given
identification context is preceded by two CLIENT SETINFO commands that
announce the library name and version. A context is the optional
caller-supplied name suffix; None is a context of its own.

The handshake is best effort: once a context is claimed it stays
identified even if the SETINFO commands fail, and the caller's command is
sent regardless.

State is held in an IdentificationState object. Facades take one
explicitly; get_identification_state() returns the process-wide instance
used when none is given.
"""

import platform
import threading

from ..config import get_config
from ..core.constants import RUNTIME_TAG


class IdentificationState:
    """
    Per-context record of whether the handshake was already sent.

    claim() is an atomic test-and-set under a lock, so concurrent first
    uses of one context send the handshake once.
    """

    __slots__ = ('_identified', '_lock')

    def __init__(self):
        self._identified = set()
        self._lock = threading.Lock()

    def claim(self, context=None):
        """
        Mark context as identified.

        Args:
            context: str or None - Identification context

        Returns:
            bool: True if this call moved the context from not identified to
                  identified (the caller must send the handshake)
        """
        with self._lock:
            if context in self._identified:
                return False
            self._identified.add(context)
            return True

    def is_identified(self, context=None):
        with self._lock:
            return context in self._identified

    def reset(self):
        """Forget every context so the next command handshakes again (tests)."""
        with self._lock:
            self._identified.clear()

    def __len__(self):
        with self._lock:
            return len(self._identified)


# Process-wide identification state
_global_state = None
_global_lock = threading.Lock()


def get_identification_state():
    """
    Get the process-wide identification state.

    Returns:
        IdentificationState: Shared instance
    """
    global _global_state
    with _global_lock:
        if _global_state is None:
            _global_state = IdentificationState()
        return _global_state


def default_lib_name(suffix=None, config=None):
    """
    Compute the library name announced in the handshake.

    Examples:
        default_lib_name()                      -> 'redicore(python_v3.12.1)'
        default_lib_name('MyLibraryName;v1.0')  -> 'redicore(MyLibraryName;v1.0;python_v3.12.1)'

    Args:
        suffix: str or None - Extra identity inserted before the runtime tag
        config: Config or None - Configuration (default: global config)

    Returns:
        str: Library name value
    """
    if config is None:
        config = get_config()
    runtime = RUNTIME_TAG + platform.python_version()
    if suffix:
        return f"{config.get('lib_name')}({suffix};{runtime})"
    return f"{config.get('lib_name')}({runtime})"


def default_lib_version():
    """Return the redicore release version announced in the handshake."""
    from .. import __version__
    return __version__
