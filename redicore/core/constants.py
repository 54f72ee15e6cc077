"""
redicore Constants Module

Defines protocol markers, command names and keywords, and version gates
used by the command builders and the reference connection.
"""

# =============================================================================
# RESP2 Protocol Markers
# =============================================================================
# Redis Serialization Protocol (RESP2) type indicators

SIMPLE_STRING = ord('+')  # Simple string reply: +OK\r\n
ERROR = ord('-')          # Error reply: -ERR message\r\n
INTEGER = ord(':')        # Integer reply: :1000\r\n
BULK_STRING = ord('$')    # Bulk string: $6\r\nfoobar\r\n
ARRAY = ord('*')          # Array: *2\r\n$3\r\nfoo\r\n$3\r\nbar\r\n

CRLF = b'\r\n'

# =============================================================================
# Protocol Limits
# =============================================================================

MAX_ARRAY_DEPTH = 32                 # Maximum nesting depth for reply arrays
BUFFER_SIZE = 4096                   # Socket read size

# =============================================================================
# Command Names and Keywords
# =============================================================================

BZMPOP = 'BZMPOP'
BZPOPMIN = 'BZPOPMIN'
BZPOPMAX = 'BZPOPMAX'
CLIENT = 'CLIENT'
SETINFO = 'SETINFO'
INFO = 'INFO'

KW_MIN = 'MIN'
KW_MAX = 'MAX'
KW_COUNT = 'COUNT'
KW_LIB_NAME = 'LIB-NAME'
KW_LIB_VER = 'LIB-VER'

# Literal acknowledgement token
OK = 'OK'

# =============================================================================
# Identification Defaults
# =============================================================================

LIB_NAME = 'redicore'
RUNTIME_TAG = 'python_v'

# First server release that understands CLIENT SETINFO
SETINFO_MIN_VERSION = '7.1.242'
