"""Wire-format constants, protocol header templates and error types."""

import re

MASK = 0x7F
FLAG = 0x80

ZERO = 0x00

TAG_READ = -1
ASCII_GAP = 32
CHUNK_SIZE = 4096

BC_BINARY = ord("B")  # final chunk
BC_BINARY_CHUNK = ord("A")  # non-final chunk

BC_BINARY_DIRECT = 0x20  # 1-byte length binary
BINARY_DIRECT_MAX = 0x0F
BC_BINARY_SHORT = 0x34  # 2-byte length binary
BINARY_SHORT_MAX = 0x3FF  # 0-1023 binary

BC_DATE = 0x4A  # 64-bit millisecond UTC date
BC_DATE_MINUTE = 0x4B  # 32-bit minute UTC date

BC_DOUBLE = ord("D")  # IEEE 64-bit double

BC_DOUBLE_ZERO = 0x5B
BC_DOUBLE_ONE = 0x5C
BC_DOUBLE_BYTE = 0x5D
BC_DOUBLE_SHORT = 0x5E
BC_DOUBLE_MILL = 0x5F

BC_FALSE = ord("F")

BC_INT = ord("I")  # 32-bit int

INT_DIRECT_MIN = -0x10
INT_DIRECT_MAX = 0x2F
BC_INT_ZERO = 0x90

INT_BYTE_MIN = -0x800
INT_BYTE_MAX = 0x7FF
BC_INT_BYTE_ZERO = 0xC8

BC_END = ord("Z")

INT_SHORT_MIN = -0x40000
INT_SHORT_MAX = 0x3FFFF
BC_INT_SHORT_ZERO = 0xD4

BC_LIST_VARIABLE = 0x55
BC_LIST_FIXED = ord("V")
BC_LIST_VARIABLE_UNTYPED = 0x57
BC_LIST_FIXED_UNTYPED = 0x58
LIST_FIXED_TYPED_LEN_TAG_MIN = 0x70
LIST_FIXED_TYPED_LEN_TAG_MAX = 0x77
LIST_FIXED_UNTYPED_LEN_TAG_MIN = 0x78
LIST_FIXED_UNTYPED_LEN_TAG_MAX = 0x7F

BC_LIST_DIRECT = 0x70
BC_LIST_DIRECT_UNTYPED = 0x78
LIST_DIRECT_MAX = 0x7

BC_LONG = ord("L")  # 64-bit signed integer
LONG_DIRECT_MIN = -0x08
LONG_DIRECT_MAX = 0x0F
BC_LONG_ZERO = 0xE0

LONG_BYTE_MIN = -0x800
LONG_BYTE_MAX = 0x7FF
BC_LONG_BYTE_ZERO = 0xF8

LONG_SHORT_MIN = -0x40000
LONG_SHORT_MAX = 0x3FFFF
BC_LONG_SHORT_ZERO = 0x3C

BC_LONG_INT = 0x59

BC_MAP = ord("M")
BC_MAP_UNTYPED = ord("H")

BC_NULL = ord("N")

BC_OBJECT = ord("O")
BC_OBJECT_DEF = ord("C")

BC_OBJECT_DIRECT = 0x60
OBJECT_DIRECT_MAX = 0x0F

BC_REF = 0x51

BC_STRING = ord("S")  # final string
BC_STRING_CHUNK = ord("R")  # non-final string

BC_STRING_DIRECT = 0x00
STRING_DIRECT_MAX = 0x1F
BC_STRING_SHORT = 0x30
STRING_SHORT_MAX = 0x3FF

BC_TRUE = ord("T")

P_PACKET_CHUNK = 0x4F
P_PACKET = ord("P")

P_PACKET_DIRECT = 0x80
PACKET_DIRECT_MAX = 0x7F

P_PACKET_SHORT = 0x70
PACKET_SHORT_MAX = 0xFFF

ARRAY_STRING = "[string"
ARRAY_INT = "[int"
ARRAY_DOUBLE = "[double"
ARRAY_FLOAT = "[float"
ARRAY_BOOL = "[boolean"
ARRAY_LONG = "[long"

PATH_KEY = "path"
GROUP_KEY = "group"
INTERFACE_KEY = "interface"
VERSION_KEY = "version"
TIMEOUT_KEY = "timeout"

STRING_NIL = ""
STRING_TRUE = "true"
STRING_FALSE = "false"
STRING_ZERO = "0.0"
STRING_ONE = "1.0"

# Response status codes.
RESPONSE_OK = 20
RESPONSE_CLIENT_TIMEOUT = 30
RESPONSE_SERVER_TIMEOUT = 31
RESPONSE_BAD_REQUEST = 40
RESPONSE_BAD_RESPONSE = 50
RESPONSE_SERVICE_NOT_FOUND = 60
RESPONSE_SERVICE_ERROR = 70
RESPONSE_SERVER_ERROR = 80
RESPONSE_CLIENT_ERROR = 90

# Response body kinds, with and without attachments.
RESPONSE_WITH_EXCEPTION = 0
RESPONSE_VALUE = 1
RESPONSE_NULL_VALUE = 2
RESPONSE_WITH_EXCEPTION_WITH_ATTACHMENTS = 3
RESPONSE_VALUE_WITH_ATTACHMENTS = 4
RESPONSE_NULL_VALUE_WITH_ATTACHMENTS = 5

# The dubbo header is 16 bytes: 2 magic bytes, 1 flag byte (serial id in the
# low 5 bits, then event, two-way and request bits), 1 status byte,
# 8 bytes of request id and 4 bytes of body length.
HEADER_LENGTH = 16

MAGIC = 0xDABB
MAGIC_HIGH = 0xDA
MAGIC_LOW = 0xBB

FLAG_REQUEST = 0x80
FLAG_TWOWAY = 0x40
FLAG_EVENT = 0x20  # heartbeat
SERIAL_MASK = 0x1F

DUBBO_VERSION = "2.5.4"
DUBBO_VERSION_KEY = "dubbo"
# For compatibility this must not lie between 2.0.10 and 2.6.2.
DEFAULT_DUBBO_PROTOCOL_VERSION = "2.0.2"
LOWEST_VERSION_FOR_RESPONSE_ATTACHMENT = 2000200
DEFAULT_LEN = 8388608  # default maximum body length, 8 MiB

JAVA_IDENT_REGEX = "(?:[_$a-zA-Z][_$a-zA-Z0-9]*)"
CLASS_DESC = "(?:L" + JAVA_IDENT_REGEX + "(?:\\/" + JAVA_IDENT_REGEX + ")*;)"
ARRAY_DESC = "(?:\\[+(?:(?:[VZBCDFIJS])|" + CLASS_DESC + "))"
DESC_REGEX = "(?:(?:[VZBCDFIJS])|" + CLASS_DESC + "|" + ARRAY_DESC + ")"

DESC_PATTERN = re.compile(DESC_REGEX)


def _header(*leading: int) -> bytes:
    return bytes(leading) + bytes(HEADER_LENGTH - len(leading))


DUBBO_REQUEST_HEADER_BYTES_TWO_WAY = _header(MAGIC_HIGH, MAGIC_LOW, FLAG_REQUEST | FLAG_TWOWAY)
DUBBO_REQUEST_HEADER_BYTES = _header(MAGIC_HIGH, MAGIC_LOW, FLAG_REQUEST)
DUBBO_RESPONSE_HEADER_BYTES = _header(MAGIC_HIGH, MAGIC_LOW, ZERO, RESPONSE_OK)
DUBBO_REQUEST_HEARTBEAT_HEADER = _header(
    MAGIC_HIGH, MAGIC_LOW, FLAG_REQUEST | FLAG_TWOWAY | FLAG_EVENT
)
DUBBO_RESPONSE_HEARTBEAT_HEADER = _header(MAGIC_HIGH, MAGIC_LOW, FLAG_EVENT)


class HessianError(Exception):
    """Base class of every error raised by this package."""


class NotEnoughBufferError(HessianError):
    """The input ended before a complete value could be read."""

    def __init__(self, message: str = "not enough buf") -> None:
        super().__init__(message)


class IllegalPackageError(HessianError):
    """A protocol package is malformed."""

    def __init__(self, message: str = "illegal package!") -> None:
        super().__init__(message)


class HeaderNotEnoughError(HessianError):
    """Fewer bytes than a full protocol header are available."""

    def __init__(self, message: str = "header buffer too short") -> None:
        super().__init__(message)


class BodyNotEnoughError(HessianError):
    """Fewer bytes than the announced body length are available."""

    def __init__(self, message: str = "body buffer too short") -> None:
        super().__init__(message)