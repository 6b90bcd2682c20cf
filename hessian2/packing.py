"""Big-endian packing of fixed-width numbers and numeric coercions."""

import struct

from .constants import NotEnoughBufferError

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MASK = (1 << 64) - 1


def pack_int8(value: int) -> bytes:
    """Pack the low 8 bits of ``value`` into one byte."""
    return bytes([value & 0xFF])


def pack_int16(value: int) -> bytes:
    """Pack ``value`` as a big-endian 16-bit two's-complement integer."""
    return struct.pack(">H", value & 0xFFFF)


def pack_uint16(value: int) -> bytes:
    """Pack ``value`` as a big-endian unsigned 16-bit integer."""
    return struct.pack(">H", value & 0xFFFF)


def pack_int32(value: int) -> bytes:
    """Pack ``value`` as a big-endian 32-bit two's-complement integer."""
    return struct.pack(">I", value & 0xFFFFFFFF)


def pack_int64(value: int) -> bytes:
    """Pack ``value`` as a big-endian 64-bit two's-complement integer."""
    return struct.pack(">Q", value & _UINT64_MASK)


def pack_float64(value: float) -> bytes:
    """Pack ``value`` as a big-endian IEEE 754 double."""
    return struct.pack(">d", value)


def _unpack(fmt: str, data: bytes):
    size = struct.calcsize(fmt)
    if len(data) < size:
        raise NotEnoughBufferError()
    return struct.unpack(fmt, bytes(data[:size]))[0]


def unpack_int16(data: bytes) -> int:
    """Read a signed 16-bit integer from the first two bytes."""
    return _unpack(">h", data)


def unpack_uint16(data: bytes) -> int:
    """Read an unsigned 16-bit integer from the first two bytes."""
    return _unpack(">H", data)


def unpack_int32(data: bytes) -> int:
    """Read a signed 32-bit integer from the first four bytes."""
    return _unpack(">i", data)


def unpack_int64(data: bytes) -> int:
    """Read a signed 64-bit integer from the first eight bytes."""
    return _unpack(">q", data)


def unpack_float64(data: bytes) -> float:
    """Read an IEEE 754 double from the first eight bytes."""
    return _unpack(">d", data)


def sprint_hex(data: bytes) -> str:
    """Render ``data`` as a byte-slice literal in hexadecimal."""
    body = "".join(f"0x{byte:02x}," for byte in data)
    return "[]byte{" + body + "}\n"


def ensure_float64(value) -> float:
    """Return ``value`` as a float; only floating-point inputs are accepted."""
    if isinstance(value, float):
        return float(value)
    raise TypeError(f"can't convert to float64: {value!r}, type:{type(value).__name__}")


def _require_int(value, target: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"can't convert to {target}: {value!r}, type:{type(value).__name__}")
    return int(value)


def ensure_int64(value) -> int:
    """Return ``value`` as a signed 64-bit integer."""
    number = _require_int(value, "int64")
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise OverflowError(f"can't convert to int64: {value!r} is out of range")
    return number


def ensure_uint64(value) -> int:
    """Return ``value`` as an unsigned 64-bit integer; negatives wrap around."""
    number = _require_int(value, "uint64")
    if not _INT64_MIN <= number <= _UINT64_MASK:
        raise OverflowError(f"can't convert to uint64: {value!r} is out of range")
    return number & _UINT64_MASK