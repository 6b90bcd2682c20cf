"""Encoding of scalar values into the Hessian 2 wire format."""

import math
import struct
from datetime import datetime, timedelta, timezone

from .constants import (
    BC_BINARY,
    BC_BINARY_CHUNK,
    BC_BINARY_DIRECT,
    BC_BINARY_SHORT,
    BC_DATE,
    BC_DATE_MINUTE,
    BC_DOUBLE,
    BC_DOUBLE_BYTE,
    BC_DOUBLE_MILL,
    BC_DOUBLE_ONE,
    BC_DOUBLE_SHORT,
    BC_DOUBLE_ZERO,
    BC_FALSE,
    BC_INT,
    BC_INT_BYTE_ZERO,
    BC_INT_SHORT_ZERO,
    BC_INT_ZERO,
    BC_NULL,
    BC_TRUE,
    BINARY_DIRECT_MAX,
    BINARY_SHORT_MAX,
    CHUNK_SIZE,
    INT_BYTE_MAX,
    INT_BYTE_MIN,
    INT_DIRECT_MAX,
    INT_DIRECT_MIN,
    INT_SHORT_MAX,
    INT_SHORT_MIN,
    HessianError,
)
from .packing import pack_float64, pack_int32, pack_int64

__all__ = [
    "ZERO_DATE",
    "Float32",
    "Encoder",
    "enc_bool",
    "enc_binary",
    "enc_int32",
    "enc_float",
    "enc_float32",
    "enc_date_in_ms",
    "enc_date_in_minute",
]

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

ZERO_DATE = datetime(1, 1, 1, tzinfo=timezone.utc)
"""The zero time instant; it is written as null."""


def _to_float32(value: float) -> float:
    try:
        return struct.unpack(">f", struct.pack(">f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


class Float32(float):
    """A float rounded to single precision, encoded with the 32-bit rules."""

    def __new__(cls, value=0.0):
        return super().__new__(cls, _to_float32(float(value)))


def enc_bool(value: bool) -> bytes:
    """Encode a boolean as ``T`` or ``F``."""
    return bytes([BC_TRUE if value else BC_FALSE])


def enc_binary(value) -> bytes:
    """Encode binary data, split into chunks of at most ``CHUNK_SIZE`` bytes."""
    if value is None:
        return bytes([BC_NULL])

    data = bytes(value)
    out = bytearray()
    while True:
        length = len(data)
        if length > CHUNK_SIZE:
            length = CHUNK_SIZE
            out += bytes([BC_BINARY_CHUNK, (length >> 8) & 0xFF, length & 0xFF])
        elif length <= BINARY_DIRECT_MAX:
            out.append(BC_BINARY_DIRECT + length)
        elif length <= BINARY_SHORT_MAX:
            out += bytes([BC_BINARY_SHORT + (length >> 8), length & 0xFF])
        else:
            out += bytes([BC_BINARY, (length >> 8) & 0xFF, length & 0xFF])

        out += data[:length]
        data = data[length:]
        if not data:
            return bytes(out)


def enc_int32(value: int) -> bytes:
    """Encode a 32-bit signed integer in its most compact form."""
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise OverflowError(f"{value} does not fit in a 32-bit integer")
    if INT_DIRECT_MIN <= value <= INT_DIRECT_MAX:
        return bytes([value + BC_INT_ZERO])
    if INT_BYTE_MIN <= value <= INT_BYTE_MAX:
        return bytes([(BC_INT_BYTE_ZERO + (value >> 8)) & 0xFF, value & 0xFF])
    if INT_SHORT_MIN <= value <= INT_SHORT_MAX:
        return bytes(
            [(BC_INT_SHORT_ZERO + (value >> 16)) & 0xFF, (value >> 8) & 0xFF, value & 0xFF]
        )
    return bytes([BC_INT]) + pack_int32(value)


def _compact_integral(iv: int):
    if iv == 0:
        return bytes([BC_DOUBLE_ZERO])
    if iv == 1:
        return bytes([BC_DOUBLE_ONE])
    if -0x80 <= iv < 0x80:
        return bytes([BC_DOUBLE_BYTE, iv & 0xFF])
    if -0x8000 <= iv < 0x8000:
        return bytes([BC_DOUBLE_SHORT, (iv >> 8) & 0xFF, iv & 0xFF])
    return None


def enc_float(value: float) -> bytes:
    """Encode a double, using the short forms for small whole numbers."""
    value = float(value)
    if math.isfinite(value) and value.is_integer() and _INT64_MIN <= value <= _INT64_MAX:
        compact = _compact_integral(int(value))
        if compact is not None:
            return compact
    return bytes([BC_DOUBLE]) + pack_float64(value)


def _shortest_float32_text(value: float) -> str:
    for precision in range(1, 10):
        text = f"{value:.{precision}g}"
        if _to_float32(float(text)) == value:
            return text
    return repr(value)


def enc_float32(value: float) -> bytes:
    """Encode a single-precision float, preferring the millisecond form."""
    value = Float32(value)
    if math.isfinite(value) and value.is_integer() and _INT32_MIN <= value <= _INT32_MAX:
        compact = _compact_integral(int(value))
        if compact is not None:
            return compact

    mill = _to_float32(value * 1000)
    if math.isfinite(mill) and mill.is_integer() and _INT32_MIN <= mill <= _INT32_MAX:
        return bytes([BC_DOUBLE_MILL]) + pack_int32(int(mill))

    if math.isfinite(value):
        widened = float(_shortest_float32_text(float(value)))
    else:
        widened = float(value)
    return bytes([BC_DOUBLE]) + pack_float64(widened)


def _epoch_micros(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    delta: timedelta = moment - _EPOCH
    return (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // denominator
    return quotient if numerator >= 0 else -quotient


def enc_date_in_ms(value) -> bytes:
    """Encode a datetime as milliseconds since the epoch; naive means UTC."""
    if value is None or value == ZERO_DATE:
        return bytes([BC_NULL])
    millis = _trunc_div(_epoch_micros(value), 1000)
    return bytes([BC_DATE]) + pack_int64(millis)


def enc_date_in_minute(value: datetime) -> bytes:
    """Encode a datetime as whole minutes since the epoch; naive means UTC."""
    minutes = _trunc_div(_epoch_micros(value), 60_000_000)
    return bytes([BC_DATE_MINUTE]) + pack_int32(minutes)


class Encoder:
    """Accumulates encoded values in an internal buffer."""

    _REUSE_LIMIT = 512

    def __init__(self) -> None:
        self._buffer = bytearray()

    def clean(self) -> None:
        """Start over with an empty buffer."""
        self._buffer = bytearray()

    def reuse_buffer_clean(self) -> None:
        """Start over, keeping the current buffer storage when it is small."""
        if len(self._buffer) <= self._REUSE_LIMIT:
            self._buffer.clear()
        else:
            self._buffer = bytearray()

    def buffer(self) -> bytes:
        """Return the bytes written so far."""
        return bytes(self._buffer)

    def append(self, data) -> None:
        """Append raw bytes to the buffer."""
        self._buffer += bytes(data)

    def encode(self, value) -> None:
        """Encode ``value`` and append it to the buffer."""
        self._buffer += self._encode_value(value)

    @staticmethod
    def _encode_value(value) -> bytes:
        if value is None:
            return bytes([BC_NULL])
        if isinstance(value, bool):
            return enc_bool(value)
        if isinstance(value, Float32):
            return enc_float32(value)
        if isinstance(value, float):
            return enc_float(value)
        if isinstance(value, int):
            if not _INT32_MIN <= value <= _INT32_MAX:
                raise HessianError(f"type not supported! integer {value} exceeds 32 bits")
            return enc_int32(value)
        if isinstance(value, datetime):
            return enc_date_in_ms(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return enc_binary(value)
        raise HessianError(f"type not supported! {type(value).__name__}")