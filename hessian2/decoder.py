"""Decoding of scalar values from the Hessian 2 wire format."""

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
    BC_END,
    BC_FALSE,
    BC_INT,
    BC_INT_BYTE_ZERO,
    BC_INT_SHORT_ZERO,
    BC_INT_ZERO,
    BC_LIST_DIRECT,
    BC_LIST_DIRECT_UNTYPED,
    BC_LIST_FIXED,
    BC_LIST_FIXED_UNTYPED,
    BC_LIST_VARIABLE,
    BC_LIST_VARIABLE_UNTYPED,
    BC_LONG,
    BC_LONG_INT,
    BC_MAP,
    BC_MAP_UNTYPED,
    BC_NULL,
    BC_OBJECT,
    BC_OBJECT_DEF,
    BC_OBJECT_DIRECT,
    BC_REF,
    BC_STRING,
    BC_STRING_CHUNK,
    BC_STRING_DIRECT,
    BC_TRUE,
    INT_DIRECT_MAX,
    OBJECT_DIRECT_MAX,
    STRING_DIRECT_MAX,
    HessianError,
    NotEnoughBufferError,
)
from .packing import unpack_float64, unpack_int16, unpack_int32, unpack_int64

__all__ = ["Decoder"]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _is_long_tag(tag: int) -> bool:
    return 0xD8 <= tag <= 0xFF or 0x38 <= tag <= 0x3F or tag in (BC_LONG_INT, BC_LONG)


def _is_string_tag(tag: int) -> bool:
    return (
        tag in (BC_STRING_CHUNK, BC_STRING)
        or BC_STRING_DIRECT <= tag <= STRING_DIRECT_MAX
        or 0x30 <= tag <= 0x33
    )


def _is_composite_tag(tag: int) -> bool:
    return (
        tag == BC_REF
        or BC_LIST_DIRECT <= tag <= 0x7F
        or tag
        in (
            BC_LIST_FIXED,
            BC_LIST_VARIABLE,
            BC_LIST_FIXED_UNTYPED,
            BC_LIST_VARIABLE_UNTYPED,
            BC_MAP,
            BC_MAP_UNTYPED,
            BC_OBJECT_DEF,
            BC_OBJECT,
        )
        or BC_OBJECT_DIRECT <= tag <= BC_OBJECT_DIRECT + OBJECT_DIRECT_MAX
    )


class Decoder:
    """Reads Hessian-encoded values one after another from a byte string."""

    def __init__(self, data=b"", skip: bool = False) -> None:
        self.skip = skip
        self._data = bytes(data)
        self._pos = 0
        self._refs: list = []
        self._type_refs: dict = {}

    def clean(self) -> None:
        """Forget reference tables; the read position is kept."""
        self._refs = []
        self._type_refs = {}

    def reset(self, data) -> "Decoder":
        """Start reading ``data`` from its beginning with clean state."""
        self._data = bytes(data)
        self._pos = 0
        self.clean()
        return self

    def buffered(self) -> int:
        """Return the number of bytes not yet read."""
        return len(self._data) - self._pos

    def read_byte(self) -> int:
        """Read and return the next byte; raise EOFError at the end."""
        if self._pos >= len(self._data):
            raise EOFError("no more data")
        byte = self._data[self._pos]
        self._pos += 1
        return byte

    def discard(self, n: int) -> int:
        """Skip the next ``n`` bytes; raise EOFError if fewer remain."""
        available = min(n, self.buffered())
        self._pos += available
        if available < n:
            raise EOFError(f"only {available} of {n} bytes could be discarded")
        return available

    def _take(self, n: int) -> bytes:
        if self.buffered() < n:
            self._pos = len(self._data)
            raise NotEnoughBufferError()
        chunk = self._data[self._pos : self._pos + n]
        self._pos += n
        return chunk

    def decode(self):
        """Decode the next value; raise EOFError at the end or on an end tag."""
        tag = self.read_byte()

        if tag == BC_END:
            raise EOFError("end tag")
        if tag == BC_NULL:
            return None
        if tag == BC_TRUE:
            return True
        if tag == BC_FALSE:
            return False
        if tag == BC_REF:
            raise HessianError("references are not supported")
        if 0x80 <= tag <= 0xD7 or tag == BC_INT:
            return self._dec_int32(tag)
        if _is_long_tag(tag):
            raise HessianError(f"64-bit integers are not supported, tag 0x{tag:02x}")
        if tag in (BC_DATE_MINUTE, BC_DATE):
            return self._dec_date(tag)
        if tag in (
            BC_DOUBLE_ZERO,
            BC_DOUBLE_ONE,
            BC_DOUBLE_BYTE,
            BC_DOUBLE_SHORT,
            BC_DOUBLE_MILL,
            BC_DOUBLE,
        ):
            return self._dec_double(tag)
        if _is_string_tag(tag):
            raise HessianError(f"strings are not supported, tag 0x{tag:02x}")
        if tag in (BC_BINARY, BC_BINARY_CHUNK) or 0x20 <= tag <= 0x2F or BC_BINARY_SHORT <= tag <= 0x3F:
            return self._dec_binary(tag)
        if _is_composite_tag(tag):
            raise HessianError(f"lists, maps and objects are not supported, tag 0x{tag:02x}")

        rest = self._data[self._pos :]
        raise HessianError(f"Invalid type: {chr(tag)!r},>>{list(rest)}<<<")

    def _dec_int32(self, tag: int) -> int:
        if 0x80 <= tag <= 0xBF:
            return tag - BC_INT_ZERO
        if 0xC0 <= tag <= 0xCF:
            (low,) = self._take(1)
            return ((tag - BC_INT_BYTE_ZERO) << 8) + low
        if 0xD0 <= tag <= 0xD7:
            high, low = self._take(2)
            return ((tag - BC_INT_SHORT_ZERO) << 16) + (high << 8) + low
        if tag == BC_INT:
            return unpack_int32(self._take(4))
        raise HessianError(f"decInt32 integer wrong tag:0x{tag:02x}")

    def _dec_double(self, tag: int) -> float:
        if tag == BC_DOUBLE_ZERO:
            return 0.0
        if tag == BC_DOUBLE_ONE:
            return 1.0
        if tag == BC_DOUBLE_BYTE:
            (byte,) = self._take(1)
            return float(byte - 0x100 if byte >= 0x80 else byte)
        if tag == BC_DOUBLE_SHORT:
            return float(unpack_int16(self._take(2)))
        if tag == BC_DOUBLE_MILL:
            return unpack_int32(self._take(4)) / 1000
        if tag == BC_DOUBLE:
            return unpack_float64(self._take(8))
        raise HessianError(f"decDouble parse double wrong tag:{tag}-0x{tag:x}")

    def _dec_date(self, tag: int) -> datetime:
        if tag == BC_DATE:
            millis = unpack_int64(self._take(8))
            return _EPOCH + timedelta(milliseconds=millis)
        if tag == BC_DATE_MINUTE:
            minutes = unpack_int32(self._take(4))
            return _EPOCH + timedelta(minutes=minutes)
        raise HessianError(f"decDate Invalid type: {tag}")

    def _binary_length(self, tag: int) -> int:
        if BC_BINARY_DIRECT <= tag <= INT_DIRECT_MAX:
            return tag - BC_BINARY_DIRECT
        if BC_BINARY_SHORT <= tag <= 0x37:
            (low,) = self._take(1)
            return ((tag - BC_BINARY_SHORT) << 8) + low
        if tag not in (BC_BINARY_CHUNK, BC_BINARY):
            raise HessianError(f"illegal binary tag:{tag}")
        high, low = self._take(2)
        return (high << 8) + low

    def _dec_binary(self, tag: int) -> bytes:
        if tag == BC_NULL:
            return b""
        data = bytearray()
        while True:
            data += self._take(self._binary_length(tag))
            if tag != BC_BINARY_CHUNK:
                return bytes(data)
            try:
                tag = self.read_byte()
            except EOFError as exc:
                raise NotEnoughBufferError() from exc