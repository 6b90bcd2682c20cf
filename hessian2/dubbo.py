"""Dubbo protocol packet headers read from a byte stream."""

import io
from dataclasses import dataclass, field
from datetime import timedelta
from enum import IntFlag

from .constants import (
    FLAG_EVENT,
    FLAG_REQUEST,
    FLAG_TWOWAY,
    HEADER_LENGTH,
    MAGIC_HIGH,
    MAGIC_LOW,
    RESPONSE_OK,
    SERIAL_MASK,
    ZERO,
    BodyNotEnoughError,
    HeaderNotEnoughError,
    HessianError,
    IllegalPackageError,
)
from .packing import unpack_int64

__all__ = [
    "PACKAGE_TYPE_BIT_SIZE",
    "PackageType",
    "DubboHeader",
    "Service",
    "HessianCodec",
]

PACKAGE_TYPE_BIT_SIZE = 0x2F


class PackageType(IntFlag):
    """Kinds of dubbo package; a header may combine several."""

    ERROR = 0x01
    REQUEST = 0x02
    RESPONSE = 0x04
    HEARTBEAT = 0x08
    REQUEST_TWO_WAY = 0x10
    RESPONSE_EXCEPTION = 0x20


@dataclass
class DubboHeader:
    """The fixed 16-byte header in front of every dubbo package."""

    serial_id: int = 0
    type: PackageType = PackageType(0)
    id: int = 0
    body_len: int = 0
    response_status: int = 0


@dataclass
class Service:
    """Identifies the remote service and method a request is aimed at."""

    path: str = ""
    interface: str = ""
    group: str = ""
    version: str = ""
    method: str = ""
    timeout: timedelta = field(default_factory=timedelta)


class HessianCodec:
    """Reads dubbo package headers, and the bodies they announce, from a stream."""

    def __init__(self, reader) -> None:
        if isinstance(reader, (bytes, bytearray, memoryview)):
            reader = io.BytesIO(bytes(reader))
        self._reader = reader
        self.pkg_type = PackageType(0)
        self.body_len = 0
        self.body = b""

    def _read_up_to(self, n: int) -> bytes:
        chunks = bytearray()
        while len(chunks) < n:
            chunk = self._reader.read(n - len(chunks))
            if not chunk:
                break
            chunks += chunk
        return bytes(chunks)

    def read_header(self) -> DubboHeader:
        """Read the next header and the body it announces; return the header."""
        buf = self._read_up_to(HEADER_LENGTH)
        if len(buf) < HEADER_LENGTH:
            raise HeaderNotEnoughError()

        # Only a packet whose two magic bytes are both wrong is rejected.
        if buf[0] != MAGIC_HIGH and buf[1] != MAGIC_LOW:
            raise IllegalPackageError()

        header = DubboHeader()
        header.serial_id = buf[2] & SERIAL_MASK
        if header.serial_id == ZERO:
            raise HessianError(f"serialization ID:{header.serial_id}")

        package_type = PackageType(0)
        if buf[2] & FLAG_EVENT:
            package_type |= PackageType.HEARTBEAT
        if buf[2] & FLAG_REQUEST:
            package_type |= PackageType.REQUEST
            if buf[2] & FLAG_TWOWAY:
                package_type |= PackageType.REQUEST_TWO_WAY
        else:
            package_type |= PackageType.RESPONSE
            header.response_status = buf[3]
            if header.response_status != RESPONSE_OK:
                package_type |= PackageType.RESPONSE_EXCEPTION
        header.type = package_type

        header.id = unpack_int64(buf[4:12])
        header.body_len = int.from_bytes(buf[12:16], "big")

        self.pkg_type = header.type
        self.body_len = header.body_len

        body = self._read_up_to(header.body_len)
        if len(body) < header.body_len:
            raise BodyNotEnoughError()
        self.body = body
        return header