# hessian2

A pure Python implementation of the scalar part of the Hessian 2.0 binary
serialization format, with a reader for Dubbo protocol packet headers.

It needs no third-party libraries at run time.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Encoding values

`hessian2.encoder.Encoder` collects encoded values in an internal buffer.
Each call to `encode` appends one value.

```python
from hessian2.encoder import Encoder, Float32

encoder = Encoder()
encoder.encode(True)
encoder.encode(0x20161024)
encoder.encode(b"\x0a\x09\x08")
encoder.encode(Float32(99.8))
encoder.encode(2016.1024)
data = encoder.buffer()
```

`encode` accepts:

- `None`, written as null;
- `bool`;
- `int` values that fit in 32 bits, written in the most compact integer
  form; larger integers raise `HessianError`;
- `float`, written as a double, using the short forms for small whole
  numbers;
- `Float32`, a `float` subclass rounded to single precision, written with
  the single-precision rules (including the millisecond form, so that
  `Float32(99.8)` decodes back as `99.8`);
- `datetime.datetime`, written as milliseconds since the epoch; a naive
  datetime is taken as UTC, and `ZERO_DATE` is written as null;
- `bytes`, `bytearray` and `memoryview`, written as binary data in chunks
  of at most 4096 bytes.

Any other type raises `hessian2.constants.HessianError`.

`clean()` starts over with an empty buffer, `reuse_buffer_clean()` does
the same while keeping small buffer storage, and `append(data)` adds raw
bytes to the buffer.

The low-level encoders are also available as functions that return `bytes`:
`enc_bool`, `enc_binary`, `enc_int32`, `enc_float`, `enc_float32`,
`enc_date_in_ms` and `enc_date_in_minute`.

## Decoding values

```python
from hessian2.decoder import Decoder

decoder = Decoder(data)
flag = decoder.decode()      # True
number = decoder.decode()    # 538316836
blob = decoder.decode()      # b"\n\t\x08"
single = decoder.decode()    # 99.8
double = decoder.decode()    # 2016.1024
```

`decode` returns `None`, `bool`, `int` (32-bit integers), `float`,
`bytes`, or a UTC-aware `datetime.datetime` for dates. At the end of the
data, or on an end tag, it raises `EOFError`. Truncated input raises
`NotEnoughBufferError`, and unknown tags raise `HessianError`.

`read_byte()` and `discard(n)` handle framing bytes between values,
`buffered()` reports how many bytes are left unread, `clean()` forgets
reference tables while keeping the read position, and `reset(data)`
starts over on new input.

## Fixed-width packing

`hessian2.packing` holds big-endian helpers:

```python
from hessian2.packing import pack_int32, unpack_int32, sprint_hex

raw = pack_int32(0x12344678)
assert unpack_int32(raw) == 0x12344678
print(sprint_hex(raw))   # []byte{0x12,0x34,0x46,0x78,}
```

There are `pack_int8`, `pack_int16`, `pack_uint16`, `pack_int64` and
`pack_float64`, with matching `unpack_*` functions that raise
`NotEnoughBufferError` on short input. `ensure_int64`, `ensure_uint64` and
`ensure_float64` check and convert numbers, raising `TypeError` or
`OverflowError`.

## Java 8 time types

`hessian2.java8_time` provides dataclasses `Duration`, `Instant`,
`LocalDate`, `LocalTime`, `LocalDateTime`, `MonthDay`, `OffsetDateTime`,
`OffsetTime`, `Period`, `Year`, `YearMonth`, `ZoneOffset` and
`ZonedDateTime`. Each field carries its Java field name in its
`"hessian"` metadata, and `java_class_name()` returns the Java handle
class the type maps to.

## Dubbo headers

`hessian2.dubbo` describes Dubbo packets with `DubboHeader`, the
`PackageType` flags and `Service`.

```python
from hessian2.dubbo import HessianCodec

codec = HessianCodec(packet_bytes)   # bytes or a binary file-like object
header = codec.read_header()
print(header.serial_id, header.type, header.id, header.body_len)
body = codec.body
```

`read_header()` reads the 16-byte header and then the body it announces,
returns the header and keeps the raw body in `codec.body`. It raises
`HeaderNotEnoughError` or `BodyNotEnoughError` on short input,
`IllegalPackageError` on bad magic bytes, and `HessianError` when the
serialization id is zero.

## What this package does not do

- It does not encode or decode strings, 64-bit longs, lists, maps, typed
  objects or references; the decoder raises `HessianError` on those tags.
- It has no registry of Java classes, so the `java8_time` types are plain
  values and are not written or read by `Encoder` and `Decoder`.
- It does not build Dubbo packets, and it does not decode request or
  response bodies or their attachments; `HessianCodec` only parses the
  header and hands back the raw body bytes.