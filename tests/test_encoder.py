from datetime import datetime, timedelta, timezone

import pytest

from hessian2.constants import HessianError
from hessian2.encoder import (
    ZERO_DATE,
    Encoder,
    Float32,
    enc_binary,
    enc_bool,
    enc_date_in_minute,
    enc_date_in_ms,
    enc_float,
    enc_float32,
    enc_int32,
)
from hessian2.packing import pack_float64

S16 = "0123456789012345"
S1024 = "".join(
    f"{i:02d} 456789012345678901234567890123456789012345678901234567890123\n" for i in range(16)
)
S65560 = "".join(
    f"{i:03d} 56789012345678901234567890123456789012345678901234567890123\n" for i in range(1024)
)


def _encode(value) -> bytes:
    encoder = Encoder()
    encoder.encode(value)
    return encoder.buffer()


# ---- boolean ----


def test_enc_bool_true():
    assert _encode(True) == b"\x54"
    assert enc_bool(True) == b"T"


def test_enc_bool_false():
    assert _encode(False) == b"\x46"
    assert enc_bool(False) == b"F"


# ---- binary ----


def test_enc_binary_empty():
    assert _encode(b"") == b"\x20"


def test_enc_binary_direct():
    data = bytes([10, 9, 8, 7, 6, 5, 4, 3, 2, 1]) + b"abcd"
    assert _encode(data) == bytes([0x2E]) + data


def test_enc_binary_short():
    data = bytes(i % 123 for i in range(1010))
    assert _encode(data) == bytes([0x37, 0xF2]) + data


@pytest.mark.parametrize(
    "data, header",
    [
        (b"0", b"\x21"),
        (S16[:15].encode(), b"\x2f"),
        (S16.encode(), b"\x34\x10"),
        (S1024[:1023].encode(), b"\x37\xff"),
        (S1024.encode(), b"B\x04\x00"),
    ],
)
def test_enc_binary_length_forms(data, header):
    assert enc_binary(data) == header + data


def test_enc_binary_null():
    assert enc_binary(None) == b"N"


def test_enc_binary_chunked():
    data = bytes(i % 123 for i in range(65530))
    expected = b"".join(b"A\x10\x00" + data[k * 4096 : (k + 1) * 4096] for k in range(15))
    expected += b"B\x0f\xfa" + data[61440:]
    assert _encode(data) == expected


def test_enc_binary_exact_chunks():
    data = S65560[:65536].encode()
    expected = b"".join(b"A\x10\x00" + data[k * 4096 : (k + 1) * 4096] for k in range(15))
    expected += b"B\x10\x00" + data[61440:]
    assert enc_binary(data) == expected


def test_enc_binary_one_past_chunk():
    data = bytes(4097)
    assert enc_binary(data) == b"A\x10\x00" + data[:4096] + b"\x21" + data[4096:]


# ---- int ----


def test_enc_int32_len1b():
    assert _encode(0xE6) == b"\xc8\xe6"


def test_enc_int32_len2b():
    assert _encode(0xF016) == b"\xd4\xf0\x16"


def test_enc_int32_len4b():
    assert _encode(0x20161024) == b"I\x20\x16\x10\x24"


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, b"\x90"),
        (1, b"\x91"),
        (47, b"\xbf"),
        (-16, b"\x80"),
        (-17, b"\xc7\xef"),
        (0x30, b"\xc8\x30"),
        (0x7FF, b"\xcf\xff"),
        (-0x800, b"\xc0\x00"),
        (0x800, b"\xd4\x08\x00"),
        (-0x801, b"\xd3\xf7\xff"),
        (0x3FFFF, b"\xd7\xff\xff"),
        (-0x40000, b"\xd0\x00\x00"),
        (0x40000, b"I\x00\x04\x00\x00"),
        (-0x40001, b"I\xff\xfb\xff\xff"),
        (0x7FFFFFFF, b"I\x7f\xff\xff\xff"),
        (-0x80000000, b"I\x80\x00\x00\x00"),
    ],
)
def test_enc_int32_forms(value, expected):
    assert enc_int32(value) == expected
    assert _encode(value) == expected


def test_enc_int32_out_of_range():
    with pytest.raises(OverflowError):
        enc_int32(1 << 31)


def test_encode_wide_int_rejected():
    with pytest.raises(HessianError):
        _encode(1 << 40)


# ---- double ----


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.0, b"\x5b"),
        (1.0, b"\x5c"),
        (2.0, b"\x5d\x02"),
        (127.0, b"\x5d\x7f"),
        (-128.0, b"\x5d\x80"),
        (128.0, b"\x5e\x00\x80"),
        (-129.0, b"\x5e\xff\x7f"),
        (32767.0, b"\x5e\x7f\xff"),
        (-32768.0, b"\x5e\x80\x00"),
    ],
)
def test_enc_double_compact(value, expected):
    assert enc_float(value) == expected
    assert _encode(value) == expected


@pytest.mark.parametrize("value", [0.001, -0.001, 3.14159, 65.536, 2016.1024, 32768.0])
def test_enc_double_full(value):
    assert _encode(value) == b"D" + pack_float64(value)


def test_issue181_float32_uses_mill():
    assert _encode(Float32(99.8)) == b"\x5f\x00\x01\x85\xd8"


def test_float32_compact_and_mill():
    assert enc_float32(0.0) == b"\x5b"
    assert enc_float32(2.0) == b"\x5d\x02"
    assert enc_float32(1.5) == b"\x5f\x00\x00\x05\xdc"
    assert enc_float32(0.1) == b"\x5f\x00\x00\x00\x64"


def test_float32_full_uses_shortest_decimal():
    assert enc_float32(1 / 3) == b"D" + pack_float64(0.33333334)


def test_float32_rounds_on_construction():
    assert Float32(0.1) == pytest.approx(0.1, rel=1e-7)
    assert float(Float32(0.1)) != 0.1


# ---- date ----


def test_enc_date_epoch():
    moment = datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert _encode(moment) == b"\x4a" + bytes(8)


def test_enc_date_ms_spec_value():
    moment = datetime(1998, 5, 8, 9, 51, 31, tzinfo=timezone.utc)
    assert enc_date_in_ms(moment) == b"\x4a\x00\x00\x00\xd0\x4b\x92\x84\xb8"


def test_enc_date_with_offset_and_naive():
    expected = b"\x4a\x00\x00\x00\xd0\x4b\x92\x84\xb8"
    shifted = datetime(1998, 5, 8, 17, 51, 31, tzinfo=timezone(timedelta(hours=8)))
    assert _encode(shifted) == expected
    assert _encode(datetime(1998, 5, 8, 9, 51, 31)) == expected


def test_enc_date_minute_spec_value():
    moment = datetime(1998, 5, 8, 9, 51, tzinfo=timezone.utc)
    assert enc_date_in_minute(moment) == b"\x4b\x00\xe3\x83\x8f"


def test_enc_date_truncates_toward_zero():
    moment = datetime(1969, 12, 31, 23, 59, 59, 999500, tzinfo=timezone.utc)
    assert enc_date_in_ms(moment) == b"\x4a" + bytes(8)


def test_enc_date_null():
    assert _encode(ZERO_DATE) == b"N"
    assert enc_date_in_ms(None) == b"N"


# ---- encoder ----


def test_encode_none():
    assert _encode(None) == b"N"


def test_encoder_accumulates_and_cleans():
    encoder = Encoder()
    encoder.encode(True)
    encoder.encode(0)
    encoder.append(b"\x01\x02")
    assert encoder.buffer() == b"T\x90\x01\x02"
    encoder.clean()
    assert encoder.buffer() == b""
    encoder.encode(False)
    encoder.reuse_buffer_clean()
    encoder.encode(1)
    assert encoder.buffer() == b"\x91"


def test_reuse_buffer_clean_large_buffer():
    encoder = Encoder()
    encoder.encode(bytes(2000))
    encoder.reuse_buffer_clean()
    assert encoder.buffer() == b""


def test_encode_unsupported_type():
    with pytest.raises(HessianError):
        _encode(object())