import pytest

from propfeed.abi.codec import decode, decode_single, encode, encode_single
from propfeed.abi.types import parse_type
from propfeed.errors import AbiTypeError, DecodeError, EncodeError

SIG = ("string", "uint256", "uint256")
UINT256_MAX = 2**256 - 1


def _word(n: int) -> bytes:
    return n.to_bytes(32, "big")


def test_property_tuple_known_layout():
    out = encode(SIG, ("123 Main St", 1998, 5000))

    expected = (
        _word(0x60)
        + _word(1998)
        + _word(5000)
        + _word(11)
        + b"123 Main St".ljust(32, b"\x00")
    )
    assert out == expected
    assert len(out) == 5 * 32


def test_round_trip_and_determinism():
    values = ("742 Evergreen Terrace, Springfield", 1989, 12345)
    a = encode(SIG, values)
    b = encode(SIG, values)
    assert a == b
    assert decode(SIG, a) == values


def test_round_trip_unicode_and_long_string():
    addr = "Calle Niño 5, São Paulo " * 4
    out = encode(SIG, (addr, 0, UINT256_MAX))
    assert len(out) % 32 == 0
    assert decode(SIG, out) == (addr, 0, UINT256_MAX)


def test_string_exactly_one_word_has_no_extra_padding():
    s = "x" * 32
    out = encode_single("string", s)
    # offset + length + one data word
    assert len(out) == 3 * 32
    assert decode_single("string", out) == s


def test_empty_string():
    out = encode(SIG, ("", 1, 2))
    assert out[3 * 32 : 4 * 32] == _word(0)
    assert len(out) == 4 * 32
    assert decode(SIG, out) == ("", 1, 2)


@pytest.mark.parametrize("value", [0, UINT256_MAX])
def test_uint256_bounds_ok(value):
    assert decode_single("uint256", encode_single("uint256", value)) == value


@pytest.mark.parametrize("value", [-1, 2**256])
def test_uint256_out_of_range(value):
    with pytest.raises(EncodeError):
        encode(SIG, ("a", value, 1))


def test_uint_rejects_bool_and_float():
    with pytest.raises(EncodeError):
        encode_single("uint256", True)
    with pytest.raises(EncodeError):
        encode_single("uint256", 1.5)


def test_string_with_lone_surrogate_fails():
    with pytest.raises(EncodeError):
        encode(SIG, ("bad \ud800", 1, 2))


def test_arity_mismatch():
    with pytest.raises(EncodeError):
        encode(SIG, ("a", 1))


def test_dynamic_tails_follow_head_order():
    out = encode(("string", "uint8", "bytes"), ("ab", 7, b"\x01\x02\x03"))

    assert out[0:32] == _word(0x60)
    assert out[32:64] == _word(7)
    # "ab" tail takes two words, so bytes starts at 0x60 + 0x40
    assert out[64:96] == _word(0xA0)
    assert out[0x60:0x80] == _word(2)
    assert out[0xA0:0xC0] == _word(3)
    assert decode(("string", "uint8", "bytes"), out) == ("ab", 7, b"\x01\x02\x03")


def test_int_twos_complement():
    out = encode_single("int256", -1)
    assert out == b"\xff" * 32
    assert decode_single("int256", out) == -1

    with pytest.raises(EncodeError):
        encode_single("int8", 128)
    assert decode_single("int8", encode_single("int8", -128)) == -128


def test_bool_address_and_fixed_bytes():
    addr = "0x" + "ab" * 20
    types = ("bool", "address", "bytes4")
    values = (True, addr, b"\xde\xad\xbe\xef")
    out = encode(types, values)

    assert out[:32] == _word(1)
    assert out[32:44] == b"\x00" * 12
    assert decode(types, out) == values

    with pytest.raises(EncodeError):
        encode_single("address", "0x1234")
    with pytest.raises(EncodeError):
        encode_single("bytes4", b"\x00")


def test_arrays():
    types = ("uint256[]", "string[2]", "uint16[3]")
    values = ((1, 2, 3), ("a", "bc"), (4, 5, 6))
    out = encode(types, values)
    assert decode(types, out) == values

    # static array sits in the head
    assert parse_type("uint16[3]").head_size == 96
    assert parse_type("string[2]").is_dynamic
    # heads: two offsets + three inline uint16 words
    assert out[0:32] == _word(160)
    # uint256[] tail is its length word plus three items
    assert out[32:64] == _word(160 + 128)
    assert out[64:160] == _word(4) + _word(5) + _word(6)

    with pytest.raises(EncodeError):
        encode_single("uint8[2]", [1])


@pytest.mark.parametrize("bad", ["uint7", "uint264", "bytes33", "bytes0", "float", "tuple", "uint8[0]"])
def test_parse_type_rejects(bad):
    with pytest.raises(AbiTypeError):
        parse_type(bad)


def test_parse_type_aliases():
    assert parse_type("uint") == parse_type("uint256")
    assert str(parse_type("int")) == "int256"
    assert str(parse_type("bytes32[][4]")) == "bytes32[][4]"


def test_decode_truncated():
    out = encode(SIG, ("123 Main St", 1998, 5000))
    with pytest.raises(DecodeError):
        decode(SIG, out[:-1])
    with pytest.raises(DecodeError):
        decode(SIG, out[:64])


def test_decode_bad_offset_and_padding():
    out = bytearray(encode(SIG, ("123 Main St", 1998, 5000)))

    bad_offset = bytes(_word(10_000)) + bytes(out[32:])
    with pytest.raises(DecodeError):
        decode(SIG, bad_offset)

    out[-1] = 1
    with pytest.raises(DecodeError):
        decode(SIG, bytes(out))


def test_decode_rejects_out_of_range_small_uint_and_bool():
    with pytest.raises(DecodeError):
        decode_single("uint8", _word(256))
    with pytest.raises(DecodeError):
        decode_single("bool", _word(2))


def test_decode_invalid_utf8():
    data = _word(32) + _word(1) + b"\xff".ljust(32, b"\x00")
    with pytest.raises(DecodeError):
        decode_single("string", data)
