# propfeed/abi/codec.py
"""
Solidity contract ABI encoding.

A tuple is laid out as a head followed by a tail:

  - static values (uintN, intN, bool, address, bytesN, static T[k]) sit in
    the head, in declaration order, one or more 32-byte words each;
  - dynamic values (string, bytes, T[], T[k] with a dynamic T) put a 32-byte
    offset in the head and their data in the tail. Offsets count from the
    start of the tuple and tails appear in the same order as their heads.

string/bytes data is a length word followed by the bytes, right-padded with
zeros to a multiple of 32. Arrays are encoded as tuples of their items,
dynamic arrays with a leading length word.
"""
from __future__ import annotations

from typing import Any, Sequence

from ..errors import DecodeError, EncodeError
from .types import WORD, AbiType, parse_signature, parse_type

_UINT256_MOD = 1 << 256


def _pad_right(data: bytes) -> bytes:
    rem = len(data) % WORD
    return data if rem == 0 else data + b"\x00" * (WORD - rem)


def _uint_word(value: int) -> bytes:
    return value.to_bytes(WORD, "big")


# -------------------------
# Encoding
# -------------------------


def _require_int(t: AbiType, value: Any) -> int:
    # bool is an int subclass; keep it out of integer slots
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodeError(f"{t} expects int, got {type(value).__name__}")
    return value


def _encode_bytes_block(data: bytes) -> bytes:
    return _uint_word(len(data)) + _pad_right(data)


def _encode_value(t: AbiType, value: Any) -> bytes:
    kind = t.kind

    if kind == "uint":
        v = _require_int(t, value)
        assert t.size is not None
        if v < 0 or v >= (1 << t.size):
            raise EncodeError(f"value out of range for {t}: {v}")
        return _uint_word(v)

    if kind == "int":
        v = _require_int(t, value)
        assert t.size is not None
        bound = 1 << (t.size - 1)
        if not -bound <= v < bound:
            raise EncodeError(f"value out of range for {t}: {v}")
        return _uint_word(v % _UINT256_MOD)

    if kind == "bool":
        if not isinstance(value, bool):
            raise EncodeError(f"bool expects bool, got {type(value).__name__}")
        return _uint_word(1 if value else 0)

    if kind == "address":
        if isinstance(value, (bytes, bytearray)):
            raw = bytes(value)
        elif isinstance(value, str):
            h = value[2:] if value[:2] in ("0x", "0X") else value
            try:
                raw = bytes.fromhex(h)
            except ValueError:
                raise EncodeError(f"invalid address: {value!r}") from None
        else:
            raise EncodeError(f"address expects hex str or bytes, got {type(value).__name__}")
        if len(raw) != 20:
            raise EncodeError(f"address must be 20 bytes, got {len(raw)}")
        return b"\x00" * 12 + raw

    if kind == "fixed_bytes":
        if not isinstance(value, (bytes, bytearray)):
            raise EncodeError(f"{t} expects bytes, got {type(value).__name__}")
        if len(value) != t.size:
            raise EncodeError(f"{t} expects exactly {t.size} bytes, got {len(value)}")
        return _pad_right(bytes(value))

    if kind == "bytes":
        if not isinstance(value, (bytes, bytearray)):
            raise EncodeError(f"bytes expects bytes, got {type(value).__name__}")
        return _encode_bytes_block(bytes(value))

    if kind == "string":
        if not isinstance(value, str):
            raise EncodeError(f"string expects str, got {type(value).__name__}")
        try:
            raw = value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncodeError(f"string is not valid unicode: {e.reason}") from e
        return _encode_bytes_block(raw)

    if kind == "array":
        assert t.item is not None
        if isinstance(value, (str, bytes, bytearray)) or not isinstance(value, Sequence):
            raise EncodeError(f"{t} expects a list or tuple, got {type(value).__name__}")
        items = list(value)
        if t.length is None:
            return _uint_word(len(items)) + _encode_tuple([t.item] * len(items), items)
        if len(items) != t.length:
            raise EncodeError(f"{t} expects {t.length} items, got {len(items)}")
        return _encode_tuple([t.item] * t.length, items)

    raise EncodeError(f"unsupported ABI type: {t}")


def _encode_tuple(types: Sequence[AbiType], values: Sequence[Any]) -> bytes:
    if len(types) != len(values):
        raise EncodeError(f"expected {len(types)} values, got {len(values)}")

    head_size = sum(t.head_size for t in types)
    heads: list[bytes] = []
    tails: list[bytes] = []
    tail_size = 0

    for t, v in zip(types, values):
        encoded = _encode_value(t, v)
        if t.is_dynamic:
            heads.append(_uint_word(head_size + tail_size))
            tails.append(encoded)
            tail_size += len(encoded)
        else:
            heads.append(encoded)

    return b"".join(heads) + b"".join(tails)


def encode(types: Sequence[str], values: Sequence[Any]) -> bytes:
    """ABI-encode `values` as the tuple `(types...)`."""
    return _encode_tuple(parse_signature(tuple(types)), values)


def encode_single(type_str: str, value: Any) -> bytes:
    return _encode_tuple([parse_type(type_str)], [value])


# -------------------------
# Decoding
# -------------------------


def _word(data: bytes, at: int) -> bytes:
    if at < 0 or at + WORD > len(data):
        raise DecodeError(f"payload truncated: need word at {at}, have {len(data)} bytes")
    return data[at : at + WORD]


def _read_uint(data: bytes, at: int) -> int:
    return int.from_bytes(_word(data, at), "big")


def _read_offset(data: bytes, at: int, base: int) -> int:
    target = base + _read_uint(data, at)
    if target > len(data):
        raise DecodeError(f"offset out of range: {target} > {len(data)}")
    return target


def _decode_bytes_block(data: bytes, at: int) -> bytes:
    length = _read_uint(data, at)
    start = at + WORD
    padded_end = start + ((length + WORD - 1) // WORD) * WORD
    if padded_end > len(data):
        raise DecodeError(f"payload truncated: block of {length} bytes at {at}")
    if any(data[start + length : padded_end]):
        raise DecodeError(f"non-zero padding after block at {at}")
    return data[start : start + length]


def _decode_value(t: AbiType, data: bytes, at: int) -> Any:
    kind = t.kind

    if kind == "uint":
        v = _read_uint(data, at)
        assert t.size is not None
        if v >= (1 << t.size):
            raise DecodeError(f"value out of range for {t}: {v}")
        return v

    if kind == "int":
        v = int.from_bytes(_word(data, at), "big", signed=True)
        assert t.size is not None
        bound = 1 << (t.size - 1)
        if not -bound <= v < bound:
            raise DecodeError(f"value out of range for {t}: {v}")
        return v

    if kind == "bool":
        v = _read_uint(data, at)
        if v not in (0, 1):
            raise DecodeError(f"invalid bool word: {v}")
        return v == 1

    if kind == "address":
        w = _word(data, at)
        if any(w[:12]):
            raise DecodeError("address word has non-zero high bytes")
        return "0x" + w[12:].hex()

    if kind == "fixed_bytes":
        w = _word(data, at)
        assert t.size is not None
        if any(w[t.size :]):
            raise DecodeError(f"non-zero padding in {t}")
        return w[: t.size]

    if kind == "bytes":
        return _decode_bytes_block(data, at)

    if kind == "string":
        raw = _decode_bytes_block(data, at)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"string is not valid UTF-8: {e.reason}") from e

    if kind == "array":
        assert t.item is not None
        if t.length is None:
            count = _read_uint(data, at)
            # every item needs at least one head word
            if count * WORD > len(data) - at - WORD:
                raise DecodeError(f"array length {count} exceeds payload")
            return _decode_tuple([t.item] * count, data, at + WORD)
        return _decode_tuple([t.item] * t.length, data, at)

    raise DecodeError(f"unsupported ABI type: {t}")


def _decode_tuple(types: Sequence[AbiType], data: bytes, base: int) -> tuple[Any, ...]:
    out: list[Any] = []
    pos = base
    for t in types:
        if t.is_dynamic:
            out.append(_decode_value(t, data, _read_offset(data, pos, base)))
        else:
            out.append(_decode_value(t, data, pos))
        pos += t.head_size
    return tuple(out)


def decode(types: Sequence[str], data: bytes) -> tuple[Any, ...]:
    """Inverse of encode(); arrays come back as tuples."""
    return _decode_tuple(parse_signature(tuple(types)), bytes(data), 0)


def decode_single(type_str: str, data: bytes) -> Any:
    return _decode_tuple([parse_type(type_str)], bytes(data), 0)[0]
