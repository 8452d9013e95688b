# propfeed/abi/types.py
from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from ..errors import AbiTypeError

WORD = 32

_ARRAY_RE = re.compile(r"^(?P<item>.+)\[(?P<length>\d*)\]$")
_SIZED_RE = re.compile(r"^(?P<base>uint|int|bytes)(?P<size>\d*)$")


@dataclass(frozen=True)
class AbiType:
    """
    One parsed ABI type.

    kind is one of: uint, int, bool, address, fixed_bytes, bytes, string, array.
    For arrays, `item` is the element type and `length` is None for T[].
    """

    kind: str
    size: int | None = None
    item: AbiType | None = None
    length: int | None = None

    @property
    def is_dynamic(self) -> bool:
        if self.kind in ("bytes", "string"):
            return True
        if self.kind == "array":
            assert self.item is not None
            return self.length is None or self.item.is_dynamic
        return False

    @property
    def head_size(self) -> int:
        """Bytes this type takes in the head of an enclosing tuple."""
        if self.is_dynamic:
            return WORD
        if self.kind == "array":
            assert self.item is not None and self.length is not None
            return self.length * self.item.head_size
        return WORD

    def __str__(self) -> str:
        if self.kind == "array":
            return f"{self.item}[{'' if self.length is None else self.length}]"
        if self.kind == "fixed_bytes":
            return f"bytes{self.size}"
        if self.kind in ("uint", "int"):
            return f"{self.kind}{self.size}"
        return self.kind


@lru_cache(maxsize=256)
def parse_type(type_str: str) -> AbiType:
    s = type_str.strip()

    m = _ARRAY_RE.match(s)
    if m:
        item = parse_type(m.group("item"))
        length_s = m.group("length")
        if length_s == "":
            return AbiType("array", item=item)
        length = int(length_s)
        if length == 0:
            raise AbiTypeError(f"zero-length fixed array: {type_str!r}")
        return AbiType("array", item=item, length=length)

    if s in ("bool", "address", "string"):
        return AbiType(s)

    m = _SIZED_RE.match(s)
    if not m:
        raise AbiTypeError(f"unsupported ABI type: {type_str!r}")

    base = m.group("base")
    size_s = m.group("size")

    if base == "bytes":
        if size_s == "":
            return AbiType("bytes")
        size = int(size_s)
        if not 1 <= size <= WORD:
            raise AbiTypeError(f"bytes<M> needs 1 <= M <= 32: {type_str!r}")
        return AbiType("fixed_bytes", size=size)

    # bare uint/int are aliases for the 256-bit forms
    bits = int(size_s) if size_s else 256
    if bits % 8 != 0 or not 8 <= bits <= 256:
        raise AbiTypeError(f"{base}<M> needs M in 8..256, multiple of 8: {type_str!r}")
    return AbiType(base, size=bits)


def parse_signature(types: list[str] | tuple[str, ...]) -> tuple[AbiType, ...]:
    return tuple(parse_type(t) for t in types)
