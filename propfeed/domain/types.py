# propfeed/domain/types.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

RawApiRecord = dict[str, Any]


@dataclass(frozen=True)
class PropertyFacts:
    """The (string, uint256, uint256) tuple sent on-chain."""

    address: str
    year_built: int
    lot_size_square_feet: int

    def as_tuple(self) -> tuple[str, int, int]:
        return (self.address, self.year_built, self.lot_size_square_feet)


@dataclass(frozen=True)
class EncodedPayload:
    data: bytes
    signature: tuple[str, ...]

    def hex(self) -> str:
        return "0x" + self.data.hex()

    def __len__(self) -> int:
        return len(self.data)
