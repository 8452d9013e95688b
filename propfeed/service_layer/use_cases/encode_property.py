# propfeed/service_layer/use_cases/encode_property.py
from __future__ import annotations

import httpx

from ...abi.codec import decode, encode
from ...adapters.clients.http_fetch import fetch_json
from ...domain.normalize import normalize_property_record
from ...domain.types import EncodedPayload, PropertyFacts
from ...errors import DecodeError

# Solidity side: abi.decode(data, (string, uint256, uint256))
PROPERTY_SIGNATURE: tuple[str, ...] = ("string", "uint256", "uint256")


def encode_property_facts(facts: PropertyFacts) -> EncodedPayload:
    return EncodedPayload(data=encode(PROPERTY_SIGNATURE, facts.as_tuple()), signature=PROPERTY_SIGNATURE)


def decode_property_payload(data: bytes | str) -> PropertyFacts:
    """Accepts raw bytes or a 0x-prefixed hex string."""
    if isinstance(data, str):
        h = data[2:] if data[:2] in ("0x", "0X") else data
        try:
            data = bytes.fromhex(h)
        except ValueError:
            raise DecodeError("payload is not valid hex") from None

    address, year_built, lot_size = decode(PROPERTY_SIGNATURE, data)
    return PropertyFacts(address=address, year_built=year_built, lot_size_square_feet=lot_size)


async def fetch_and_normalize(
    url: str,
    *,
    timeout_s: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PropertyFacts:
    record = await fetch_json(url, timeout_s=timeout_s, transport=transport)
    return normalize_property_record(record)


async def encode_property(
    url: str,
    *,
    timeout_s: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> EncodedPayload:
    """
    Fetch -> normalize -> encode.

    Each stage raises its own PipelineError subclass; a failed stage stops the run.
    """
    facts = await fetch_and_normalize(url, timeout_s=timeout_s, transport=transport)
    return encode_property_facts(facts)
