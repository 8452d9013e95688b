# propfeed/domain/normalize.py
from __future__ import annotations

import logging
from typing import Any

from ..errors import NormalizeError, NormalizeErrorKind
from .parsing import require_str, to_uint
from .types import PropertyFacts

log = logging.getLogger(__name__)

# RESO Data Dictionary field names
ADDRESS_FIELD = "UnparsedAddress"
YEAR_BUILT_FIELD = "YearBuilt"
LOT_SIZE_FIELD = "LotSizeSquareFeet"


def _uint_field(record: dict[str, Any], field: str) -> int:
    try:
        return to_uint(record.get(field))
    except ValueError as e:
        raise NormalizeError(NormalizeErrorKind.INVALID_NUMBER, field, str(e)) from e


def normalize_property_record(record: dict[str, Any]) -> PropertyFacts:
    """
    RESO property record -> PropertyFacts.

    The address is kept exactly as sent (only checked for non-blank);
    numeric fields are truncated to integers.
    """
    try:
        address = require_str(record.get(ADDRESS_FIELD))
    except ValueError as e:
        raise NormalizeError(NormalizeErrorKind.MISSING_FIELD, ADDRESS_FIELD, str(e)) from e

    year_built = _uint_field(record, YEAR_BUILT_FIELD)
    lot_size = _uint_field(record, LOT_SIZE_FIELD)

    log.info("Real Estate Address: %s", address)
    log.info("Year Built: %s", year_built)
    log.info("Lot Size Square Feet: %s", lot_size)

    return PropertyFacts(address=address, year_built=year_built, lot_size_square_feet=lot_size)
