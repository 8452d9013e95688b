# propfeed/adapters/clients/reso_web_api.py
from __future__ import annotations

from urllib.parse import quote


def property_url(base_url: str, listing_key: str, access_token: str | None = None) -> str:
    """
    RESO Web API (OData) single-entity URL: {base}/Property('<key>')[?access_token=...]

    Quotes inside the key are doubled per OData string literal rules.
    """
    key = quote(listing_key.replace("'", "''"), safe="")
    url = f"{base_url.rstrip('/')}/Property('{key}')"
    if access_token:
        url += "?access_token=" + quote(access_token, safe="")
    return url
