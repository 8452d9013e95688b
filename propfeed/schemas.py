# propfeed/schemas.py
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from .adapters.clients.reso_web_api import property_url
from .config import Settings, settings as default_settings
from .errors import ConfigError


class ReturnType(str, Enum):
    bytes = "bytes"
    string = "string"
    uint256 = "uint256"
    int256 = "int256"


class RequestConfig(BaseModel):
    # explicit URL wins; otherwise built from base_url + listing key + token
    url: str | None = None
    base_url: str | None = None
    listing_key: str | None = None
    access_token: str | None = None

    args: list[str] = Field(default_factory=list)
    expected_return_type: ReturnType = ReturnType.bytes
    timeout_s: float = Field(default=9.0, gt=0)

    @classmethod
    def from_settings(cls, s: Settings | None = None, **overrides) -> "RequestConfig":
        s = s or default_settings
        values = {
            "base_url": s.RESO_BASE_URL,
            "listing_key": s.RESO_LISTING_KEY,
            "access_token": s.RESO_ACCESS_TOKEN,
            "timeout_s": s.HTTP_TIMEOUT_S,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def resolve_url(self) -> str:
        if self.url:
            return self.url

        key = self.listing_key or (self.args[0] if self.args else None)
        if not self.base_url:
            raise ConfigError("no url and no base_url configured")
        if not key:
            raise ConfigError("no listing key: set listing_key or pass it as args[0]")
        return property_url(self.base_url, key, self.access_token)


class RequestResult(BaseModel):
    response_bytes_hexstring: str | None = None
    captured_terminal_output: str = ""
    error_string: str | None = None

    @property
    def ok(self) -> bool:
        return self.error_string is None
