"""
Ethermine SDK Data Models

Pydantic models for client configuration and request assembly.
"""

import os
from enum import Enum
from typing import Optional, Dict, Any, Union
from pydantic import BaseModel, Field, field_validator


DEFAULT_URL = "https://api.ethermine.org"
DEFAULT_VERSION = 0
DEFAULT_TIMEOUT_MS = 5000
DEFAULT_USER_AGENT = "Ethpool Python API Client"


# ==================== Enums ====================

class MethodCategory(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    POOL = "pool"
    MINER = "miner"
    WORKER = "worker"


# ==================== Configuration ====================

class ClientConfig(BaseModel):
    """
    Immutable client settings.

    ``timeout`` is in milliseconds and bounds every individual call.
    ``secret`` is the base64 signing key for private calls; when omitted
    the wallet/API key itself is used.
    """
    wallet: str = Field(..., min_length=1)
    secret: Optional[str] = None
    url: str = DEFAULT_URL
    version: Union[int, str] = DEFAULT_VERSION
    timeout: int = Field(DEFAULT_TIMEOUT_MS, gt=0)
    otp: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT

    class Config:
        frozen = True

    @field_validator("url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000.0

    @property
    def signing_secret(self) -> str:
        return self.secret if self.secret is not None else self.wallet

    @classmethod
    def from_env(cls, prefix: str = "ETHERMINE_", **overrides: Any) -> "ClientConfig":
        """
        Build a config from ``<prefix>WALLET``, ``SECRET``, ``URL``,
        ``VERSION``, ``TIMEOUT`` and ``OTP`` environment variables.
        Keyword overrides take precedence over the environment.
        """
        values: Dict[str, Any] = {}
        for name in ("wallet", "secret", "url", "version", "timeout", "otp"):
            raw = os.environ.get(prefix + name.upper())
            if raw is not None:
                values[name] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


# ==================== Request Assembly ====================

class Route(BaseModel):
    """A resolved method: where to send it and what is left to encode."""
    method: str
    category: MethodCategory
    path: str
    params: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        frozen = True

    @property
    def signed(self) -> bool:
        return self.category is MethodCategory.PRIVATE


class SignedRequest(BaseModel):
    path: str
    encoded_body: str = Field(..., alias="encodedBody")
    nonce: int
    signature: str

    class Config:
        frozen = True
        populate_by_name = True
