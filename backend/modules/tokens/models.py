"""
Token codec data models.

Decoding returns a result value instead of raising, so callers can project
it into the booleans they need without catching exceptions.
"""

from dataclasses import dataclass
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

# JSON numbers only; numeric strings and booleans are rejected
Timestamp = Union[StrictInt, StrictFloat]


class TokenClaims(BaseModel):
    """Decoded payload of a token."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: Optional[StrictInt] = Field(None, description="Subject (account) ID")
    exp: Optional[Timestamp] = Field(None, description="Expiry, Unix seconds")
    iat: Optional[Timestamp] = Field(None, description="Issued at, Unix seconds")


@dataclass(frozen=True)
class Ok:
    """Successful decode."""

    claims: TokenClaims


@dataclass(frozen=True)
class Err:
    """Failed decode with a short machine-readable reason."""

    reason: str


DecodeResult = Union[Ok, Err]
