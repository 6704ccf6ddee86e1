"""Caller identity variants."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Tier(str, Enum):
    ANONYMOUS = "anonymous"
    REGISTERED = "registered"


@dataclass(frozen=True)
class Authenticated:
    """A caller holding a valid session for a known user."""
    user_id: str
    client_ip: str = "unknown"

    @property
    def tier(self) -> Tier:
        return Tier.REGISTERED


@dataclass(frozen=True)
class Anonymous:
    """A caller known only by its cookie token and observed IP."""
    anon_token: str
    client_ip: str = "unknown"

    @property
    def tier(self) -> Tier:
        return Tier.ANONYMOUS


Identity = Union[Authenticated, Anonymous]


@dataclass(frozen=True)
class IdentityResolution:
    """Resolved identity plus the cookie token to set, if one was minted."""
    identity: Identity
    minted_token: Optional[str] = None
