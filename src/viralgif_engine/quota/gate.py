"""Quota gate — admission decisions made before any paid external call.

Registered users get ``registered_daily_limit`` generations per UTC calendar
day. Anonymous callers get ``anonymous_lifetime_limit`` generations in total,
tracked independently by IP address and by cookie token; either key reaching
the limit blocks the caller, so clearing cookies alone does not reset it.

The gate only reads the ledger. Usage is consumed when the orchestrator
records a successful generation, so two concurrent requests from the same
identity can both be admitted.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from viralgif_engine.common.config import ViralGifSettings
from viralgif_engine.common.exceptions import InternalError, QuotaExceededError
from viralgif_engine.common.logging import get_logger
from viralgif_engine.identity.types import Anonymous, Authenticated, Identity, Tier
from viralgif_engine.usage.ledger import ByAnonToken, ByIp, ByUser, UsageLedger, utc_today

logger = get_logger("quota")

SIGNUP_CTA_URL = "/register"
SIGNUP_BENEFITS = (
    "{daily_limit} GIFs per day (resets daily)",
    "Advanced AI-powered strategies",
    "Answer deeper questions about your business",
)


def time_until_midnight_utc(now: datetime) -> timedelta:
    """Wall-clock time left until the next UTC midnight."""
    now = now.astimezone(timezone.utc)
    midnight = datetime(now.year, now.month, now.day, tzinfo=timezone.utc) + timedelta(days=1)
    return midnight - now


def format_duration(delta: timedelta) -> str:
    total_minutes = int(delta.total_seconds()) // 60
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours}h {minutes}m"


@dataclass(frozen=True)
class QuotaDecision:
    admitted: bool
    used: int
    limit: int
    remaining: int
    tier: Tier
    resets_in: Optional[timedelta] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def snapshot(self) -> dict[str, Any]:
        """Quota fields reported alongside a generation result."""
        return {
            "used": self.used,
            "limit": self.limit,
            "remaining": self.remaining,
            "tier": self.tier.value,
        }

    def rejection_details(self) -> dict[str, Any]:
        details = {"used": self.used, "limit": self.limit, "tier": self.tier.value}
        if self.resets_in is not None:
            details["resets_in"] = format_duration(self.resets_in)
            details["resets_in_seconds"] = int(self.resets_in.total_seconds())
        details.update(self.metadata)
        return details


class QuotaGate:
    """Read-then-advise admission check over the usage ledger."""

    def __init__(
        self,
        settings: ViralGifSettings,
        ledger: UsageLedger,
        clock: Callable[[], datetime] | None = None,
    ):
        self.settings = settings
        self.ledger = ledger
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    async def check(self, identity: Identity) -> QuotaDecision:
        try:
            if isinstance(identity, Authenticated):
                return await self._check_registered(identity)
            if isinstance(identity, Anonymous):
                return await self._check_anonymous(identity)
        except (SQLAlchemyError, OSError, RuntimeError) as exc:
            logger.error("Quota check failed", exc_info=True)
            raise InternalError("Failed to check quota. Please try again.") from exc
        raise TypeError(f"Unsupported identity: {identity!r}")

    async def admit(self, identity: Identity) -> QuotaDecision:
        """Check quota and raise QuotaExceededError when not admitted."""
        decision = await self.check(identity)
        if decision.admitted:
            return decision

        if decision.tier is Tier.REGISTERED:
            message = (
                f"You have used all {decision.limit} GIFs today. Resets at midnight UTC."
            )
        else:
            message = (
                "You have used your free GIF. "
                f"Sign up to get {self.settings.registered_daily_limit} GIFs per day!"
            )
        raise QuotaExceededError(message, decision=decision)

    async def _check_registered(self, identity: Authenticated) -> QuotaDecision:
        now = self.clock()
        limit = self.settings.registered_daily_limit
        used = await self.ledger.count_usage(ByUser(identity.user_id, utc_today(now)))
        admitted = used < limit

        if admitted:
            logger.info(
                "Quota check passed",
                extra={"context": {"user_id": identity.user_id, "used": used, "limit": limit}},
            )
        return QuotaDecision(
            admitted=admitted,
            used=used,
            limit=limit,
            remaining=max(0, limit - used),
            tier=Tier.REGISTERED,
            resets_in=None if admitted else time_until_midnight_utc(now),
        )

    async def _check_anonymous(self, identity: Anonymous) -> QuotaDecision:
        limit = self.settings.anonymous_lifetime_limit
        ip_used, token_used = await asyncio.gather(
            self.ledger.count_usage(ByIp(identity.client_ip)),
            self.ledger.count_usage(ByAnonToken(identity.anon_token)),
        )
        used = max(ip_used, token_used)
        admitted = ip_used < limit and token_used < limit

        metadata: dict[str, Any] = {}
        if admitted:
            logger.info(
                "Quota check passed",
                extra={"context": {"tier": "anonymous", "ip": identity.client_ip}},
            )
        else:
            metadata = {
                "cta_url": SIGNUP_CTA_URL,
                "benefits": [
                    b.format(daily_limit=self.settings.registered_daily_limit)
                    for b in SIGNUP_BENEFITS
                ],
            }
        return QuotaDecision(
            admitted=admitted,
            used=used,
            limit=limit,
            remaining=max(0, limit - used),
            tier=Tier.ANONYMOUS,
            metadata=metadata,
        )
