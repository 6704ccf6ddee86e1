"""Usage ledger — append-only record of successful generations."""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, Optional, Union

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from viralgif_engine.common.database import DatabaseManager
from viralgif_engine.common.exceptions import PersistenceError
from viralgif_engine.common.logging import get_logger
from viralgif_engine.identity.types import Authenticated, Identity
from viralgif_engine.usage.models import UsageLogModel

logger = get_logger("usage.ledger")


@dataclass(frozen=True)
class ByUser:
    """Usage of a registered user on one UTC day."""
    user_id: str
    reset_date: date


@dataclass(frozen=True)
class ByIp:
    """All-time anonymous usage from one address."""
    ip: str


@dataclass(frozen=True)
class ByAnonToken:
    """All-time anonymous usage for one cookie token."""
    anon_token: str


UsageFilter = Union[ByUser, ByIp, ByAnonToken]


def utc_today(now: Optional[datetime] = None) -> date:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).date()


class UsageLedger:
    """Durable usage counters backing the quota gate.

    Every operation opens its own session, so independent counts may be
    awaited concurrently.
    """

    def __init__(self, db: DatabaseManager, clock: Callable[[], datetime] | None = None):
        self.db = db
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    async def record_usage(
        self,
        identity: Identity,
        industry: str,
        on: Optional[datetime] = None,
    ) -> UsageLogModel:
        """Append one usage row for ``identity``. Raises PersistenceError."""
        if isinstance(identity, Authenticated):
            user_id, anon_token = identity.user_id, None
        else:
            user_id, anon_token = None, identity.anon_token

        record = UsageLogModel(
            user_id=user_id,
            anon_user_id=anon_token,
            ip_address=identity.client_ip,
            industry=industry,
            reset_date=utc_today(on or self.clock()),
        )
        try:
            async with self.db.get_session() as session:
                session.add(record)
                await session.flush()
        except (SQLAlchemyError, OSError, RuntimeError) as exc:
            raise PersistenceError(f"Failed to record usage: {exc}") from exc

        logger.info(
            "Usage logged",
            extra={"context": {
                "tier": identity.tier.value,
                "user_id": user_id,
                "industry": industry,
            }},
        )
        return record

    async def count_usage(self, usage_filter: UsageFilter) -> int:
        """Count ledger rows matching ``usage_filter``."""
        query = select(func.count(UsageLogModel.id))
        if isinstance(usage_filter, ByUser):
            query = query.where(
                UsageLogModel.user_id == usage_filter.user_id,
                UsageLogModel.reset_date == usage_filter.reset_date,
            )
        elif isinstance(usage_filter, ByIp):
            query = query.where(
                UsageLogModel.ip_address == usage_filter.ip,
                UsageLogModel.user_id.is_(None),
            )
        elif isinstance(usage_filter, ByAnonToken):
            query = query.where(
                UsageLogModel.anon_user_id == usage_filter.anon_token,
                UsageLogModel.user_id.is_(None),
            )
        else:
            raise TypeError(f"Unsupported usage filter: {usage_filter!r}")

        async with self.db.get_session() as session:
            result = await session.execute(query)
            return int(result.scalar() or 0)
