"""User store — lookup of registered users."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from viralgif_engine.accounts.models import UserModel


class UserStore:
    """Read access to registered users, plus creation for tooling."""

    async def find_user(self, session: AsyncSession, user_id: str) -> Optional[UserModel]:
        result = await session.execute(select(UserModel).where(UserModel.id == user_id))
        return result.scalar_one_or_none()

    async def find_by_email(self, session: AsyncSession, email: str) -> Optional[UserModel]:
        result = await session.execute(
            select(UserModel).where(UserModel.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def create_user(
        self,
        session: AsyncSession,
        email: str,
        subscription_tier: str = "free",
    ) -> UserModel:
        user = UserModel(email=email.lower(), subscription_tier=subscription_tier)
        session.add(user)
        await session.flush()
        return user
