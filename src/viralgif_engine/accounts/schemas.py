"""Pydantic schemas for account endpoints."""

from datetime import datetime

from pydantic import BaseModel


class MeResponse(BaseModel):
    id: str
    email: str
    subscription_tier: str
    created_at: datetime
