"""Pydantic schemas for quota endpoints."""

from typing import Optional

from pydantic import BaseModel


class QuotaStatusResponse(BaseModel):
    admitted: bool
    used: int
    limit: int
    remaining: int
    tier: str
    resets_in: Optional[str] = None
    resets_in_seconds: Optional[int] = None
