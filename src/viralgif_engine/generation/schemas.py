"""Pydantic schemas for generation endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class GenerateBody(BaseModel):
    # Left loose on purpose: field checks happen in validate_request so every
    # input problem maps to the same 400 envelope.
    industry: Any = None
    description: Any = None


class TemplateSummary(BaseModel):
    id: str
    name: str
    emotion: str
    viral_score: float


class QuotaSnapshot(BaseModel):
    used: int
    limit: int
    remaining: int
    tier: str


class GenerationMetadata(BaseModel):
    industry: str
    processing_time_ms: int
    timestamp: datetime
    tier: str
    quota: QuotaSnapshot


class GenerationData(BaseModel):
    text: str
    media_url: str
    template: TemplateSummary
    metadata: GenerationMetadata


class GenerateResponse(BaseModel):
    success: bool = True
    data: GenerationData
    timestamp: datetime
