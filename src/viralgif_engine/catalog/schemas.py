"""Pydantic schemas for reference data endpoints."""

from pydantic import BaseModel


class IndustriesResponse(BaseModel):
    industries: list[str]
