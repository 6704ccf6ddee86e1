"""Reference data records for industries, viral patterns, and GIF templates."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ViralPattern(BaseModel):
    model_config = {"frozen": True}

    type: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)


class Template(BaseModel):
    model_config = {"frozen": True}

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    emotion: str = ""
    viral_score: float = Field(..., ge=0, le=10)
    search_term: str = Field(..., min_length=1)
    external_media_id: Optional[str] = None
    use_case: str = ""

    @field_validator("external_media_id")
    @classmethod
    def _blank_media_id_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    def summary(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "emotion": self.emotion,
            "viral_score": self.viral_score,
        }


class IndustryPatterns(BaseModel):
    industry: str = Field(..., min_length=1)
    patterns: list[ViralPattern] = Field(default_factory=list)


class IndustryTemplates(BaseModel):
    industry: str = Field(..., min_length=1)
    templates: list[Template] = Field(default_factory=list)


class PatternsFile(BaseModel):
    industries: list[IndustryPatterns]


class TemplatesFile(BaseModel):
    industries: list[IndustryTemplates]
