"""Input validation for generation requests."""

from dataclasses import dataclass
from typing import Any

from viralgif_engine.common.exceptions import ValidationError

DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 500


@dataclass(frozen=True)
class GenerationRequest:
    industry: str
    description: str


def validate_request(industry: Any, description: Any) -> GenerationRequest:
    """Validate raw request fields. Raises ValidationError."""
    if not industry or not description:
        raise ValidationError("Missing required fields: industry and description")
    if not isinstance(industry, str) or not isinstance(description, str):
        raise ValidationError("Industry and description must be strings")
    if not industry.strip() or not description.strip():
        raise ValidationError("Missing required fields: industry and description")
    if len(description) < DESCRIPTION_MIN_LENGTH:
        raise ValidationError(
            f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters long"
        )
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters long"
        )
    return GenerationRequest(industry=industry.strip(), description=description)
