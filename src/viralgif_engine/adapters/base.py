"""Capability interfaces for the external services used by the pipeline.

The orchestrator depends only on these protocols, so tests and alternate
providers can substitute their own implementations.
"""

from enum import Enum
from typing import Optional, Protocol, Sequence

from viralgif_engine.catalog.models import Template, ViralPattern


class TextTier(str, Enum):
    """Prompt depth for text generation."""
    STANDARD = "standard"
    PREMIUM = "premium"


class TextGenerator(Protocol):
    async def generate(
        self,
        industry: str,
        description: str,
        patterns: Sequence[ViralPattern],
        tier: TextTier,
    ) -> str:
        """Return marketing text. Raises TextServiceError."""
        ...


class TemplateRanker(Protocol):
    async def choose(
        self,
        text: str,
        templates: Sequence[Template],
        description: str,
    ) -> Optional[str]:
        """Return the id of the best matching template, or None."""
        ...


class MediaClient(Protocol):
    async def by_id(self, media_id: str) -> str:
        """Return a GIF URL for ``media_id``. Raises MediaLookupError."""
        ...

    async def by_search_term(self, term: str) -> str:
        """Return the top GIF URL for ``term``. Raises MediaLookupError."""
        ...
