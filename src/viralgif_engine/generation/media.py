"""Media resolution — direct id lookup first, keyword search second."""

from typing import Optional, Protocol, Sequence

from viralgif_engine.adapters.base import MediaClient
from viralgif_engine.catalog.models import Template
from viralgif_engine.common.exceptions import MediaLookupError, MediaServiceError
from viralgif_engine.common.logging import get_logger

logger = get_logger("generation.media")


class MediaStrategy(Protocol):
    name: str

    async def resolve(self, template: Template) -> Optional[str]:
        """Return a URL, None when not applicable. Raises MediaLookupError."""
        ...


class ById:
    name = "by_id"

    def __init__(self, client: MediaClient):
        self.client = client

    async def resolve(self, template: Template) -> Optional[str]:
        if not template.external_media_id:
            return None
        return await self.client.by_id(template.external_media_id)


class BySearchTerm:
    name = "by_search_term"

    def __init__(self, client: MediaClient):
        self.client = client

    async def resolve(self, template: Template) -> Optional[str]:
        if not template.search_term:
            return None
        return await self.client.by_search_term(template.search_term)


class MediaResolver:
    """Runs media strategies in order; raises MediaServiceError when all are exhausted."""

    def __init__(self, strategies: Sequence[MediaStrategy]):
        self.strategies = list(strategies)

    @classmethod
    def for_client(cls, client: MediaClient) -> "MediaResolver":
        return cls([ById(client), BySearchTerm(client)])

    async def resolve(self, template: Template) -> str:
        for strategy in self.strategies:
            try:
                url = await strategy.resolve(template)
            except MediaLookupError as exc:
                logger.warning(
                    "Media lookup %s failed for template %s: %s",
                    strategy.name, template.id, exc.message,
                )
                continue
            if url:
                logger.info(
                    "GIF resolved",
                    extra={"context": {"strategy": strategy.name, "template_id": template.id}},
                )
                return url
        raise MediaServiceError()
