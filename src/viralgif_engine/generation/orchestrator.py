"""Generation orchestrator — sequences the paid pipeline for one admitted request.

Stages run strictly in order:

    VALIDATED -> DATA_LOADED -> TEXT_GENERATED -> TEMPLATE_SELECTED
              -> MEDIA_RESOLVED -> LOGGED -> COMPLETED

Any error moves the pipeline to FAILED; the error is tagged with the stage
that was running. Nothing is retried here; callers retry by issuing a new
request, which goes through the quota gate again.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from viralgif_engine.adapters.base import TextGenerator, TextTier
from viralgif_engine.catalog.models import Template
from viralgif_engine.catalog.provider import StaticDataProvider
from viralgif_engine.common.exceptions import (
    InternalError,
    PersistenceError,
    TextServiceError,
    UnsupportedIndustryError,
    ViralGifError,
)
from viralgif_engine.common.logging import get_logger
from viralgif_engine.generation.media import MediaResolver
from viralgif_engine.generation.selection import TemplateSelector
from viralgif_engine.generation.validation import GenerationRequest
from viralgif_engine.identity.types import Authenticated, Identity, Tier
from viralgif_engine.quota.gate import QuotaDecision
from viralgif_engine.usage.ledger import UsageLedger

logger = get_logger("generation.orchestrator")


class Stage(str, Enum):
    VALIDATED = "validated"
    DATA_LOADED = "data_loaded"
    TEXT_GENERATED = "text_generated"
    TEMPLATE_SELECTED = "template_selected"
    MEDIA_RESOLVED = "media_resolved"
    LOGGED = "logged"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class GenerationResult:
    text: str
    media_url: str
    template: Template
    quota: QuotaDecision
    industry: str
    tier: Tier
    processing_time_ms: int
    usage_logged: bool = True
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_payload(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "media_url": self.media_url,
            "template": self.template.summary(),
            "metadata": {
                "industry": self.industry,
                "processing_time_ms": self.processing_time_ms,
                "timestamp": self.timestamp.isoformat(),
                "tier": self.tier.value,
                "quota": self.quota.snapshot(),
            },
        }


class GenerationOrchestrator:
    """Runs the generation stages for a validated, admitted request."""

    def __init__(
        self,
        catalog: StaticDataProvider,
        text_generator: TextGenerator,
        selector: TemplateSelector,
        media: MediaResolver,
        ledger: UsageLedger,
    ):
        self.catalog = catalog
        self.text_generator = text_generator
        self.selector = selector
        self.media = media
        self.ledger = ledger

    async def generate(
        self,
        identity: Identity,
        request: GenerationRequest,
        quota: QuotaDecision,
    ) -> GenerationResult:
        started = time.perf_counter()
        stage = Stage.VALIDATED
        try:
            patterns = self.catalog.patterns_for(request.industry)
            templates = self.catalog.templates_for(request.industry)
            if not templates:
                raise UnsupportedIndustryError(request.industry)
            if not patterns:
                logger.info("No viral patterns for industry %r, continuing without", request.industry)
            stage = Stage.DATA_LOADED

            tier = TextTier.PREMIUM if isinstance(identity, Authenticated) else TextTier.STANDARD
            text = await self.text_generator.generate(
                request.industry, request.description, patterns, tier,
            )
            if not text or not text.strip():
                raise TextServiceError("AI service returned an empty response. Please try again.")
            stage = Stage.TEXT_GENERATED

            template = await self.selector.select(text, templates, request.description)
            stage = Stage.TEMPLATE_SELECTED

            media_url = await self.media.resolve(template)
            stage = Stage.MEDIA_RESOLVED
        except ViralGifError as exc:
            exc.stage = stage.value
            self._log_failure(stage, exc, started)
            raise
        except Exception as exc:
            error = InternalError(f"Unexpected failure after stage {stage.value}: {exc}")
            error.stage = stage.value
            self._log_failure(stage, error, started)
            raise error from exc

        usage_logged = await self._log_usage(identity, request.industry)
        stage = Stage.LOGGED

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        result = GenerationResult(
            text=text,
            media_url=media_url,
            template=template,
            quota=quota,
            industry=request.industry,
            tier=identity.tier,
            processing_time_ms=elapsed_ms,
            usage_logged=usage_logged,
        )
        stage = Stage.COMPLETED
        logger.info(
            "Generation completed",
            extra={"context": {
                "industry": request.industry,
                "tier": identity.tier.value,
                "template_id": template.id,
                "processing_time_ms": elapsed_ms,
            }},
        )
        return result

    async def _log_usage(self, identity: Identity, industry: str) -> bool:
        """Record the generation; a ledger failure is logged and swallowed."""
        try:
            await self.ledger.record_usage(identity, industry)
        except PersistenceError:
            logger.error("Failed to log usage, quota count may drift", exc_info=True)
            return False
        return True

    def _log_failure(self, stage: Stage, error: ViralGifError, started: float) -> None:
        logger.warning(
            "Generation failed",
            extra={"context": {
                "stage": stage.value,
                "code": error.code,
                "error": error.message,
                "elapsed_ms": int((time.perf_counter() - started) * 1000),
            }},
        )
