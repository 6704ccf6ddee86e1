"""OpenAI-backed text generation and template ranking."""

import json
import random
from typing import Optional, Sequence

from openai import AsyncOpenAI, AuthenticationError, OpenAIError, RateLimitError

from viralgif_engine.adapters.base import TextTier
from viralgif_engine.catalog.models import Template, ViralPattern
from viralgif_engine.common.config import ViralGifSettings
from viralgif_engine.common.exceptions import TextServiceError
from viralgif_engine.common.logging import get_logger

logger = get_logger("adapters.openai")

# Candidates shown to the ranker per request.
RANKER_CANDIDATES = 8


def _premium_prompts(industry: str, description: str, patterns: Sequence[ViralPattern]) -> tuple[str, str]:
    system = (
        f"You are a senior marketing strategist with 15+ years of experience in the "
        f"{industry} industry.\n\n"
        "Analyse thoroughly:\n"
        "- The target audience and their psychology\n"
        f"- The competitive landscape in {industry}\n"
        "- Viral triggers and emotional hooks\n"
        "- The distribution channels that work best\n\n"
        "Deliver a DETAILED strategy with:\n"
        "1. Hook (first 3 seconds): what stops them from scrolling?\n"
        "2. Emotional trigger: which feeling do we activate (FOMO, curiosity, pride, surprise)?\n"
        "3. Storytelling structure: how do we build an engaging narrative?\n"
        "4. Call-to-action: the concrete action we want the audience to take\n"
        "5. Three distribution tactics: where and how to publish (platforms, timing, format)\n\n"
        "Use concrete examples where relevant. Write as if advising a client directly."
    )
    user = (
        f"Business/product: {description}\n\n"
        "Viral patterns that work in this industry:\n"
        f"{json.dumps([p.model_dump() for p in patterns], indent=2)}\n\n"
        "Give me a CONCRETE, actionable strategy (300-500 words) I can implement today."
    )
    return system, user


def _standard_prompts(industry: str, description: str, patterns: Sequence[ViralPattern]) -> tuple[str, str]:
    system = (
        f"You are a marketing assistant. Write a short, catchy viral strategy for {industry}.\n\n"
        "Include:\n"
        "- A strong hook that grabs attention\n"
        "- The feeling we want to trigger in the audience\n"
        "- A clear call-to-action\n\n"
        "Keep it short and concise (100-150 words)."
    )
    user = (
        f"Product: {description}\n\n"
        "Write a short viral strategy (100-150 words) based on these patterns:\n"
        f"{', '.join(p.text for p in patterns)}"
    )
    return system, user


def _strip_quotes(text: str) -> str:
    return text.strip().strip("\"'").strip()


class OpenAIClientMixin:
    """Lazily constructs a shared AsyncOpenAI client."""

    def __init__(self, settings: ViralGifSettings, client: AsyncOpenAI | None = None):
        self.settings = settings
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.settings.openai_api_key or None,
                timeout=self.settings.openai_timeout,
                max_retries=0,
            )
        return self._client

    async def _complete(self, messages: list[dict], **params) -> str:
        response = await self._get_client().chat.completions.create(
            model=self.settings.openai_model,
            messages=messages,
            **params,
        )
        content = response.choices[0].message.content if response.choices else None
        return (content or "").strip()


class OpenAITextGenerator(OpenAIClientMixin):
    """Marketing text via chat completions, with deeper prompts for premium callers."""

    async def generate(
        self,
        industry: str,
        description: str,
        patterns: Sequence[ViralPattern],
        tier: TextTier,
    ) -> str:
        premium = tier is TextTier.PREMIUM
        build = _premium_prompts if premium else _standard_prompts
        system, user = build(industry, description, patterns)

        logger.info("Calling OpenAI", extra={"context": {"tier": tier.value}})
        try:
            text = await self._complete(
                [
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                temperature=0.8 if premium else 0.7,
                max_tokens=600 if premium else 200,
            )
        except RateLimitError as exc:
            raise TextServiceError(
                "OpenAI rate limit exceeded. Please try again in a moment."
            ) from exc
        except AuthenticationError as exc:
            logger.error("OpenAI authentication failed, check the API key")
            raise TextServiceError() from exc
        except OpenAIError as exc:
            logger.warning("OpenAI generation failed: %s", exc)
            raise TextServiceError() from exc

        if not text:
            raise TextServiceError("AI service returned an empty response. Please try again.")
        return text


class OpenAITemplateRanker(OpenAIClientMixin):
    """Asks the model which template best amplifies the generated text."""

    def __init__(
        self,
        settings: ViralGifSettings,
        client: AsyncOpenAI | None = None,
        rng: random.Random | None = None,
    ):
        super().__init__(settings, client)
        self.rng = rng or random.Random()

    async def choose(
        self,
        text: str,
        templates: Sequence[Template],
        description: str,
    ) -> Optional[str]:
        # Shuffle so the model does not always see the same leading options.
        candidates = list(templates)
        self.rng.shuffle(candidates)
        candidates = candidates[:RANKER_CANDIDATES]

        listing = "\n".join(
            f"ID: {t.id} | Name: {t.name} | Emotion: {t.emotion} | "
            f"Use: {t.use_case} | Score: {t.viral_score}/10"
            for t in candidates
        )
        system = (
            "You are an expert at matching viral marketing text with GIFs.\n"
            "Analyse the text and select the GIF that best amplifies the message.\n"
            "Return ONLY the ID of the best GIF, no explanation."
        )
        user = (
            f'Viral text: "{text}"\n'
            f'Product: "{description}"\n\n'
            f"Available GIF templates:\n{listing}\n\n"
            "Select the GIF that best matches the feeling in the text, visually amplifies "
            "the message and has high viral potential.\n\n"
            'Return ONLY the id of the best GIF (e.g. "mind-blown-explosion"):'
        )
        choice = await self._complete(
            [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            temperature=0.4,
            max_tokens=50,
        )
        return _strip_quotes(choice) or None
