"""Template selection — ordered fallback strategies that always yield a template."""

import random
from typing import Optional, Protocol, Sequence

from viralgif_engine.adapters.base import TemplateRanker
from viralgif_engine.catalog.models import Template
from viralgif_engine.common.logging import get_logger

logger = get_logger("generation.selection")

HIGH_SCORE_THRESHOLD = 7


class SelectionStrategy(Protocol):
    name: str

    async def select(
        self, text: str, templates: Sequence[Template], description: str,
    ) -> Optional[Template]:
        ...


class SemanticSelection:
    """Let the ranking model pick; a missing or unknown id yields None."""

    name = "semantic"

    def __init__(self, ranker: TemplateRanker):
        self.ranker = ranker

    async def select(self, text, templates, description):
        chosen_id = await self.ranker.choose(text, templates, description)
        if not chosen_id:
            return None
        for template in templates:
            if template.id == chosen_id:
                return template
        logger.info("Ranker returned unknown template id %r", chosen_id)
        return None


class WeightedRandomSelection:
    """Random pick weighted by viral score."""

    name = "weighted_random"

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    async def select(self, text, templates, description):
        weights = [t.viral_score for t in templates]
        if not templates or sum(weights) <= 0:
            return None
        return self.rng.choices(list(templates), weights=weights, k=1)[0]


class HighScoreSelection:
    """Uniform pick among templates scoring >= 7, or among all if none do."""

    name = "high_score"

    def __init__(self, rng: random.Random | None = None, threshold: float = HIGH_SCORE_THRESHOLD):
        self.rng = rng or random.Random()
        self.threshold = threshold

    async def select(self, text, templates, description):
        if not templates:
            return None
        pool = [t for t in templates if t.viral_score >= self.threshold] or list(templates)
        return self.rng.choice(pool)


class TemplateSelector:
    """Tries each strategy in order until one returns a template.

    Strategy exceptions are logged and treated like an empty result. If
    every strategy comes back empty, a uniform pick over all templates is
    made, so selection never fails for a non-empty template list.
    """

    def __init__(self, strategies: Sequence[SelectionStrategy], rng: random.Random | None = None):
        self.strategies = list(strategies)
        self.rng = rng or random.Random()

    async def select(self, text: str, templates: Sequence[Template], description: str) -> Template:
        if not templates:
            raise ValueError("Template selection requires at least one template")

        for strategy in self.strategies:
            try:
                template = await strategy.select(text, templates, description)
            except Exception:
                logger.warning(
                    "Template selection strategy %s failed, falling back",
                    strategy.name, exc_info=True,
                )
                continue
            if template is not None:
                logger.info(
                    "Template selected",
                    extra={"context": {
                        "strategy": strategy.name,
                        "template_id": template.id,
                        "viral_score": template.viral_score,
                    }},
                )
                return template
            logger.info("Template selection strategy %s gave no result", strategy.name)

        return self.rng.choice(list(templates))


def default_selector(ranker: TemplateRanker | None, rng: random.Random | None = None) -> TemplateSelector:
    rng = rng or random.Random()
    strategies: list[SelectionStrategy] = []
    if ranker is not None:
        strategies.append(SemanticSelection(ranker))
    strategies.append(WeightedRandomSelection(rng))
    strategies.append(HighScoreSelection(rng))
    return TemplateSelector(strategies, rng)
