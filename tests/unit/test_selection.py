"""Tests for template selection fallback strategies."""

import random
from collections import Counter
from unittest.mock import AsyncMock

import pytest

from viralgif_engine.catalog.models import Template
from viralgif_engine.generation.selection import (
    HighScoreSelection,
    SemanticSelection,
    TemplateSelector,
    WeightedRandomSelection,
    default_selector,
)


def tpl(template_id: str, score: float) -> Template:
    return Template(id=template_id, name=template_id, viral_score=score, search_term=template_id)


TEMPLATES = [tpl("a", 9), tpl("b", 7), tpl("c", 6), tpl("d", 4)]


def make_ranker(result=None, error=None):
    ranker = AsyncMock()
    ranker.choose = AsyncMock(return_value=result, side_effect=error)
    return ranker


class TestSemantic:
    async def test_known_id_selected(self):
        selector = default_selector(make_ranker("c"), random.Random(1))
        chosen = await selector.select("text", TEMPLATES, "desc")
        assert chosen.id == "c"

    async def test_unknown_id_falls_back(self):
        strategy = SemanticSelection(make_ranker("zzz"))
        assert await strategy.select("text", TEMPLATES, "desc") is None

        selector = default_selector(make_ranker("zzz"), random.Random(1))
        assert (await selector.select("text", TEMPLATES, "desc")) in TEMPLATES

    async def test_ranker_failure_falls_back(self):
        selector = default_selector(make_ranker(error=RuntimeError("model down")), random.Random(1))
        assert (await selector.select("text", TEMPLATES, "desc")) in TEMPLATES

    async def test_ranker_receives_inputs(self):
        ranker = make_ranker("a")
        await SemanticSelection(ranker).select("text", TEMPLATES, "desc")
        ranker.choose.assert_awaited_once_with("text", TEMPLATES, "desc")


class TestWeightedRandom:
    async def test_frequency_tracks_score(self):
        templates = [tpl("low", 2), tpl("high", 8)]
        strategy = WeightedRandomSelection(random.Random(42))
        counts = Counter()
        for _ in range(4000):
            counts[(await strategy.select("", templates, "")).id] += 1
        ratio = counts["high"] / 4000
        assert 0.76 < ratio < 0.84

    async def test_zero_weights_give_no_result(self):
        strategy = WeightedRandomSelection(random.Random(1))
        assert await strategy.select("", [tpl("a", 0), tpl("b", 0)], "") is None


class TestHighScore:
    async def test_only_high_scorers(self):
        strategy = HighScoreSelection(random.Random(3))
        seen = {(await strategy.select("", TEMPLATES, "")).id for _ in range(200)}
        assert seen == {"a", "b"}

    async def test_all_when_none_qualify(self):
        strategy = HighScoreSelection(random.Random(3))
        low = [tpl("x", 2), tpl("y", 3)]
        seen = {(await strategy.select("", low, "")).id for _ in range(200)}
        assert seen == {"x", "y"}


class TestSelector:
    async def test_final_uniform_pick_when_all_strategies_empty(self):
        empty = AsyncMock()
        empty.name = "empty"
        empty.select = AsyncMock(return_value=None)
        selector = TemplateSelector([empty], random.Random(5))
        assert (await selector.select("", TEMPLATES, "")) in TEMPLATES

    async def test_single_template_always_chosen(self):
        only = [tpl("only", 0)]
        selector = default_selector(make_ranker(error=RuntimeError()), random.Random(2))
        assert (await selector.select("", only, "")).id == "only"

    async def test_empty_template_list_rejected(self):
        with pytest.raises(ValueError):
            await default_selector(None).select("", [], "")

    def test_no_ranker_skips_semantic(self):
        selector = default_selector(None)
        assert [s.name for s in selector.strategies] == ["weighted_random", "high_score"]
        selector = default_selector(make_ranker())
        assert selector.strategies[0].name == "semantic"
