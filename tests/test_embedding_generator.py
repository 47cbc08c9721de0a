"""
Unit Tests - Vector store rebuild
=================================

The generator runs on a real event loop via asyncio.run; the embedding
provider is an in-process double.
"""

import asyncio
import logging
import json

import pytest

from recipe_search.database.recipe_corpus_client import RecipeCorpusClient
from recipe_search.database.vector_store_client import VectorStoreClient
from recipe_search.exceptions import CorpusNotFoundError, EmbeddingProviderError
from recipe_search.models.embedding_models import RebuildStatus
from recipe_search.services.embedding_generator import EmbeddingGenerator
from fakes import FakeEmbeddingProvider, vectors_by_title


def make_generator(settings, provider):
    return EmbeddingGenerator(
        RecipeCorpusClient(settings.recipes_path),
        VectorStoreClient(settings.embeddings_path),
        provider,
    )


def write_corpus(path, recipes):
    path.write_text(json.dumps(recipes), encoding="utf-8")


async def collect_lines(generator):
    recipes = generator.prepare()
    return [line async for line in generator.stream_progress(recipes)]


async def collect_events(generator, recipes):
    queue = asyncio.Queue()
    await generator.generate(recipes, queue)
    events = []
    while True:
        event = queue.get_nowait()
        if event is None:
            break
        events.append(event)
    assert queue.empty()
    return events


TWO_RECIPES = [
    {"id": "a", "title": "Failing Stew", "description": "d", "ingredients": ["x"], "instructions": ["y"]},
    {"id": "b", "title": "Working Pie", "description": "d", "ingredients": ["x"], "instructions": ["y"]},
]


class TestEmbeddingText:

    def test_composes_all_fields(self, recipes_file):
        pancakes = RecipeCorpusClient(recipes_file).load_recipes()[0]

        assert pancakes.embedding_text() == (
            "Title: Pancakes\n"
            "Description: Fluffy breakfast pancakes\n"
            "Ingredients: flour, milk, eggs\n"
            "Instructions: Mix everything. Fry in a pan."
        )


class TestRebuild:

    def test_embeds_every_recipe_in_order(self, settings, fake_provider):
        generator = make_generator(settings, fake_provider)

        lines = asyncio.run(collect_lines(generator))

        assert lines == [
            "Generated embedding for: Pancakes\n",
            "Generated embedding for: Omelette\n",
            "Generated embedding for: Tomato Soup\n",
            "Generated embedding for: Green Salad\n",
            "Done. Saved to embeddings.json\n",
        ]
        stored = json.loads(settings.embeddings_path.read_text())
        assert [item["id"] for item in stored] == ["r1", "r2", "r3", "r4"]
        assert stored[0]["embedding"] == [1.0, 0.0, 0.0]
        assert fake_provider.call_count == 4

    def test_failed_recipe_is_skipped(self, settings):
        write_corpus(settings.recipes_path, TWO_RECIPES)
        provider = FakeEmbeddingProvider(vectors_by_title({"Working Pie": [0.5, 0.5]}))
        generator = make_generator(settings, provider)

        lines = asyncio.run(collect_lines(generator))

        assert len(lines) == 3
        assert lines[0].startswith("Error generating embedding for Failing Stew:")
        assert lines[1] == "Generated embedding for: Working Pie\n"
        assert lines[2] == "Done. Saved to embeddings.json\n"
        stored = json.loads(settings.embeddings_path.read_text())
        assert stored == [{"id": "b", "embedding": [0.5, 0.5]}]

    def test_empty_vector_is_reported(self, settings):
        write_corpus(settings.recipes_path, TWO_RECIPES)
        provider = FakeEmbeddingProvider(vectors_by_title({"Failing Stew": [], "Working Pie": [1.0]}))

        events = asyncio.run(collect_events(make_generator(settings, provider),
                                            RecipeCorpusClient(settings.recipes_path).load_recipes()))

        assert [event.status for event in events] == [
            RebuildStatus.EMPTY, RebuildStatus.EMBEDDED, RebuildStatus.DONE
        ]
        assert events[0].message == "Failed to generate embedding for: Failing Stew (No values)"
        assert events[0].recipe_id == "a"

    def test_empty_corpus_writes_empty_store(self, settings, fake_provider):
        write_corpus(settings.recipes_path, [])
        settings.embeddings_path.write_text('[{"id": "stale", "embedding": [1.0]}]', encoding="utf-8")

        lines = asyncio.run(collect_lines(make_generator(settings, fake_provider)))

        assert lines == ["Done. Saved to embeddings.json\n"]
        assert json.loads(settings.embeddings_path.read_text()) == []
        assert fake_provider.call_count == 0

    def test_prepare_deletes_previous_store(self, settings, fake_provider):
        settings.embeddings_path.write_text("[]", encoding="utf-8")

        make_generator(settings, fake_provider).prepare()

        assert not settings.embeddings_path.exists()

    def test_prepare_fails_without_corpus_and_keeps_store(self, settings, fake_provider):
        settings.recipes_path.unlink()
        settings.embeddings_path.write_text("[]", encoding="utf-8")

        with pytest.raises(CorpusNotFoundError):
            make_generator(settings, fake_provider).prepare()

        assert settings.embeddings_path.exists()

    def test_write_failure_is_fatal_and_closes_channel(self, settings, fake_provider, tmp_path):
        settings.embeddings_path = tmp_path / "missing-dir" / "embeddings.json"
        generator = make_generator(settings, fake_provider)

        events = asyncio.run(collect_events(generator, RecipeCorpusClient(settings.recipes_path).load_recipes()))

        assert events[-1].status == RebuildStatus.FATAL
        assert events[-1].message.startswith("Fatal error:")
        assert sum(1 for event in events if event.status == RebuildStatus.EMBEDDED) == 4

    def test_provider_errors_do_not_abort_the_run(self, settings):
        def always_fail(text):
            raise EmbeddingProviderError("quota exhausted")

        provider = FakeEmbeddingProvider(always_fail)

        events = asyncio.run(collect_events(make_generator(settings, provider),
                                            RecipeCorpusClient(settings.recipes_path).load_recipes()))

        assert [event.status for event in events] == [RebuildStatus.FAILED] * 4 + [RebuildStatus.DONE]
        assert events[0].message == "Error generating embedding for Pancakes: quota exhausted"
        assert provider.call_count == 4


class TestRebuildLogging:

    def test_each_outcome_is_logged(self, settings, caplog):
        write_corpus(settings.recipes_path, TWO_RECIPES)
        provider = FakeEmbeddingProvider(vectors_by_title({"Working Pie": [0.5, 0.5]}))
        caplog.set_level(logging.INFO, logger="recipe_search.services.embedding_generator")

        asyncio.run(collect_lines(make_generator(settings, provider)))

        records = [r for r in caplog.records if r.name == "recipe_search.services.embedding_generator"]
        warnings = [r.getMessage() for r in records if r.levelno == logging.WARNING]
        infos = [r.getMessage() for r in records if r.levelno == logging.INFO]
        assert len(warnings) == 1
        assert warnings[0].startswith("Error generating embedding for Failing Stew")
        assert "Generated embedding for: Working Pie" in infos
        assert "Done. Saved to embeddings.json" in infos

    def test_non_finite_vector_is_skipped(self, settings):
        write_corpus(settings.recipes_path, TWO_RECIPES)
        provider = FakeEmbeddingProvider(vectors_by_title({
            "Failing Stew": [float("nan"), 1.0],
            "Working Pie": [0.5, 0.5],
        }))

        lines = asyncio.run(collect_lines(make_generator(settings, provider)))

        assert lines[0].startswith("Error generating embedding for Failing Stew:")
        assert json.loads(settings.embeddings_path.read_text()) == [{"id": "b", "embedding": [0.5, 0.5]}]
