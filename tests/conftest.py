"""
Pytest Configuration and Fixtures
=================================

Shared fixtures for the test suite:
- A small recipe corpus written to a temporary directory
- Settings pointing at that directory
- An in-process embedding provider double that counts its calls
- A FastAPI TestClient wired to the double

No test talks to the real embedding provider.
"""

import json
from typing import Dict, List

import pytest
from fastapi.testclient import TestClient

from recipe_search.config import Settings
from fakes import FakeEmbeddingProvider, vectors_by_title


SAMPLE_RECIPES: List[Dict] = [
    {
        "id": "r1",
        "title": "Pancakes",
        "description": "Fluffy breakfast pancakes",
        "ingredients": ["flour", "milk", "eggs"],
        "instructions": ["Mix everything.", "Fry in a pan."],
    },
    {
        "id": "r2",
        "title": "Omelette",
        "description": "Quick cheese omelette",
        "ingredients": ["eggs", "cheese"],
        "instructions": ["Whisk eggs.", "Cook and fold."],
        "cuisine": "French",
    },
    {
        "id": "r3",
        "title": "Tomato Soup",
        "description": "Warm tomato soup",
        "ingredients": ["tomatoes", "stock", "basil"],
        "instructions": ["Simmer.", "Blend."],
    },
    {
        "id": "r4",
        "title": "Green Salad",
        "description": "Crunchy salad",
        "ingredients": ["lettuce", "cucumber"],
        "instructions": ["Chop.", "Toss."],
    },
]


@pytest.fixture
def recipes_file(tmp_path):
    path = tmp_path / "recipes.json"
    path.write_text(json.dumps(SAMPLE_RECIPES), encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path, recipes_file):
    return Settings(
        gemini_api_key="test-key",
        recipes_path=recipes_file,
        embeddings_path=tmp_path / "embeddings.json",
    )


@pytest.fixture
def fake_provider():
    return FakeEmbeddingProvider(vectors_by_title({
        "Pancakes": [1.0, 0.0, 0.0],
        "Omelette": [0.9, 0.1, 0.0],
        "Tomato Soup": [0.0, 1.0, 0.0],
        "Green Salad": [0.0, 0.0, 1.0],
        "breakfast": [1.0, 0.0, 0.0],
    }))


@pytest.fixture
def client(settings, fake_provider):
    from recipe_search.api.main import create_app

    app = create_app(settings, embedding_service=fake_provider)
    with TestClient(app) as test_client:
        yield test_client
