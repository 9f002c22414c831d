"""Tests for HTTP-based adapters."""

import asyncio
import json

import pytest

from fitness_tracker.adapters.openai_recipe_client import OpenAIRecipeClient
from fitness_tracker.domain.nutrition import NutrientTotals
from fitness_tracker.services.recipes import RECIPE_SCHEMA


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str) -> None:
        self.responses = _FakeResponses(output_text)
        self.closed = False

    async def close(self) -> None:
        self.closed = True


def test_openai_recipe_client_parses_output() -> None:
    fake = _FakeOpenAI(json.dumps({"name": "Oat Bowl"}))
    client = OpenAIRecipeClient(client=fake, model="gpt-4o", store=False)

    result = asyncio.run(
        client.generate(
            "fatLoss",
            NutrientTotals(calories=500, protein_g=40, carbs_g=45, fat_g=15),
            RECIPE_SCHEMA,
        )
    )

    assert result == {"name": "Oat Bowl"}
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["model"] == "gpt-4o"
    assert payload["store"] is False
    assert payload["text"]["format"]["schema"] is RECIPE_SCHEMA
    assert '"calories": 500' in payload["input"][1]["content"]


def test_openai_recipe_client_rejects_empty_output() -> None:
    client = OpenAIRecipeClient(client=_FakeOpenAI(""), model="gpt-4o")

    with pytest.raises(RuntimeError):
        asyncio.run(client.generate("maintenance", NutrientTotals(), RECIPE_SCHEMA))


def test_openai_recipe_client_close() -> None:
    fake = _FakeOpenAI("{}")
    client = OpenAIRecipeClient(client=fake, model="gpt-4o")

    asyncio.run(client.close())

    assert fake.closed is True
