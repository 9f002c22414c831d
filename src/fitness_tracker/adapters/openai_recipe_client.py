"""OpenAI Responses API client for recipe generation."""

import json
from dataclasses import dataclass

import httpx
from openai import AsyncOpenAI

from fitness_tracker.domain.nutrition import NutrientTotals
from fitness_tracker.services.recipes import RecipeGenerator

SYSTEM_PROMPT = (
    "You are a professional nutritionist specializing in fitness nutrition. "
    "Create one recipe suited to the user's goal that fits the nutritional "
    "budget they give you. Return the recipe name, a brief description, "
    "ingredients with quantities, step-by-step instructions, and the "
    "approximate calories, protein, carbs and fat in grams."
)


@dataclass
class OpenAIRecipeClient(RecipeGenerator):
    """Recipe generator backed by OpenAI Responses API."""

    client: AsyncOpenAI
    model: str
    store: bool = False

    @classmethod
    def create(
        cls, api_key: str, model: str, store: bool, timeout_seconds: float
    ) -> "OpenAIRecipeClient":
        """Create an OpenAI recipe client with a request timeout."""
        return cls(
            client=AsyncOpenAI(
                api_key=api_key, timeout=httpx.Timeout(timeout_seconds)
            ),
            model=model,
            store=store,
        )

    async def generate(
        self, goal: str, remaining: NutrientTotals, schema: dict[str, object]
    ) -> dict[str, object]:
        """Call OpenAI Responses API with structured outputs."""
        budget = {
            "calories": remaining.calories,
            "protein": remaining.protein_g,
            "carbs": remaining.carbs_g,
            "fat": remaining.fat_g,
        }
        response = await self.client.responses.create(
            model=self.model,
            input=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": (
                        f"Please generate a recipe for my {goal} goal that helps "
                        "me meet my remaining nutritional needs: "
                        f"{json.dumps(budget)}"
                    ),
                },
            ],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "recipe",
                    "strict": True,
                    "schema": schema,
                }
            },
            store=self.store,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
