# Pydantic models for the recipe corpus and search results
from pydantic import BaseModel, ConfigDict
from typing import List


class Recipe(BaseModel):
    """A recipe from the corpus file. Unknown fields are kept as-is."""
    model_config = ConfigDict(extra="allow")

    id: str
    title: str
    description: str
    ingredients: List[str]
    instructions: List[str]

    def embedding_text(self) -> str:
        """Single text blob sent to the embedding provider for this recipe"""
        return (
            f"Title: {self.title}\n"
            f"Description: {self.description}\n"
            f"Ingredients: {', '.join(self.ingredients)}\n"
            f"Instructions: {' '.join(self.instructions)}"
        )


class RecipeMatch(Recipe):
    distance: float
