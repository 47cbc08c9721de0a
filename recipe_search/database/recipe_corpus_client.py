import json
import logging
from pathlib import Path
from typing import Dict, List

from pydantic import ValidationError

from recipe_search.exceptions import CorpusInvalidError, CorpusNotFoundError
from recipe_search.models.recipe_models import Recipe

logger = logging.getLogger(__name__)

class RecipeCorpusClient:
    """
    Read-only access to the recipe corpus file (a JSON list of recipe objects)
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load_recipes(self) -> List[Recipe]:
        """
        Load and validate every recipe in file order
        Raises CorpusNotFoundError if the file is missing, CorpusInvalidError if it does not parse
        """
        if not self.exists():
            logger.error(f"Recipe corpus not found at {self.path}")
            raise CorpusNotFoundError(f"{self.path.name} not found")

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read recipe corpus {self.path}: {str(e)}")
            raise CorpusInvalidError(f"{self.path.name} could not be read: {e}") from e

        if not isinstance(data, list):
            raise CorpusInvalidError(f"{self.path.name} must contain a list of recipes")

        try:
            recipes = [Recipe.model_validate(item) for item in data]
        except ValidationError as e:
            logger.error(f"Invalid recipe in corpus {self.path}: {str(e)}")
            raise CorpusInvalidError(f"{self.path.name} contains an invalid recipe: {e}") from e

        logger.info(f"Loaded {len(recipes)} recipes from {self.path}")
        return recipes

    def recipe_lookup(self) -> Dict[str, Recipe]:
        """Map recipe id -> Recipe, built once per call"""
        return {recipe.id: recipe for recipe in self.load_recipes()}
