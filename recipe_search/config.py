"""
Configuration for the recipe search service.

Values come from the process environment, optionally seeded from a .env file:

    GEMINI_API_KEY       required, key for the embedding provider
    EMBEDDING_MODEL      default models/text-embedding-004
    GEMINI_API_BASE_URL  default https://generativelanguage.googleapis.com/v1beta
    RECIPES_PATH         default recipes.json
    EMBEDDINGS_PATH      default embeddings.json
    SEARCH_TOP_K         default 3
    EMBEDDING_TIMEOUT    default 30 (seconds)
    HOST / PORT          default localhost / 9999
    LOG_LEVEL            default INFO
"""
import os
import logging
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from recipe_search.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseModel):
    """Settings shared by the generator, the search pipeline and the API"""
    gemini_api_key: str = Field(..., min_length=1)
    embedding_model: str = "models/text-embedding-004"
    api_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    recipes_path: Path = Path("recipes.json")
    embeddings_path: Path = Path("embeddings.json")
    top_k: int = Field(3, ge=1)
    request_timeout: float = Field(30.0, gt=0)
    host: str = "localhost"
    port: int = 9999
    log_level: str = "INFO"


_ENV_FIELDS = {
    "GEMINI_API_KEY": "gemini_api_key",
    "EMBEDDING_MODEL": "embedding_model",
    "GEMINI_API_BASE_URL": "api_base_url",
    "RECIPES_PATH": "recipes_path",
    "EMBEDDINGS_PATH": "embeddings_path",
    "SEARCH_TOP_K": "top_k",
    "EMBEDDING_TIMEOUT": "request_timeout",
    "HOST": "host",
    "PORT": "port",
    "LOG_LEVEL": "log_level",
}


def load_settings(env_file: str = None) -> Settings:
    """
    Build Settings from the environment (and .env file if present)
    Raises ConfigurationError when the API key is missing or a value is invalid
    """
    load_dotenv(env_file)

    values = {}
    for env_name, field_name in _ENV_FIELDS.items():
        value = os.getenv(env_name)
        if value:
            values[field_name] = value

    if not values.get("gemini_api_key"):
        raise ConfigurationError("GEMINI_API_KEY environment variable is not set.")

    try:
        settings = Settings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    logger.info(f"Loaded settings: model={settings.embedding_model}, recipes={settings.recipes_path}, embeddings={settings.embeddings_path}")
    return settings


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
