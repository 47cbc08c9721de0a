# Remote embedding provider (Gemini embedContent over HTTP)
import logging
from typing import List, Optional, Protocol

import httpx
from langsmith import traceable

from recipe_search.config import Settings
from recipe_search.exceptions import EmbeddingProviderError, EmptyEmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingProvider(Protocol):
    """Minimal provider-agnostic interface: embed(text) -> vector or failure."""
    async def embed(self, text: str) -> List[float]:
        ...


class GeminiEmbeddingService:
    """
    Embedding provider backed by the Generative Language API.
    Each call is a single embedContent request; nothing is retried.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.model = settings.embedding_model
        self.endpoint = f"{settings.api_base_url.rstrip('/')}/{self.model}:embedContent"
        self.timeout = settings.request_timeout
        self._api_key = settings.gemini_api_key
        self._transport = transport
        logger.info(f"GeminiEmbeddingService initialized with model {self.model}")

    def _build_request(self, text: str) -> dict:
        return {
            "model": self.model,
            "content": {"parts": [{"text": text}]},
        }

    @traceable(name="embed_content")
    async def embed(self, text: str) -> List[float]:
        """
        Request an embedding for the given text
        Raises EmbeddingProviderError on transport/HTTP failures and
        EmptyEmbeddingError when the response carries no values
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.endpoint,
                    json=self._build_request(text),
                    headers={"x-goog-api-key": self._api_key},
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Embedding request rejected with status {e.response.status_code}")
            raise EmbeddingProviderError(f"provider returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Embedding request failed: {str(e)}")
            raise EmbeddingProviderError(f"provider request failed: {e}") from e
        except ValueError as e:
            raise EmbeddingProviderError(f"provider returned invalid JSON: {e}") from e

        values = (payload.get("embedding") or {}).get("values") if isinstance(payload, dict) else None
        if not values:
            raise EmptyEmbeddingError("provider returned no embedding values")

        return [float(v) for v in values]
