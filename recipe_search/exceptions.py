"""Custom exceptions for the recipe search service."""


class RecipeSearchError(Exception):
    """Base exception for recipe search errors."""
    pass


class ConfigurationError(RecipeSearchError):
    """Raised when required configuration is missing or invalid."""
    pass


class CorpusError(RecipeSearchError):
    """Base exception for recipe corpus errors."""
    pass


class CorpusNotFoundError(CorpusError):
    """Raised when the recipe corpus file does not exist."""
    pass


class CorpusInvalidError(CorpusError):
    """Raised when the recipe corpus cannot be parsed."""
    pass


class VectorStoreError(RecipeSearchError):
    """Base exception for vector store errors."""
    pass


class VectorStoreNotInitializedError(VectorStoreError):
    """Raised when searching before the vector store has been built."""
    pass


class VectorStoreInvalidError(VectorStoreError):
    """Raised when the vector store file is truncated or malformed."""
    pass


class EmbeddingError(RecipeSearchError):
    """Base exception for embedding provider errors."""
    pass


class EmbeddingProviderError(EmbeddingError):
    """Raised when the embedding provider request fails."""
    pass


class EmptyEmbeddingError(EmbeddingError):
    """Raised when the provider answers without any vector values."""
    pass


class QueryEmbeddingError(EmbeddingError):
    """Raised when the search query could not be embedded."""
    pass


class EmbeddingDimensionError(RecipeSearchError, ValueError):
    """Raised when two vectors of different length are compared."""
    pass
