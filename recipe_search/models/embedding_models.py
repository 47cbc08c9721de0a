# Data classes for stored vector embeddings and rebuild progress
import math
from enum import Enum
from pydantic import BaseModel, field_validator
from typing import List, Optional


class EmbeddingRecord(BaseModel):
    id: str
    embedding: List[float]

    @field_validator("embedding")
    @classmethod
    def check_finite(cls, embedding: List[float]) -> List[float]:
        if not all(math.isfinite(value) for value in embedding):
            raise ValueError("embedding contains NaN or infinite values")
        return embedding


class RebuildStatus(str, Enum):
    EMBEDDED = "embedded"
    EMPTY = "empty"
    FAILED = "failed"
    DONE = "done"
    FATAL = "fatal"


class RebuildEvent(BaseModel):
    """One progress message produced while rebuilding the vector store"""
    status: RebuildStatus
    message: str
    recipe_id: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.status in (RebuildStatus.EMPTY, RebuildStatus.FAILED, RebuildStatus.FATAL)

    def to_line(self) -> str:
        return f"{self.message}\n"
