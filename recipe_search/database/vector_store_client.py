import json
import logging
from pathlib import Path
from typing import List

from pydantic import ValidationError

from recipe_search.exceptions import VectorStoreInvalidError, VectorStoreNotInitializedError
from recipe_search.models.embedding_models import EmbeddingRecord

logger = logging.getLogger(__name__)

class VectorStoreClient:
    """
    Client for the flat-file vector store holding one {id, embedding} object per recipe.
    The file is always rewritten in full; there are no incremental updates.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def delete(self) -> bool:
        """Remove the store file. Returns True if a file was deleted."""
        if not self.exists():
            return False
        self.path.unlink()
        logger.info(f"Deleted vector store {self.path}")
        return True

    def load_records(self) -> List[EmbeddingRecord]:
        if not self.exists():
            raise VectorStoreNotInitializedError(f"{self.path.name} not found. Run /reset first.")

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, list):
                raise ValueError("expected a list of embedding records")
            records = [EmbeddingRecord.model_validate(item) for item in data]
        except (OSError, ValueError, ValidationError) as e:
            # A rebuild running concurrently may leave a partially written file
            logger.error(f"Failed to load vector store {self.path}: {str(e)}")
            raise VectorStoreInvalidError(f"{self.path.name} could not be read: {e}") from e

        logger.info(f"Loaded {len(records)} embedding records from {self.path}")
        return records

    def save_records(self, records: List[EmbeddingRecord]) -> None:
        payload = [record.model_dump() for record in records]
        self.path.write_text(json.dumps(payload), encoding="utf-8")
        logger.info(f"Saved {len(records)} embedding records to {self.path}")
