"""Seed catalog sources.

Implements the SeedSource port with a JSON file reader for deployments and a
static in-memory source for tests and embedding.
"""

from pathlib import Path

import logfire
from pydantic import ValidationError as PydanticValidationError

from tide.adapter.error import SeedError
from tide.domain.service.identity_registry import SeedSource
from tide.domain.value import SeedDocument
from tide.util.logging import get_logger

logger = get_logger(__name__)


class JsonFileSeedSource(SeedSource):
    """Seed source reading a JSON document from disk."""

    def __init__(self, path: Path) -> None:
        """Initialize JSON seed source.

        Args:
            path: Path to the seed JSON file
        """
        self.path = path

    async def load(self) -> SeedDocument:
        """Read and validate the seed file.

        Returns:
            Parsed seed document

        Raises:
            SeedError: If the file is missing or does not match the schema
        """
        logger.debug(f"Reading seed file {self.path}")
        with logfire.span("seed.load_json", path=str(self.path)):
            try:
                raw = self.path.read_text(encoding="utf-8")
            except OSError as e:
                logfire.error("Seed file unreadable", path=str(self.path), error=str(e))
                raise SeedError(f"Cannot read seed file {self.path}: {e}") from e

            try:
                document = SeedDocument.model_validate_json(raw)
            except PydanticValidationError as e:
                logfire.error("Seed file invalid", path=str(self.path), error=str(e))
                raise SeedError(f"Invalid seed file {self.path}: {e}") from e

            logfire.info(
                "Seed file loaded",
                path=str(self.path),
                communities=len(document.communities),
            )
            return document


class StaticSeedSource(SeedSource):
    """Seed source serving a document held in memory."""

    def __init__(self, document: SeedDocument | None = None) -> None:
        """Initialize static seed source.

        Args:
            document: Catalog to serve; empty when omitted
        """
        self.document = document or SeedDocument()

    @classmethod
    def from_dict(cls, data: dict) -> "StaticSeedSource":
        """Build a source from the seed document's dict shape.

        Raises:
            SeedError: If the data does not match the schema
        """
        try:
            return cls(SeedDocument.model_validate(data))
        except PydanticValidationError as e:
            raise SeedError(f"Invalid seed document: {e}") from e

    async def load(self) -> SeedDocument:
        """Return the in-memory document."""
        return self.document
