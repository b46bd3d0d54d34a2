"""Result models for the image compressor."""

from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel


class CompressionAction(str, Enum):
    """What happened to a source file."""

    ENCODED = "encoded"
    COPIED = "copied"
    FAILED = "failed"


class CompressionResult(BaseModel):
    """Outcome of compressing one file."""

    source: Path
    destination: Path
    action: CompressionAction
    format: Optional[str] = None
    original_size: Tuple[int, int] = (0, 0)
    new_size: Tuple[int, int] = (0, 0)
    original_bytes: int = 0
    compressed_bytes: int = 0
    error: Optional[str] = None

    @property
    def ratio(self) -> float:
        """Compressed size as a fraction of the original."""
        if self.original_bytes == 0:
            return 0.0
        return self.compressed_bytes / self.original_bytes


class BatchSummary(BaseModel):
    """Aggregate of a compress run."""

    destination: Path
    results: List[CompressionResult] = []

    def count(self, action: CompressionAction) -> int:
        return sum(1 for r in self.results if r.action == action)

    @property
    def original_bytes(self) -> int:
        return sum(r.original_bytes for r in self.results)

    @property
    def compressed_bytes(self) -> int:
        return sum(r.compressed_bytes for r in self.results)
