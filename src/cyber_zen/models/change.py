"""Change model for files reported by git status."""

from enum import Enum

from pydantic import BaseModel


class ChangeStatus(str, Enum):
    """Porcelain status code of a changed file."""

    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    UNMERGED = "U"

    @property
    def action_key(self) -> str:
        """Key used to look up the action wording in commit templates."""
        return self.name.lower()


class ChangeRecord(BaseModel):
    """Represents a single changed path in the working tree."""

    path: str
    status: str  # ChangeStatus value, or the literal code for anything else
    category: str
    file_kind: str


class ChangeStats(BaseModel):
    """Counts of added, modified and deleted files."""

    added: int = 0
    modified: int = 0
    deleted: int = 0
    total: int = 0
