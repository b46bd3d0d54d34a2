"""File kind and category classification driven by YAML tables."""

import sys
from pathlib import Path
from typing import List, Optional, Type, TypeVar

import yaml
from loguru import logger
from pydantic import BaseModel, ValidationError

from cyber_zen.core.errors import ConfigError
from cyber_zen.models.change import ChangeStats
from cyber_zen.models.classifier import (
    CategoryConfig,
    CommitTemplateConfig,
    FileTypeConfig,
)

CONFIGS_DIR_NAME = "configs"
FILE_TYPES_FILE = "file-types.yaml"
CATEGORIES_FILE = "categories.yaml"
COMMIT_TEMPLATES_FILE = "commit-templates.yaml"

OTHER_FILE_KIND = "other file"
DEFAULT_COMMIT_DESCRIPTION = "update project"

ModelT = TypeVar("ModelT", bound=BaseModel)


def config_dir_candidates(
    cwd: Optional[Path] = None,
    executable: Optional[Path] = None,
    home: Optional[Path] = None,
) -> List[Path]:
    """Locations of the configs directory, in lookup order."""
    cwd = cwd or Path.cwd()
    executable = executable or Path(sys.argv[0]).resolve()
    home = home or Path.home()
    return [
        cwd / CONFIGS_DIR_NAME,
        executable.parent / CONFIGS_DIR_NAME,
        home / ".cyber-zen" / CONFIGS_DIR_NAME,
    ]


def resolve_config_dir(candidates: Optional[List[Path]] = None) -> Path:
    """Pick the first existing configs directory.

    The last candidate is returned even when it does not exist so that the
    subsequent load reports which file was missing.
    """
    candidates = candidates or config_dir_candidates()
    for candidate in candidates:
        if candidate.is_dir():
            return candidate
    return candidates[-1]


def _load_table(path: Path, model: Type[ModelT]) -> ModelT:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except FileNotFoundError as e:
        raise ConfigError(f"Missing classifier config: {path}") from e
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid classifier config {path}: {e}") from e


class FileTypeManager:
    """Answers 'what kind of file is this' and 'which area does it touch'.

    All lookups walk the tables in the order they were declared in YAML,
    so the first declared match wins.
    """

    def __init__(
        self,
        file_types: FileTypeConfig,
        categories: CategoryConfig,
        commit_templates: CommitTemplateConfig,
    ):
        self.file_types = file_types
        self.categories = categories
        self.commit_templates = commit_templates

    @classmethod
    def from_config_dir(cls, config_dir: Optional[Path] = None) -> "FileTypeManager":
        """Load the three classifier tables from a configs directory."""
        config_dir = config_dir or resolve_config_dir()
        logger.debug(f"Loading classifier tables from {config_dir}")
        return cls(
            file_types=_load_table(config_dir / FILE_TYPES_FILE, FileTypeConfig),
            categories=_load_table(config_dir / CATEGORIES_FILE, CategoryConfig),
            commit_templates=_load_table(
                config_dir / COMMIT_TEMPLATES_FILE, CommitTemplateConfig
            ),
        )

    def get_file_type(self, filename: str) -> str:
        """Get the description of the first kind whose extension matches."""
        for group in self.file_types.file_types.values():
            for item in group.values():
                for ext in item.extensions:
                    if filename.endswith(ext):
                        return item.description
        return OTHER_FILE_KIND

    def get_file_category(self, path: str) -> str:
        """Get the category of the first directory pattern found in path."""
        for pattern in self.categories.directory_patterns.values():
            for substring in pattern.patterns:
                if substring in path:
                    return pattern.description
        return self.categories.default

    @staticmethod
    def get_commit_type(added: int, modified: int, deleted: int) -> str:
        """Choose a conventional commit type from change counts."""
        if added > 0 and modified == 0 and deleted == 0:
            return "feat"
        if modified > 0 and added == 0 and deleted == 0:
            return "fix"
        if deleted > 0 and added == 0 and modified == 0:
            return "cleanup"
        if added > 0 and modified > 0 and deleted == 0:
            return "refactor"
        return "feat"

    def commit_type_for(self, stats: ChangeStats) -> str:
        return self.get_commit_type(stats.added, stats.modified, stats.deleted)

    def get_commit_prefix(self, commit_type: str) -> str:
        return self.commit_templates.prefixes.get(commit_type, commit_type)

    def get_commit_description(self, commit_type: str) -> str:
        return self.commit_templates.descriptions.get(
            commit_type, DEFAULT_COMMIT_DESCRIPTION
        )

    def get_action_description(self, action: str) -> str:
        return self.commit_templates.actions.get(action, action)
