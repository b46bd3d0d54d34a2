"""Typed views of the classifier YAML tables."""

from typing import Dict, List

from pydantic import BaseModel, Field


class FileTypeItem(BaseModel):
    """A file kind and the extensions that identify it."""

    extensions: List[str] = []
    description: str


class FileTypeConfig(BaseModel):
    """Contents of file-types.yaml, grouped as group -> kind -> item."""

    file_types: Dict[str, Dict[str, FileTypeItem]] = {}


class CategoryPattern(BaseModel):
    """Path substrings that place a file in a category."""

    patterns: List[str] = []
    description: str


class CategoryConfig(BaseModel):
    """Contents of categories.yaml."""

    directory_patterns: Dict[str, CategoryPattern] = {}
    default: str = "project files"


class SummaryTemplates(BaseModel):
    """Wording used when composing the commit summary line."""

    added: str = "new "
    modified: str = "optimize "
    deleted: str = "clean up "
    update: str = "update "
    fallback: str = "update project files"
    separator: str = ", "


class CommitTemplateConfig(BaseModel):
    """Contents of commit-templates.yaml."""

    prefixes: Dict[str, str] = {}
    descriptions: Dict[str, str] = {}
    actions: Dict[str, str] = {}
    summaries: SummaryTemplates = Field(default_factory=SummaryTemplates)
