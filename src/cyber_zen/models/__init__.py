"""Data models for Cyber Zen."""

from .change import ChangeRecord, ChangeStats, ChangeStatus
from .classifier import (
    CategoryConfig,
    CategoryPattern,
    CommitTemplateConfig,
    FileTypeConfig,
    FileTypeItem,
    SummaryTemplates,
)
from .compression import BatchSummary, CompressionAction, CompressionResult
from .config import AppConfig

__all__ = [
    "AppConfig",
    "BatchSummary",
    "CategoryConfig",
    "CategoryPattern",
    "ChangeRecord",
    "ChangeStats",
    "ChangeStatus",
    "CommitTemplateConfig",
    "CompressionAction",
    "CompressionResult",
    "FileTypeConfig",
    "FileTypeItem",
    "SummaryTemplates",
]
