"""Commit message generation from git status output."""

from typing import Dict, List, Tuple

from loguru import logger

from cyber_zen.core.classifier import FileTypeManager
from cyber_zen.core.git_ops import StatusReader
from cyber_zen.models.change import ChangeRecord, ChangeStats, ChangeStatus

EMPTY_MESSAGE = "update"


def parse_porcelain(output: str) -> List[Tuple[str, str]]:
    """Split porcelain output into (status code, path) pairs.

    Lines look like ``XY PATH``. X is the index column; when it is blank the
    change only exists in the work tree and Y is used instead.
    """
    entries = []
    for line in output.splitlines():
        if not line.strip() or len(line) < 3:
            continue
        code = line[0] if line[0] != " " else line[1]
        path = line[3:].strip()
        if path:
            entries.append((code, path))
    return entries


def build_change_records(output: str, manager: FileTypeManager) -> List[ChangeRecord]:
    """Classify every path reported in porcelain output."""
    return [
        ChangeRecord(
            path=path,
            status=code,
            category=manager.get_file_category(path),
            file_kind=manager.get_file_type(path),
        )
        for code, path in parse_porcelain(output)
    ]


def compute_stats(changes: List[ChangeRecord]) -> ChangeStats:
    stats = ChangeStats(total=len(changes))
    for change in changes:
        if change.status == ChangeStatus.ADDED.value:
            stats.added += 1
        elif change.status == ChangeStatus.MODIFIED.value:
            stats.modified += 1
        elif change.status == ChangeStatus.DELETED.value:
            stats.deleted += 1
    return stats


def count_categories(changes: List[ChangeRecord]) -> Dict[str, int]:
    """Count files per category, keyed in first-seen order."""
    counts: Dict[str, int] = {}
    for change in changes:
        counts[change.category] = counts.get(change.category, 0) + 1
    return counts


def generate_summary(changes: List[ChangeRecord], manager: FileTypeManager) -> str:
    """Build the subject line text that follows the commit type."""
    templates = manager.commit_templates.summaries
    categories = count_categories(changes)

    if len(changes) == 1:
        change = changes[0]
        verbs = {
            ChangeStatus.ADDED.value: templates.added,
            ChangeStatus.MODIFIED.value: templates.modified,
            ChangeStatus.DELETED.value: templates.deleted,
        }
        if change.status in verbs:
            return f"{verbs[change.status]}{change.category}"

    if len(categories) == 1:
        return f"{templates.update}{next(iter(categories))}"

    main_categories = [name for name, count in categories.items() if count > 1]
    if main_categories:
        return f"{templates.update}{templates.separator.join(main_categories)}"

    return templates.fallback


def generate_details(changes: List[ChangeRecord], manager: FileTypeManager) -> str:
    lines = []
    for change in changes:
        try:
            key = ChangeStatus(change.status).action_key
        except ValueError:
            key = change.status
        lines.append(f"- {manager.get_action_description(key)} {change.path}")
    return "\n".join(lines)


def generate_message(changes: List[ChangeRecord], manager: FileTypeManager) -> str:
    """Compose ``type: summary`` followed by one detail line per change."""
    if not changes:
        return EMPTY_MESSAGE

    commit_type = manager.commit_type_for(compute_stats(changes))
    prefix = manager.get_commit_prefix(commit_type)
    summary = generate_summary(changes, manager)
    details = generate_details(changes, manager)
    return f"{prefix}: {summary}\n\n{details}"


class ChangeSummarizer:
    """Reads the working tree status and turns it into a commit message."""

    def __init__(self, reader: StatusReader, manager: FileTypeManager):
        self.reader = reader
        self.manager = manager

    def collect(self) -> List[ChangeRecord]:
        changes = build_change_records(self.reader.porcelain_status(), self.manager)
        logger.debug(f"Collected {len(changes)} changed paths")
        return changes

    def compose(self, changes: List[ChangeRecord]) -> str:
        return generate_message(changes, self.manager)
