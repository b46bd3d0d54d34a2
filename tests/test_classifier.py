"""Tests for FileTypeManager lookups and config resolution."""

import pytest

from cyber_zen.core.classifier import (
    OTHER_FILE_KIND,
    FileTypeManager,
    config_dir_candidates,
    resolve_config_dir,
)
from cyber_zen.core.errors import ConfigError
from cyber_zen.models.classifier import (
    CategoryConfig,
    CategoryPattern,
    CommitTemplateConfig,
    FileTypeConfig,
    FileTypeItem,
)


@pytest.fixture
def manager():
    """A manager whose tables have deliberately overlapping entries."""
    file_types = FileTypeConfig(
        file_types={
            "code": {
                "python": FileTypeItem(extensions=[".py"], description="Python source"),
                "stub": FileTypeItem(extensions=[".pyi", ".py"], description="stub"),
            },
            "docs": {
                "markdown": FileTypeItem(extensions=[".md"], description="documentation"),
            },
        }
    )
    categories = CategoryConfig(
        directory_patterns={
            "tests": CategoryPattern(patterns=["tests/"], description="tests"),
            "core": CategoryPattern(patterns=["src/", "tests/"], description="core"),
        },
        default="misc",
    )
    templates = CommitTemplateConfig(
        descriptions={"feat": "add feature"},
        actions={"added": "add", "modified": "update"},
    )
    return FileTypeManager(file_types, categories, templates)


class TestLookups:
    def test_first_declared_extension_wins(self, manager):
        assert manager.get_file_type("pkg/module.py") == "Python source"
        assert manager.get_file_type("pkg/module.pyi") == "stub"
        assert manager.get_file_type("README.md") == "documentation"

    def test_unknown_extension(self, manager):
        assert manager.get_file_type("Makefile") == OTHER_FILE_KIND

    def test_first_declared_category_wins(self, manager):
        assert manager.get_file_category("tests/test_app.py") == "tests"
        assert manager.get_file_category("src/app.py") == "core"

    def test_default_category(self, manager):
        assert manager.get_file_category("setup.cfg") == "misc"

    def test_action_and_description_fallbacks(self, manager):
        assert manager.get_action_description("added") == "add"
        assert manager.get_action_description("unmerged") == "unmerged"
        assert manager.get_commit_description("feat") == "add feature"
        assert manager.get_commit_description("cleanup") == "update project"


@pytest.mark.parametrize(
    "added,modified,deleted,expected",
    [
        (2, 0, 0, "feat"),
        (0, 3, 0, "fix"),
        (0, 0, 1, "cleanup"),
        (1, 1, 0, "refactor"),
        (1, 0, 1, "feat"),
        (0, 1, 1, "feat"),
        (1, 1, 1, "feat"),
        (0, 0, 0, "feat"),
    ],
)
def test_commit_type_decision_table(added, modified, deleted, expected):
    assert FileTypeManager.get_commit_type(added, modified, deleted) == expected


class TestLoading:
    def test_loads_shipped_tables(self, shipped_configs):
        manager = FileTypeManager.from_config_dir(shipped_configs)

        assert manager.get_file_type("app/main.py") == "Python source"
        assert manager.get_file_category("tests/test_main.py") == "tests"
        assert manager.get_action_description("deleted") == "delete"
        assert manager.commit_templates.summaries.added == "new "

    def test_missing_table_is_an_error(self, tmp_path, shipped_configs):
        for name in ("file-types.yaml", "categories.yaml"):
            (tmp_path / name).write_text((shipped_configs / name).read_text())

        with pytest.raises(ConfigError, match="commit-templates.yaml"):
            FileTypeManager.from_config_dir(tmp_path)

    def test_malformed_table_is_an_error(self, tmp_path):
        (tmp_path / "file-types.yaml").write_text("file_types: {code: [oops\n")

        with pytest.raises(ConfigError):
            FileTypeManager.from_config_dir(tmp_path)

    def test_invalid_table_shape_is_an_error(self, tmp_path):
        (tmp_path / "file-types.yaml").write_text("file_types:\n  code:\n    py: 3\n")

        with pytest.raises(ConfigError, match="Invalid classifier config"):
            FileTypeManager.from_config_dir(tmp_path)


class TestConfigDirResolution:
    def test_search_order(self, tmp_path):
        candidates = config_dir_candidates(
            cwd=tmp_path / "cwd",
            executable=tmp_path / "bin" / "cyber-zen",
            home=tmp_path / "home",
        )

        assert candidates == [
            tmp_path / "cwd" / "configs",
            tmp_path / "bin" / "configs",
            tmp_path / "home" / ".cyber-zen" / "configs",
        ]

    def test_first_existing_directory_is_used(self, tmp_path):
        candidates = [tmp_path / "a", tmp_path / "b", tmp_path / "c"]
        (tmp_path / "b").mkdir()
        (tmp_path / "c").mkdir()

        assert resolve_config_dir(candidates) == tmp_path / "b"

    def test_falls_back_to_last_candidate(self, tmp_path):
        candidates = [tmp_path / "a", tmp_path / "b"]

        assert resolve_config_dir(candidates) == tmp_path / "b"


def test_commit_prefix_comes_from_templates(manager):
    manager.commit_templates.prefixes["feat"] = "feature"

    assert manager.get_commit_prefix("feat") == "feature"
    assert manager.get_commit_prefix("fix") == "fix"
