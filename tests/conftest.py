"""Shared fixtures for cyber-zen tests."""

import shutil
from pathlib import Path

import pytest

SHIPPED_CONFIGS = Path(__file__).resolve().parent.parent / "configs"


@pytest.fixture
def shipped_configs() -> Path:
    """The classifier tables shipped with the repository."""
    return SHIPPED_CONFIGS


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    """Point HOME at a temporary directory with the classifier tables installed."""
    home = tmp_path / "home"
    shutil.copytree(SHIPPED_CONFIGS, home / ".cyber-zen" / "configs")
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def git_project(tmp_path):
    """Create a git repository with one committed file."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")

    from git import Repo

    project_path = tmp_path / "project"
    project_path.mkdir()

    repo = Repo.init(project_path)
    with repo.config_writer() as config:
        config.set_value("user", "name", "Test User")
        config.set_value("user", "email", "test@example.com")

    (project_path / "README.md").write_text("# test\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    yield project_path
    repo.close()
