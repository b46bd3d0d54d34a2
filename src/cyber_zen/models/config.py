"""Application configuration model."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class AppConfig(BaseModel):
    """Install location and host description, read once at start-up."""

    install_dir: Path
    platform: str
    architecture: str

    model_config = ConfigDict(frozen=True)
