"""Status checks and uninstall."""

import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

from cyber_zen.core.errors import ToolEnvironmentError

INSTALL_PATH = Path("/usr/local/bin/cyber-zen")
BUILD_DIR = Path("build")
PROBED_TOOLS = ("git", "bash")


def tool_availability(tools=PROBED_TOOLS) -> Dict[str, Optional[str]]:
    """Map each tool name to its resolved path, or None when not on PATH."""
    return {tool: shutil.which(tool) for tool in tools}


def remove_install_file(install_path: Path = INSTALL_PATH) -> bool:
    """Delete the installed binary with elevated privileges.

    Returns False when nothing is installed at install_path.
    """
    if not install_path.exists():
        logger.debug(f"Nothing installed at {install_path}")
        return False

    cmd: List[str] = ["sudo", "rm", "-f", str(install_path)]
    result = subprocess.run(cmd, capture_output=True, text=True, check=False)  # noqa: S603
    if result.returncode != 0:
        raise ToolEnvironmentError(
            f"Failed to remove {install_path}: {result.stderr.strip() or result.returncode}"
        )
    return True


def remove_build_dir(build_dir: Path = BUILD_DIR) -> bool:
    """Remove the local build directory; failures are logged, not raised."""
    if not build_dir.exists():
        return False
    try:
        shutil.rmtree(build_dir)
    except OSError as e:
        logger.warning(f"Failed to clean build directory {build_dir}: {e}")
        return False
    return True
