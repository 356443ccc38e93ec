"""Post-scaffold handoff to the project's package manager.

Runs on the host inside the new project directory:
- Dependency install (npm / yarn / pnpm, quiet flags)
- Opening the project in an editor
- Starting the development server
"""
import shlex
import subprocess
from pathlib import Path
from typing import Optional

from isicreate.core.config import get_config
from isicreate.core.logger import get_logger
from isicreate.models.request import PackageManager
from isicreate.scaffold.errors import InstallError

logger = get_logger(__name__)


class PackageManagerRunner:
    """Delegates install and dev-server steps to the chosen package manager."""

    def __init__(self, mock: bool = False, install_timeout: Optional[int] = None,
                 editor_command: Optional[str] = None):
        self.mock = mock
        config = get_config()
        self.install_timeout = install_timeout or config.install_timeout
        self.editor_command = editor_command or config.editor_command

    def install(self, project_path: Path, package_manager: PackageManager) -> None:
        """Install dependencies in project_path.

        Raises:
            InstallError: If the install exits non-zero, times out or the
                package manager is not installed
        """
        cmd = package_manager.install_command
        if self.mock:
            logger.info(f"MOCK: Would run '{' '.join(cmd)}' in {project_path}")
            return

        logger.info(f"Installing dependencies with {package_manager.value}")
        try:
            result = subprocess.run(
                cmd,
                cwd=str(project_path),
                capture_output=True,
                text=True,
                check=False,
                timeout=self.install_timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise InstallError(
                f"Dependency install timed out after {self.install_timeout}s"
            ) from e
        except FileNotFoundError as e:
            raise InstallError(f"{package_manager.value} is not installed") from e

        if result.returncode != 0:
            raise InstallError(
                f"'{' '.join(cmd)}' exited with status {result.returncode}",
                returncode=result.returncode,
                stderr=(result.stderr or "").strip(),
            )

        logger.info("✓ Dependencies installed")

    def open_editor(self, project_path: Path) -> bool:
        """Open project_path in the configured editor (best effort).

        Returns:
            True if the editor command was launched successfully
        """
        cmd = shlex.split(self.editor_command) + ["."]
        if self.mock:
            logger.info(f"MOCK: Would run '{' '.join(cmd)}' in {project_path}")
            return True

        try:
            result = subprocess.run(cmd, cwd=str(project_path), check=False)
        except FileNotFoundError:
            logger.warning(f"Editor command not found: {self.editor_command}")
            return False

        if result.returncode != 0:
            logger.warning(f"Editor exited with status {result.returncode}")
            return False
        return True

    def run_dev_server(self, project_path: Path, package_manager: PackageManager) -> int:
        """Run the dev server in the foreground and return its exit status."""
        cmd = package_manager.dev_command
        if self.mock:
            logger.info(f"MOCK: Would run '{' '.join(cmd)}' in {project_path}")
            return 0

        logger.info(f"Starting development server: {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, cwd=str(project_path), check=False)
        except FileNotFoundError:
            logger.error(f"{package_manager.value} is not installed")
            return 127
        return result.returncode
