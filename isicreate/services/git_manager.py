"""Git repository management for scaffolded projects."""
import subprocess
from pathlib import Path
from typing import List, Optional

from isicreate.core.logger import get_logger

logger = get_logger(__name__)


class GitError(Exception):
    """Raised when a git command fails."""

    def __init__(self, message: str, command: str = "", stderr: str = ""):
        self.command = command
        self.stderr = stderr
        super().__init__(message)


class GitManager:
    """Runs the git operations the scaffold pipeline needs.

    Every method takes the repository path explicitly; nothing depends on the
    process working directory.
    """

    def __init__(self, mock: bool = False, timeout: Optional[int] = None):
        self.mock = mock
        self.timeout = timeout

    def _run(self, args: List[str], cwd: Optional[Path] = None) -> str:
        """Run a git command and return its stdout.

        Raises:
            GitError: If git is missing, times out or exits non-zero
        """
        cmd = ['git'] + list(args)
        cmd_str = " ".join(cmd)

        try:
            result = subprocess.run(
                cmd,
                cwd=str(cwd) if cwd else None,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.strip() if e.stderr else ""
            raise GitError(
                f"Git command failed (exit {e.returncode}): {cmd_str}\n{stderr}".rstrip(),
                command=cmd_str,
                stderr=stderr,
            ) from e
        except subprocess.TimeoutExpired as e:
            raise GitError(
                f"Git command timed out after {self.timeout}s: {cmd_str}",
                command=cmd_str,
            ) from e
        except FileNotFoundError as e:
            raise GitError("Git not found. Please install git first.", command=cmd_str) from e

        return (result.stdout or "").strip()

    def init(self, path: Path) -> None:
        """Initialize a repository at path (safe to repeat)."""
        if self.mock:
            logger.info(f"MOCK: Would run git init in {path}")
            return

        self._run(['init'], cwd=path)

    def list_remotes(self, path: Path) -> List[str]:
        """Return the names of the configured remotes."""
        if self.mock:
            logger.info(f"MOCK: Would list remotes in {path}")
            return []

        stdout = self._run(['remote'], cwd=path)
        return [line.strip() for line in stdout.splitlines() if line.strip()]

    def remove_remote(self, path: Path, name: str) -> None:
        """Remove a remote by name."""
        if self.mock:
            logger.info(f"MOCK: Would remove remote {name} in {path}")
            return

        self._run(['remote', 'remove', name], cwd=path)

    def add_remote(self, path: Path, name: str, url: str) -> None:
        """Add a remote pointing at url."""
        if self.mock:
            logger.info(f"MOCK: Would add remote {name} -> {url} in {path}")
            return

        self._run(['remote', 'add', name, url], cwd=path)

    def clone(self, url: str, target: Path, branch: str = "main") -> None:
        """Clone a single branch of url into target.

        Args:
            url: Git repository URL
            target: Directory to clone into (must be absent or empty)
            branch: Branch to clone (default: main)

        Raises:
            GitError: If the clone fails
        """
        if self.mock:
            logger.info(f"MOCK: Would clone {url} ({branch}) to {target}")
            return

        logger.info(f"Cloning {url} (branch: {branch})")
        self._run(['clone', '--branch', branch, '--depth', '1', url, str(target)])
        logger.info(f"✓ Successfully cloned template to {target}")
