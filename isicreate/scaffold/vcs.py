"""Version-control bootstrap for a new project directory."""
from pathlib import Path
from typing import Optional

from isicreate.core.logger import get_logger
from isicreate.scaffold.errors import RepositoryInitError
from isicreate.services.git_manager import GitError, GitManager

logger = get_logger(__name__)

REMOTE_NAME = "origin"


def bootstrap_repository(git: GitManager, destination: Path, remote_url: str) -> Optional[str]:
    """Initialize git in destination and point `origin` at remote_url.

    Local initialization must succeed. Remote wiring is best effort: any
    failure there is logged and returned as a warning instead of raised.

    Args:
        git: Git adapter
        destination: Project directory
        remote_url: URL for the `origin` remote (empty skips remote wiring)

    Returns:
        A warning message if the remote could not be configured, else None

    Raises:
        RepositoryInitError: If `git init` fails
    """
    logger.info("🔧 Initializing the git repository...")
    try:
        git.init(destination)
    except GitError as exc:
        raise RepositoryInitError(
            f"Could not initialize git in {destination}: {exc}", stage="vcs"
        ) from exc

    if not remote_url or not remote_url.strip():
        warning = "No remote repository URL given; 'origin' was not configured."
        logger.warning(warning)
        return warning

    try:
        if REMOTE_NAME in git.list_remotes(destination):
            git.remove_remote(destination, REMOTE_NAME)
        git.add_remote(destination, REMOTE_NAME, remote_url.strip())
    except GitError as exc:
        warning = f"Could not add the remote repository. Error: {exc}"
        logger.warning(warning)
        return warning

    logger.info(f"🌐 Remote '{REMOTE_NAME}' set to {remote_url.strip()}")
    return None
