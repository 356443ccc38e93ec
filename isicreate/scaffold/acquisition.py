"""Template acquisition: clone, base copy, archive overlay."""
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from isicreate.core.config import ScaffoldConfig
from isicreate.core.logger import get_logger
from isicreate.scaffold.archive import ExtractStats, extract_archive
from isicreate.scaffold.errors import ArchiveNotFoundError, TemplateFetchError
from isicreate.scaffold.merger import MergeStats, merge_directory
from isicreate.services.git_manager import GitError, GitManager

logger = get_logger(__name__)


@dataclass
class AcquisitionReport:
    """Outcome of one template acquisition."""
    merge: MergeStats
    overlay: Optional[ExtractStats] = None  # None when the archive was missing
    warnings: List[str] = field(default_factory=list)


class TemplateAcquirer:
    """Fetches the template into a scratch directory and lays it into a project.

    The scratch directory lives only for the duration of acquire() and is
    removed whether the fetch succeeds or not.
    """

    def __init__(self, git: GitManager, config: ScaffoldConfig):
        self.git = git
        self.config = config

    def acquire(
        self,
        destination: Path,
        url: Optional[str] = None,
        branch: Optional[str] = None,
    ) -> AcquisitionReport:
        """Clone the template and merge it into destination.

        Args:
            destination: Project root
            url: Template repository (defaults to config.template_url)
            branch: Template branch (defaults to config.template_branch)

        Returns:
            AcquisitionReport with merge/overlay details and warnings

        Raises:
            TemplateFetchError: If the clone fails
            ArchiveError: If the overlay archive exists but is corrupt
        """
        url = url or self.config.template_url
        branch = branch or self.config.template_branch

        with tempfile.TemporaryDirectory(prefix="isicreate-") as scratch:
            template_path = Path(scratch) / "template"

            logger.info("📥 Cloning the template repository...")
            try:
                self.git.clone(url, template_path, branch=branch)
            except GitError as exc:
                raise TemplateFetchError(
                    f"Could not clone the template repository. Error: {exc}",
                    stage="acquisition",
                ) from exc
            template_path.mkdir(exist_ok=True)  # mock clones leave nothing behind

            logger.info("📁 Copying project structure...")
            report = AcquisitionReport(
                merge=merge_directory(template_path, destination, self.config.excluded_paths)
            )

            archive_path = template_path / self.config.archive_name
            logger.info(f"📦 Extracting {self.config.archive_name}...")
            try:
                report.overlay = extract_archive(archive_path, destination)
            except ArchiveNotFoundError:
                warning = f"{self.config.archive_name} not found in the cloned template."
                logger.warning(warning)
                report.warnings.append(warning)

        return report
