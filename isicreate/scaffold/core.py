"""Core scaffolding pipeline for ISI.INVOICE projects.

Stages run strictly in order, each exactly once:

    precondition -> vcs -> acquisition -> rewrite -> cleanup

Two edges abort the run: an existing destination (before anything is
written) and a failed template clone. Everything else that goes wrong in a
recoverable way becomes a warning on the result.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from isicreate.core.config import ScaffoldConfig, get_config
from isicreate.core.logger import get_logger
from isicreate.models.request import ProjectRequest
from isicreate.scaffold.acquisition import AcquisitionReport, TemplateAcquirer
from isicreate.scaffold.errors import DestinationExistsError
from isicreate.scaffold.rewriter import FileRewriter, RewriteOutcome, RewriteStatus
from isicreate.scaffold.templates import TemplateEngine
from isicreate.scaffold.vcs import bootstrap_repository
from isicreate.services.git_manager import GitManager

logger = get_logger(__name__)

DOC_SUFFIX = ".md"
SUMMARY_FILE = "README.md"
BUILD_OUTPUT_DIR = "dist-zip"


class Stage(Enum):
    """Pipeline stages, in execution order."""
    PRECONDITION = "precondition"
    VCS = "vcs"
    ACQUISITION = "acquisition"
    REWRITE = "rewrite"
    CLEANUP = "cleanup"


@dataclass
class ScaffoldResult:
    """What a pipeline run produced."""
    project_path: Path
    completed_stages: List[Stage] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    acquisition: Optional[AcquisitionReport] = None
    rewrites: List[RewriteOutcome] = field(default_factory=list)


class ScaffoldManager:
    """Materializes a new project directory from the remote template."""

    def __init__(
        self,
        config: Optional[ScaffoldConfig] = None,
        git: Optional[GitManager] = None,
        rewriter: Optional[FileRewriter] = None,
        template_engine: Optional[TemplateEngine] = None,
        mock: bool = False,
    ):
        self.config = config or get_config()
        self.git = git or GitManager(mock=mock, timeout=self.config.git_timeout)
        self.rewriter = rewriter or FileRewriter()
        self.template_engine = template_engine or TemplateEngine()
        self.acquirer = TemplateAcquirer(self.git, self.config)

    def scaffold_project(self, request: ProjectRequest, output_dir: Optional[Path] = None) -> ScaffoldResult:
        """Run the whole pipeline for one project.

        Args:
            request: Answers collected for the project
            output_dir: Working root the project is created under (defaults to cwd)

        Returns:
            ScaffoldResult describing the created project

        Raises:
            DestinationExistsError: If <output_dir>/<name> already exists
            RepositoryInitError: If git cannot be initialized locally
            TemplateFetchError: If the template cannot be cloned
            ArchiveError: If the overlay archive is corrupt
        """
        output_dir = Path(output_dir) if output_dir else Path.cwd()
        project_path = output_dir / request.name

        self._check_destination(project_path)
        result = ScaffoldResult(project_path=project_path)
        result.completed_stages.append(Stage.PRECONDITION)

        logger.info(f"✨ Creating project: {request.name}")
        project_path.mkdir(parents=True)

        warning = bootstrap_repository(self.git, project_path, request.remote_url)
        if warning:
            result.warnings.append(warning)
        result.completed_stages.append(Stage.VCS)

        result.acquisition = self.acquirer.acquire(project_path)
        result.warnings.extend(result.acquisition.warnings)
        result.completed_stages.append(Stage.ACQUISITION)

        logger.info("📝 Updating environment files, index.html and the main layout...")
        result.rewrites = self.rewriter.rewrite(project_path, request)
        for outcome in result.rewrites:
            if outcome.status is RewriteStatus.SKIPPED:
                logger.debug(f"{outcome.path} not present in template, skipped")
        result.completed_stages.append(Stage.REWRITE)

        logger.info("🧹 Removing unneeded files...")
        self._finalize(project_path, request)
        result.completed_stages.append(Stage.CLEANUP)

        logger.info(f"📂 Project {request.name} created")
        return result

    def _check_destination(self, project_path: Path) -> None:
        """Abort before any mutation if the project directory exists."""
        if project_path.exists() or project_path.is_symlink():
            raise DestinationExistsError(
                f"The directory {project_path.name} already exists. "
                "Choose another name or remove the existing directory.",
                stage=Stage.PRECONDITION.value,
            )

    def _finalize(self, project_path: Path, request: ProjectRequest) -> None:
        """Drop template docs, ensure the build output dir, write the summary."""
        (project_path / BUILD_OUTPUT_DIR).mkdir(exist_ok=True)

        for doc in sorted(project_path.glob(f"*{DOC_SUFFIX}")):
            if doc.is_file() or doc.is_symlink():
                doc.unlink()

        (project_path / SUMMARY_FILE).write_text(
            self.render_summary(request), encoding="utf-8"
        )

    def render_summary(self, request: ProjectRequest) -> str:
        """Render the generated README for request."""
        pm = request.package_manager
        return self.template_engine.render_template(
            SUMMARY_FILE,
            {
                "project_name": request.name,
                "dev_command": pm.run_script("dev"),
                "build_command": pm.run_script("build"),
            },
        )
