"""Parameterized rewrites of known files in a freshly scaffolded project.

Each RewriteTarget owns one file path and one transformation. Targets that
edit existing files are skipped when the file is absent; the environment
files are generated from scratch every time.
"""
import html
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

from isicreate.core.logger import get_logger
from isicreate.models.request import ProjectRequest
from isicreate.scaffold.env import LOCAL_ENV, PRODUCTION_ENV, EnvTable, render_env

logger = get_logger(__name__)

LAYOUT_PATH = "src/app/base/components/Template/MatxLayout/Layout1/Layout1.tsx"
LAYOUT_MARKER = "<LayoutRestriccion />"

_META_DESCRIPTION = re.compile(r'<meta name="description" content="[^"]*"')
_TITLE = re.compile(r"<title>[^<]*</title>")
_LAYOUT_ANCHOR = re.compile(r"return \(\s*<div")


class RewriteStatus(Enum):
    """What happened to a rewrite target."""
    WRITTEN = "written"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"  # file absent


@dataclass(frozen=True)
class RewriteOutcome:
    """Result of applying one target."""
    path: str
    status: RewriteStatus


class RewriteTarget(ABC):
    """A known file and the transformation applied to it."""

    relative_path: str = ""

    @abstractmethod
    def apply(self, project_path: Path, request: ProjectRequest) -> RewriteStatus:
        raise NotImplementedError


class EnvFileTarget(RewriteTarget):
    """Generates an environment file, discarding any previous content."""

    def __init__(self, relative_path: str, table: EnvTable):
        self.relative_path = relative_path
        self.table = table

    def render(self, request: ProjectRequest) -> str:
        return render_env(self.table, request.parameters)

    def apply(self, project_path: Path, request: ProjectRequest) -> RewriteStatus:
        (project_path / self.relative_path).write_text(self.render(request), encoding="utf-8")
        return RewriteStatus.WRITTEN


class ContentRewriteTarget(RewriteTarget):
    """Edits an existing file in place through transform()."""

    @abstractmethod
    def transform(self, content: str, request: ProjectRequest) -> str:
        raise NotImplementedError

    def apply(self, project_path: Path, request: ProjectRequest) -> RewriteStatus:
        path = project_path / self.relative_path
        if not path.is_file():
            return RewriteStatus.SKIPPED

        content = path.read_text(encoding="utf-8")
        updated = self.transform(content, request)
        if updated == content:
            return RewriteStatus.UNCHANGED

        path.write_text(updated, encoding="utf-8")
        return RewriteStatus.WRITTEN


def rewrite_html_metadata(content: str, project_name: str) -> str:
    """Point the description meta tag and the document title at project_name."""
    safe_name = html.escape(project_name, quote=True)
    content = _META_DESCRIPTION.sub(
        lambda _: f'<meta name="description" content="{safe_name}"', content, count=1
    )
    return _TITLE.sub(lambda _: f"<title>{safe_name}</title>", content, count=1)


def inject_layout_marker(content: str) -> str:
    """Insert the restriction marker inside the layout's root render output.

    Content that already contains the marker is returned unchanged.
    """
    if LAYOUT_MARKER in content:
        return content
    return _LAYOUT_ANCHOR.sub(
        lambda _: f"return (\n{LAYOUT_MARKER}\n<div", content, count=1
    )


class HtmlMetadataTarget(ContentRewriteTarget):
    """index.html: description meta tag and title."""

    relative_path = "index.html"

    def transform(self, content: str, request: ProjectRequest) -> str:
        return rewrite_html_metadata(content, request.name)


class LayoutMarkerTarget(ContentRewriteTarget):
    """Main layout component: restriction marker injection."""

    relative_path = LAYOUT_PATH

    def transform(self, content: str, request: ProjectRequest) -> str:
        return inject_layout_marker(content)


DEFAULT_TARGETS: Sequence[RewriteTarget] = (
    EnvFileTarget(".env", LOCAL_ENV),
    EnvFileTarget(".env.production", PRODUCTION_ENV),
    HtmlMetadataTarget(),
    LayoutMarkerTarget(),
)


class FileRewriter:
    """Applies a fixed sequence of rewrite targets to a project."""

    def __init__(self, targets: Optional[Sequence[RewriteTarget]] = None):
        self.targets = list(targets) if targets is not None else list(DEFAULT_TARGETS)

    def rewrite(self, project_path: Path, request: ProjectRequest) -> List[RewriteOutcome]:
        """Apply every target once, in order.

        Returns:
            One RewriteOutcome per target
        """
        outcomes = []
        for target in self.targets:
            status = target.apply(Path(project_path), request)
            logger.debug(f"Rewrite {target.relative_path}: {status.value}")
            outcomes.append(RewriteOutcome(target.relative_path, status))
        return outcomes
