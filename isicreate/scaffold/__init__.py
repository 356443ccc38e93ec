"""Project scaffolding pipeline.

Turns a ProjectRequest into a ready-to-install project directory built from
the remote ISI.INVOICE template.
"""

from .core import ScaffoldManager, ScaffoldResult, Stage
from .rewriter import FileRewriter
from .templates import TemplateEngine

__all__ = [
    "ScaffoldManager",
    "ScaffoldResult",
    "Stage",
    "FileRewriter",
    "TemplateEngine",
]
