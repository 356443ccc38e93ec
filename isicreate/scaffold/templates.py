"""Template engine for files generated into a scaffolded project."""

from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateEngine:
    """Renders packaged `.j2` templates with `{{key}}` placeholders."""

    def __init__(self, template_dir: Optional[Path] = None):
        self.template_dir = template_dir or DEFAULT_TEMPLATE_DIR

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with given context.

        Raises:
            FileNotFoundError: If the template is not shipped with the package
        """
        template_path = self.template_dir / f"{template_name}.j2"
        content = template_path.read_text(encoding="utf-8")
        for key, value in context.items():
            content = content.replace(f"{{{{{key}}}}}", str(value))
        return content
