"""Tests for generated-file templates."""
import pytest

from isicreate.models.request import PackageManager, ProjectRequest
from isicreate.scaffold.core import ScaffoldManager
from isicreate.scaffold.templates import TemplateEngine


def test_render_replaces_placeholders(tmp_path):
    (tmp_path / "note.txt.j2").write_text("{{name}} uses {{tool}}; {{missing}} stays\n")

    rendered = TemplateEngine(tmp_path).render_template("note.txt", {"name": "acme", "tool": "pnpm"})

    assert rendered == "acme uses pnpm; {{missing}} stays\n"


def test_missing_template(tmp_path):
    with pytest.raises(FileNotFoundError):
        TemplateEngine(tmp_path).render_template("absent.md", {})


@pytest.mark.parametrize("pm,dev,build", [
    (PackageManager.NPM, "npm run dev", "npm run build"),
    (PackageManager.PNPM, "pnpm run dev", "pnpm run build"),
])
def test_readme_summary(pm, dev, build):
    summary = ScaffoldManager().render_summary(ProjectRequest(name="acme-invoice", package_manager=pm))

    assert summary.startswith("# acme-invoice\n")
    assert dev in summary
    assert build in summary
    assert ".env.production" in summary
    assert "package.json" in summary
    assert "{{" not in summary
