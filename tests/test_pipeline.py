"""End-to-end tests for the scaffold pipeline with git faked out."""
import json

import pytest

from isicreate.models.request import PackageManager, ProjectRequest
from isicreate.scaffold.core import ScaffoldManager, Stage
from isicreate.scaffold.errors import DestinationExistsError, TemplateFetchError
from isicreate.scaffold.rewriter import LAYOUT_MARKER, LAYOUT_PATH

URL = "https://example.com/acme.git"


@pytest.fixture
def acme_request():
    return ProjectRequest(
        name="acme-invoice",
        package_manager=PackageManager.YARN,
        remote_url=URL,
        documento_sector="1",
        api_url="https://api.example.com",
        app_env="local",
    )


class TestScaffoldProject:
    """Test the precondition -> vcs -> acquisition -> rewrite -> cleanup run."""

    def test_creates_project(self, tmp_path, fake_git, acme_request):
        workdir = tmp_path / "work"
        workdir.mkdir()

        result = ScaffoldManager().scaffold_project(acme_request, output_dir=workdir)

        project = workdir / "acme-invoice"
        assert result.project_path == project
        assert result.completed_stages == list(Stage)
        assert result.warnings == []

        # vcs
        assert (project / ".git").is_dir()
        assert fake_git.remotes == {"origin": URL}

        # acquisition: overlay wins, excluded dirs never copied
        assert json.loads((project / "manifest.json").read_text())["version"] == "2.0.0"
        assert (project / "public" / "images" / "logo.txt").exists()
        assert not (project / "node_modules").exists()

        # rewrite
        env_lines = (project / ".env").read_text().splitlines()
        assert "APP_ENV=local" in env_lines
        assert "ISI_API_URL=https://api.example.com" in env_lines
        assert "ISI_DOCUMENTO_SECTOR=1" in env_lines
        assert "APP_ENV=template" not in env_lines
        assert "APP_ENV=production" in (project / ".env.production").read_text()
        assert "<title>acme-invoice</title>" in (project / "index.html").read_text()
        assert LAYOUT_MARKER in (project / LAYOUT_PATH).read_text()

        # cleanup
        assert sorted(p.name for p in project.glob("*.md")) == ["README.md"]
        readme = (project / "README.md").read_text()
        assert "# acme-invoice" in readme
        assert "yarn run dev" in readme
        assert (project / "dist-zip").is_dir()

    def test_git_steps_in_order(self, tmp_path, fake_git, acme_request):
        ScaffoldManager().scaffold_project(acme_request, output_dir=tmp_path)

        subcommands = [cmd[1] for cmd in fake_git.commands()]
        assert subcommands[:4] == ["init", "remote", "remote", "clone"]
        project_cwds = [cwd for _, cwd in fake_git.calls[:3]]
        assert project_cwds == [str(tmp_path / "acme-invoice")] * 3

    def test_existing_destination_aborts(self, tmp_path, fake_git, acme_request):
        existing = tmp_path / "acme-invoice"
        existing.mkdir()
        (existing / "notes.txt").write_text("mine")

        with pytest.raises(DestinationExistsError) as exc_info:
            ScaffoldManager().scaffold_project(acme_request, output_dir=tmp_path)

        assert "already exists" in str(exc_info.value)
        assert exc_info.value.stage == "precondition"
        assert fake_git.calls == []
        assert [p.name for p in existing.iterdir()] == ["notes.txt"]

    def test_clone_failure_stops_after_vcs(self, tmp_path, fake_git, acme_request):
        fake_git.fail_clone = True

        with pytest.raises(TemplateFetchError):
            ScaffoldManager().scaffold_project(acme_request, output_dir=tmp_path)

        project = tmp_path / "acme-invoice"
        assert [p.name for p in project.iterdir()] == [".git"]
        assert fake_git.remotes == {"origin": URL}

    def test_remote_failure_warns_and_continues(self, tmp_path, fake_git, acme_request):
        fake_git.fail_remote_add = True

        result = ScaffoldManager().scaffold_project(acme_request, output_dir=tmp_path)

        assert result.completed_stages == list(Stage)
        assert len(result.warnings) == 1
        assert result.warnings[0].startswith("Could not add the remote repository.")
        assert (tmp_path / "acme-invoice" / ".env").exists()

    def test_existing_origin_replaced(self, tmp_path, fake_git, acme_request):
        fake_git.remotes["origin"] = "https://old.example.com/x.git"

        ScaffoldManager().scaffold_project(acme_request, output_dir=tmp_path)

        assert fake_git.remotes == {"origin": URL}

    def test_missing_archive_warns(self, tmp_path, fake_git, template_dir, acme_request):
        (template_dir / "isiTemplate.zip").unlink()

        result = ScaffoldManager().scaffold_project(acme_request, output_dir=tmp_path)

        assert result.completed_stages == list(Stage)
        assert any("isiTemplate.zip not found" in w for w in result.warnings)
        project = tmp_path / "acme-invoice"
        assert json.loads((project / "manifest.json").read_text())["version"] == "0.0.1"

    def test_mock_mode_runs_no_git(self, tmp_path, monkeypatch, acme_request):
        def fail(*args, **kwargs):
            raise AssertionError("subprocess.run called in mock mode")

        monkeypatch.setattr("isicreate.services.git_manager.subprocess.run", fail)

        result = ScaffoldManager(mock=True).scaffold_project(acme_request, output_dir=tmp_path)

        project = tmp_path / "acme-invoice"
        assert result.completed_stages == list(Stage)
        assert (project / ".env").exists()
        assert (project / "README.md").exists()
        assert any("isiTemplate.zip not found" in w for w in result.warnings)
