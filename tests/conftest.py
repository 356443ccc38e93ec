"""Shared test fixtures for isicreate tests."""
import json
import shutil
import subprocess
import zipfile
from pathlib import Path

import pytest

from isicreate.core import config as config_module
from isicreate.core.config import ScaffoldConfig, set_config
from isicreate.scaffold.rewriter import LAYOUT_PATH

INDEX_HTML = """<!DOCTYPE html>
<html lang="es">
  <head>
    <meta charset="UTF-8" />
    <meta name="description" content="ISI template" />
    <title>ISI Template</title>
  </head>
  <body><div id="root"></div></body>
</html>
"""

LAYOUT_TSX = """import { Outlet } from 'react-router-dom'

const Layout1 = () => {
  return (
    <div className="layout">
      <Outlet />
    </div>
  )
}

export default Layout1
"""

BASE_MANIFEST = {"name": "isi-template", "version": "0.0.1"}
OVERLAY_MANIFEST = {"name": "isi-template", "version": "2.0.0"}


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep user config files and ISICREATE_* variables out of every test."""
    for var in (
        "ISICREATE_CONFIG",
        "ISICREATE_MOCK",
        "ISICREATE_TEMPLATE_URL",
        "ISICREATE_TEMPLATE_BRANCH",
        "ISICREATE_ARCHIVE_NAME",
        "ISICREATE_GIT_TIMEOUT",
        "ISICREATE_INSTALL_TIMEOUT",
        "ISICREATE_EDITOR",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(config_module, "CONFIG_PATHS", [])
    set_config(ScaffoldConfig())
    yield
    set_config(None)


def write_archive(path: Path, entries) -> Path:
    """Write a zip with (name, content-or-None) entries; None marks a directory."""
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in entries:
            if content is None:
                zf.writestr(zipfile.ZipInfo(name.rstrip("/") + "/"), b"")
            else:
                zf.writestr(name, content)
    return path


@pytest.fixture
def template_dir(tmp_path):
    """A template repository checkout with base files and an overlay archive."""
    root = tmp_path / "remote-template"
    root.mkdir()

    (root / "manifest.json").write_text(json.dumps(BASE_MANIFEST))
    (root / "package.json").write_text(json.dumps({"name": "isi-template", "scripts": {"dev": "vite"}}))
    (root / "index.html").write_text(INDEX_HTML)
    (root / "README.md").write_text("# ISI template\n")
    (root / "CHANGELOG.md").write_text("## 0.0.1\n")
    (root / ".gitignore").write_text("node_modules\n")
    (root / ".env").write_text("APP_ENV=template\n")

    layout = root / LAYOUT_PATH
    layout.parent.mkdir(parents=True)
    layout.write_text(LAYOUT_TSX)

    (root / "node_modules" / "left-pad").mkdir(parents=True)
    (root / "node_modules" / "left-pad" / "index.js").write_text("module.exports = 1\n")
    (root / ".git").mkdir()
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n")

    write_archive(
        root / "isiTemplate.zip",
        [
            ("manifest.json", json.dumps(OVERLAY_MANIFEST)),
            ("public/", None),
            ("public/images/logo.txt", "logo"),
        ],
    )
    return root


class FakeGit:
    """Stands in for subprocess.run when the code under test calls git.

    `git init` creates a .git directory, `git clone` copies the template
    directory, and remotes are tracked in memory.
    """

    def __init__(self, template=None):
        self.template = template
        self.calls = []
        self.remotes = {}
        self.fail_clone = False
        self.fail_init = False
        self.fail_remote_add = False

    def __call__(self, args, cwd=None, capture_output=False, text=False, check=False, timeout=None):
        args = list(args)
        self.calls.append((args, cwd))
        if args[0] != "git":
            return subprocess.CompletedProcess(args, 0, stdout="", stderr="")

        sub = args[1]
        stdout = ""
        if sub == "init":
            if self.fail_init:
                self._fail(args, "fatal: cannot mkdir .git")
            (Path(cwd) / ".git").mkdir(exist_ok=True)
        elif sub == "remote" and len(args) == 2:
            stdout = "\n".join(self.remotes) + ("\n" if self.remotes else "")
        elif sub == "remote" and args[2] == "add":
            if self.fail_remote_add:
                self._fail(args, f"error: remote {args[3]} already exists.")
            self.remotes[args[3]] = args[4]
        elif sub == "remote" and args[2] == "remove":
            self.remotes.pop(args[3], None)
        elif sub == "clone":
            if self.fail_clone or self.template is None:
                self._fail(args, "fatal: unable to access 'https://github.com/': Could not resolve host")
            shutil.copytree(self.template, args[-1])

        return subprocess.CompletedProcess(args, 0, stdout=stdout, stderr="")

    @staticmethod
    def _fail(args, stderr):
        raise subprocess.CalledProcessError(128, args, output="", stderr=stderr)

    def commands(self):
        return [args for args, _ in self.calls]


@pytest.fixture
def fake_git(monkeypatch, template_dir):
    """Route git subprocess calls to a FakeGit backed by template_dir."""
    fake = FakeGit(template_dir)
    monkeypatch.setattr("isicreate.services.git_manager.subprocess.run", fake)
    return fake


@pytest.fixture
def make_archive(tmp_path):
    """Build overlay archives under tmp_path: make_archive(entries, name)."""
    def _make(entries, name="overlay.zip"):
        return write_archive(tmp_path / name, entries)
    return _make
