"""isicreate runtime configuration and settings."""
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

DEFAULT_TEMPLATE_URL = "https://github.com/integrate-bolivia/isi-template.git"

# Default config search paths (ordered by proximity to current run)
CONFIG_PATHS = [
    "./isicreate.yml",
    str(Path.home() / ".config" / "isicreate" / "isicreate.yml"),
]


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or is invalid."""
    pass


@dataclass(frozen=True)
class ScaffoldConfig:
    """Runtime configuration for scaffolding runs.

    Attributes:
        template_url: Git URL of the project template
        template_branch: Branch cloned from the template repository
        archive_name: Overlay archive looked up at the template root
        excluded_paths: Template paths never copied into the new project
        git_timeout: Timeout in seconds for any single git command (default: 300)
        install_timeout: Timeout in seconds for the dependency install (default: 900)
        editor_command: Command used to open the new project (default: code)
    """

    template_url: str = DEFAULT_TEMPLATE_URL
    template_branch: str = "main"
    archive_name: str = "isiTemplate.zip"
    excluded_paths: Tuple[str, ...] = ("node_modules", ".git")

    git_timeout: int = 300  # clones of the template can be slow
    install_timeout: int = 900  # 15 minutes for a cold dependency install

    editor_command: str = "code"

    @classmethod
    def from_env(cls, base: Optional["ScaffoldConfig"] = None) -> "ScaffoldConfig":
        """Create config from environment variables.

        Environment variables:
            ISICREATE_TEMPLATE_URL: Template repository URL
            ISICREATE_TEMPLATE_BRANCH: Template branch
            ISICREATE_ARCHIVE_NAME: Overlay archive file name
            ISICREATE_GIT_TIMEOUT: Git command timeout in seconds
            ISICREATE_INSTALL_TIMEOUT: Dependency install timeout in seconds
            ISICREATE_EDITOR: Editor command

        Args:
            base: Config whose values are used when a variable is unset
                (defaults to the built-in defaults)

        Returns:
            ScaffoldConfig instance with values from environment or base
        """
        base = base or cls()
        try:
            return replace(
                base,
                template_url=os.getenv("ISICREATE_TEMPLATE_URL", base.template_url),
                template_branch=os.getenv("ISICREATE_TEMPLATE_BRANCH", base.template_branch),
                archive_name=os.getenv("ISICREATE_ARCHIVE_NAME", base.archive_name),
                git_timeout=int(os.getenv("ISICREATE_GIT_TIMEOUT", base.git_timeout)),
                install_timeout=int(
                    os.getenv("ISICREATE_INSTALL_TIMEOUT", base.install_timeout)
                ),
                editor_command=os.getenv("ISICREATE_EDITOR", base.editor_command),
            )
        except ValueError as exc:
            raise ConfigError(f"Invalid timeout in environment: {exc}") from exc

    @classmethod
    def from_file(cls, path: Path) -> "ScaffoldConfig":
        """Load configuration from a YAML file.

        Example file::

            template:
              url: https://github.com/acme/isi-template.git
              branch: develop
              archive: isiTemplate.zip
              exclude: [node_modules, .git, .turbo]
            timeouts:
              git: 120
              install: 600
            editor: code

        Raises:
            ConfigError: If the file is missing, unparsable or has wrong types
        """
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

        # Empty file means defaults
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise ConfigError(f"{path}: top level must be a mapping")

        return cls(**_parse_config(raw, path))


def _section(raw: Dict[str, Any], key: str, path: Path) -> Dict[str, Any]:
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"{path}: '{key}' must be a mapping")
    return value


def _parse_config(raw: Dict[str, Any], path: Path) -> Dict[str, Any]:
    """Translate the nested YAML layout into ScaffoldConfig keyword arguments."""
    kwargs: Dict[str, Any] = {}

    template = _section(raw, "template", path)
    for yaml_key, attr in (("url", "template_url"), ("branch", "template_branch"),
                           ("archive", "archive_name")):
        if yaml_key in template:
            if not isinstance(template[yaml_key], str) or not template[yaml_key]:
                raise ConfigError(f"{path}: template.{yaml_key} must be a non-empty string")
            kwargs[attr] = template[yaml_key]

    if "exclude" in template:
        exclude = template["exclude"]
        if not isinstance(exclude, list) or not all(isinstance(e, str) for e in exclude):
            raise ConfigError(f"{path}: template.exclude must be a list of paths")
        kwargs["excluded_paths"] = tuple(exclude)

    timeouts = _section(raw, "timeouts", path)
    for yaml_key, attr in (("git", "git_timeout"), ("install", "install_timeout")):
        if yaml_key in timeouts:
            value = timeouts[yaml_key]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ConfigError(f"{path}: timeouts.{yaml_key} must be a positive integer")
            kwargs[attr] = value

    if "editor" in raw:
        if not isinstance(raw["editor"], str) or not raw["editor"]:
            raise ConfigError(f"{path}: editor must be a non-empty string")
        kwargs["editor_command"] = raw["editor"]

    return kwargs


def find_config(config_path: Optional[str] = None) -> Optional[Path]:
    """Locate the active isicreate configuration file.

    Returns:
        Path of the file to load, or None when no configuration file exists
    """
    if config_path:
        return Path(config_path)

    if env_config := os.environ.get("ISICREATE_CONFIG"):
        return Path(env_config)

    for path in CONFIG_PATHS:
        if Path(path).exists():
            return Path(path)

    return None


def load_config(config_path: Optional[str] = None) -> ScaffoldConfig:
    """Resolve configuration: defaults, then YAML file, then environment."""
    path = find_config(config_path)
    base = ScaffoldConfig.from_file(path) if path else ScaffoldConfig()
    return ScaffoldConfig.from_env(base)


# Global config instance (can be overridden)
_config: Optional[ScaffoldConfig] = None


def get_config() -> ScaffoldConfig:
    """Get the global isicreate configuration.

    Returns:
        ScaffoldConfig instance (resolved from file and environment if not set)
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Optional[ScaffoldConfig]):
    """Set the global isicreate configuration.

    Args:
        config: ScaffoldConfig instance to use globally (None resets it)
    """
    global _config
    _config = config
