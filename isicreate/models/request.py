"""Scaffold request models."""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List


class PackageManager(str, Enum):
    """Package managers a scaffolded project can be bootstrapped with."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"

    @property
    def install_command(self) -> List[str]:
        """Quiet dependency install for this package manager."""
        return list(_COMMANDS[self][0])

    @property
    def dev_command(self) -> List[str]:
        """Command that starts the development server."""
        return list(_COMMANDS[self][1])

    def run_script(self, script: str) -> str:
        """Render the documented way to run a package.json script."""
        return f"{self.value} run {script}"


_COMMANDS = {
    PackageManager.NPM: (("npm", "install", "--loglevel=warn"), ("npm", "run", "dev")),
    PackageManager.YARN: (("yarn", "install", "--silent"), ("yarn", "dev")),
    PackageManager.PNPM: (("pnpm", "install", "--reporter=silent"), ("pnpm", "dev")),
}


@dataclass(frozen=True)
class ProjectRequest:
    """Everything the pipeline needs to materialize one project.

    Created once from the CLI answers and never modified afterwards.
    """
    name: str
    package_manager: PackageManager = PackageManager.NPM
    remote_url: str = ""  # may be empty: remote wiring is then skipped

    # Values written into the generated environment files
    documento_sector: str = ""
    api_url: str = ""
    app_env: str = "local"

    def __post_init__(self):
        """Validate the project name and normalise the package manager."""
        if not self.name or not self.name.strip():
            raise ValueError("Project name must not be empty")
        if self.name in {".", ".."} or "/" in self.name or "\\" in self.name:
            raise ValueError(f"Project name '{self.name}' must be a single directory name")
        if not isinstance(self.package_manager, PackageManager):
            object.__setattr__(self, "package_manager", PackageManager(self.package_manager))

    @property
    def parameters(self) -> Dict[str, str]:
        """Named parameters consumed by the environment-file tables."""
        return {
            "app_env": self.app_env,
            "api_url": self.api_url,
            "documento_sector": self.documento_sector,
        }
