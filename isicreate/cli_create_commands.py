"""Project creation command - prompts, scaffold pipeline, package-manager handoff."""
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from isicreate.core.config import ConfigError, load_config, set_config
from isicreate.models.request import PackageManager, ProjectRequest
from isicreate.scaffold import ScaffoldManager
from isicreate.scaffold.errors import InstallError, ScaffoldError
from isicreate.services.package_manager import PackageManagerRunner

# Module-level console instance (will be set by register function)
console: Console = Console()

BANNER = r"""
 ___ ____ ___   ___ _   ___     _____ ___ ____ _____
|_ _/ ___|_ _| |_ _| \ | \ \   / / _ \_ _/ ___| ____|
 | |\___ \| |   | ||  \| |\ \ / / | | | | |   |  _|
 | | ___) | |   | || |\  | \ V /| |_| | | |___| |___
|___|____/___| |___|_| \_|  \_/  \___/___\____|_____|
"""


def show_banner() -> None:
    """Print the ISI INVOICE banner."""
    console.print(f"[blue]{BANNER}[/blue]", highlight=False)


def _prompt_package_manager() -> PackageManager:
    choices = ", ".join(pm.value for pm in PackageManager)
    while True:
        answer = typer.prompt(
            f"Which package manager do you want to use? ({choices})",
            default=PackageManager.NPM.value,
        )
        try:
            return PackageManager(answer.strip().lower())
        except ValueError:
            console.print(f"[red]Choose one of: {choices}[/red]")


def _ask(value: Optional[str], message: str, default: str = "") -> str:
    """Return value when given on the command line, otherwise prompt for it."""
    if value is not None:
        return value
    return typer.prompt(message, default=default, show_default=bool(default))


def create(
    project_name: str = typer.Argument(..., help="Name of the project directory to create"),
    package_manager: Optional[PackageManager] = typer.Option(
        None, "--package-manager", "-m", case_sensitive=False,
        help="Package manager used to install and run the project"),
    repo: Optional[str] = typer.Option(None, "--repo", help="Remote repository URL for 'origin'"),
    sector: Optional[str] = typer.Option(None, "--sector", help="Sector document (ISI_DOCUMENTO_SECTOR)"),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="API URL (ISI_API_URL)"),
    app_env: Optional[str] = typer.Option(None, "--env", help="Application environment (APP_ENV)"),
    directory: Path = typer.Option(Path("."), "--dir", "-d", help="Directory the project is created in"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Config file path"),
    skip_install: bool = typer.Option(False, "--skip-install", help="Do not install dependencies"),
    editor: bool = typer.Option(True, "--editor/--no-editor", help="Open the project in the editor"),
    dev: bool = typer.Option(True, "--dev/--no-dev", help="Start the development server"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Path to log file"),
):
    """Create a new project from the ISI.INVOICE template.

    Options that are not given on the command line are asked interactively.

    Examples:
        isicreate create acme-invoice
        isicreate create acme-invoice -m pnpm --repo git@github.com:acme/invoice.git
    """
    from isicreate.cli_support import (
        handle_cli_error,
        is_mock,
        print_error,
        print_info,
        print_success,
        print_warning,
        setup_file_logging,
    )

    if verbose or log_file:
        setup_file_logging(log_file=log_file, verbose=verbose)

    show_banner()

    try:
        settings = load_config(config)
    except ConfigError as exc:
        handle_cli_error(exc, console, verbose)
    set_config(settings)

    if package_manager is None:
        package_manager = _prompt_package_manager()
    try:
        request = ProjectRequest(
            name=project_name,
            package_manager=package_manager,
            remote_url=_ask(repo, "Remote repository URL"),
            documento_sector=_ask(sector, "Sector document (ISI_DOCUMENTO_SECTOR)"),
            api_url=_ask(api_url, "API URL (ISI_API_URL)"),
            app_env=_ask(app_env, "Application environment (APP_ENV)", default="local"),
        )
    except ValueError as exc:
        handle_cli_error(exc, console, verbose)

    mock = is_mock()
    manager = ScaffoldManager(config=settings, mock=mock)
    try:
        result = manager.scaffold_project(request, output_dir=directory)
    except ScaffoldError as exc:
        handle_cli_error(exc, console, verbose)

    for warning in result.warnings:
        print_warning(console, warning)
    print_success(console, f"Project {request.name} created in {result.project_path}")

    runner = PackageManagerRunner(
        mock=mock,
        install_timeout=settings.install_timeout,
        editor_command=settings.editor_command,
    )

    if skip_install:
        print_info(console, f"Next: cd {request.name} && "
                            f"{' '.join(package_manager.install_command)}")
        return

    try:
        with console.status("[cyan]Installing dependencies...[/cyan]", spinner="dots"):
            runner.install(result.project_path, package_manager)
    except InstallError as exc:
        print_error(console, "Error while installing dependencies.")
        if exc.stderr:
            console.print(exc.stderr, markup=False)
        else:
            console.print(str(exc), markup=False)
        raise typer.Exit(1)
    print_success(console, "Dependencies installed")

    if editor:
        console.print("[green]📂 Opening the project folder...[/green]")
        if not runner.open_editor(result.project_path):
            print_warning(console, f"Could not open the editor ({settings.editor_command})")

    if dev:
        console.print("[green]🚀 Starting the development server...[/green]")
        exit_code = runner.run_dev_server(result.project_path, package_manager)
        if exit_code != 0:
            raise typer.Exit(exit_code)


def register_create_commands(
    app: typer.Typer,
    shared_console: Console,
):
    """Register the create command with the main Typer app.

    Args:
        app: Main Typer application
        shared_console: Shared Rich console instance
    """
    global console
    console = shared_console

    app.command()(create)
