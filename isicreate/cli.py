#!/usr/bin/env python3
"""isicreate CLI - create projects from the ISI.INVOICE template."""

import typer
from rich.console import Console

from isicreate.cli_create_commands import register_create_commands
from isicreate.cli_utility_commands import register_utility_commands

app = typer.Typer(
    name="isicreate",
    help="""isicreate - CLI to create projects from the ISI.INVOICE template

Clones the template, fills in your environment files, wires git to your
remote and installs dependencies.

Quick start:
  isicreate create my-project          # Answer a few questions
  isicreate create my-project -m pnpm  # Pick the package manager up front
""",
    add_completion=False,
)

console = Console()

# Attach modular subcommands
register_create_commands(app, console)
register_utility_commands(app, console)

if __name__ == "__main__":
    app()
