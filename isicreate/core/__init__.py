"""Runtime plumbing shared by the CLI and the scaffold pipeline."""
