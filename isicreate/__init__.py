"""isicreate - scaffold new ISI.INVOICE projects from the shared template."""

__version__ = "1.0.0"
