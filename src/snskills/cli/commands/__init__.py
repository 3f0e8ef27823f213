"""CLI command modules."""

from snskills.cli.commands import skill

__all__ = ["skill"]
