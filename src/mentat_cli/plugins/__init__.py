"""Plugin system for mentat-cli (pluggy-based)."""

from mentat_cli.plugins.hookspecs import hookimpl

__all__ = ["hookimpl"]
