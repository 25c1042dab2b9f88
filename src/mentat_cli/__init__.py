"""mentat-cli — interactive shell for a Mentat store."""

__version__ = "0.1.0"
