"""Core of a small text editor: lines, buffers, commands, search and highlighting."""

__version__ = "0.1.0"