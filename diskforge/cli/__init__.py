"""Diskforge CLI — Typer-based command-line interface.

Provides the ``diskforge`` command with subcommands for materializing a
directory of build output and inspecting settings.

All output uses Rich for formatted terminal display.
"""
