"""termstack CLI — Typer-based demo surface for the layout engine.

Provides the ``termstack`` command with subcommands that drive a
progress view and a scrollable log view end to end.

All output uses Rich for terminal display.
"""
