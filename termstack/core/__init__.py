"""Core primitives — terminal geometry, regions and push-style data sources.

Modules
-------
terminal
    ``TerminalInfo`` protocol, the Rich-backed ``ConsoleTerminal`` and the
    substitutable process-wide delegate.
region
    ``Region`` and its two shared variants (entire terminal, scrolling).
reactive
    ``Observer`` / ``Observable`` protocols and the in-process ``Subject``.
"""
