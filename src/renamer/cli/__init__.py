"""Command-line interface for renamer.

- commands: the Typer application (``renamer rename``, ``renamer config``).
- console: ConsoleManager yielding a configured Rich Console.
- renderer: plan, summary and failure output.
"""
