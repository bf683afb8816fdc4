"""Command-line interface for markdown workflows."""

from markdown_workflow.cli.main import main

__all__ = ["main"]
