"""Recurring personal task list with an auto-reset timer and a random task wheel."""

__version__ = "0.1.0"
