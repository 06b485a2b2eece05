"""Floating Librarian - share a team's book collection from Slack."""

__version__ = "0.1.0"
