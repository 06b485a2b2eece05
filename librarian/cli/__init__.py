"""CLI package for the Floating Librarian"""
from .main import cli

__all__ = ['cli']
