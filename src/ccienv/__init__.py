"""Manage CircleCI project environment variables from the command line."""

__version__ = "0.1.0"
