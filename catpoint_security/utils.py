"""Utility functions for the catpoint security system."""

import os


def ensure_directory_exists(path: str) -> None:
    """Ensure a directory exists, create if it doesn't."""
    if path and not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


def ensure_parent_directory(file_path: str) -> None:
    """Ensure the directory holding ``file_path`` exists."""
    ensure_directory_exists(os.path.dirname(file_path))
