"""Shared utility modules for the client tooling."""

from .file_loader import load_items

__all__ = ["load_items"]
