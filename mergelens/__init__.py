"""Structural two-way diff and three-way merge of JSON documents, with conflict resolution."""

__version__ = "0.1.0"
__all__ = ["__version__"]