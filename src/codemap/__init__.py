"""Lexical source indexer producing flat and hierarchical code maps."""

__all__ = ["__version__"]

__version__ = "0.1.0"
