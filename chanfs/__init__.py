"""Build an in-memory directory tree from an imageboard's catalog and threads."""

__version__ = "0.1.0"
__all__ = ["chan_parse", "tree", "operations"]