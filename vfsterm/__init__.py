"""A line-oriented terminal over an in-memory folder tree of reference-counted, disk-backed files."""

__version__ = "0.1.0"
__all__ = ["errors", "refcount", "filemanager", "folder", "terminal"]