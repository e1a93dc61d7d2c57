"""Terminal manager for image files stored in a GitHub repository folder."""

__version__ = "0.1.0"
