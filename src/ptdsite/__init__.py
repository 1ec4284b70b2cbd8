"""ptdsite: file-backed content index and Markdown rendering for a small site."""

__version__ = "0.3.0"
