"""Multi-format Markdown export: print, Word, e-book and slides."""

__version__ = "1.0.0"
