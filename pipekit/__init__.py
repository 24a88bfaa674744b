"""Run command pipelines between files, with here-document input and printf-style formatting."""

__version__ = "0.1.0"