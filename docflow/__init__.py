"""Docflow: PDF/HTML upload service with a chunk-and-embed pipeline."""

__version__ = "0.1.0"
