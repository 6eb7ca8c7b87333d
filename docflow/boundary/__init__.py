"""Boundary adapters: database and file storage."""
