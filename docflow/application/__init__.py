"""Application layer: services coordinating boundaries and core logic."""
