"""Core domain logic: exceptions, progress streaming and the document pipeline."""
