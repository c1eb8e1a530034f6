"""Core cross-cutting utilities: exceptions and HTTP middleware."""
