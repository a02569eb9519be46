"""Shared service utilities: logging, metrics and request IDs."""
