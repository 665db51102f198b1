"""Boundary adapters for external services (vector index, LLM)."""
