"""Core domain layer: ingestion, retrieval and answer synthesis."""
