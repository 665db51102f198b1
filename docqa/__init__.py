"""Document Q&A service: retrieval-augmented answers over PDF and DOCX documents."""

__version__ = "0.1.0"
