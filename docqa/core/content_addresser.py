"""
Content addressing for ingestion deduplication.

Hashes a document locator (not its bytes): two URLs serving identical
documents are treated as different documents.

Dependencies: hashlib
System role: Cache key derivation for the ingestion registry
"""

import hashlib


def hash_locator(locator: str) -> str:
    """
    Compute the content-hash of a document locator.

    Args:
        locator: Document URL or upload locator

    Returns:
        str: 64-character SHA-256 hex digest of the UTF-8 locator
    """
    return hashlib.sha256(locator.encode("utf-8")).hexdigest()


def upload_locator(filename: str, content: bytes) -> str:
    """
    Build a stable locator for an uploaded file.

    Args:
        filename: Original upload filename
        content: Uploaded bytes

    Returns:
        str: Locator of the form upload://<sha256>/<filename>
    """
    digest = hashlib.sha256(content).hexdigest()
    return f"upload://{digest}/{filename}"
