"""
Content fingerprinting for the validation cache.

Manifesto:
    A cached verdict is valid exactly as long as neither the document
    nor its README specification has changed. The fingerprint is a
    content-identity check, not a security boundary:
    - **Deterministic:** Same inputs always produce the same fingerprint
    - **Sensitive to both inputs:** Editing the README invalidates every
      document verified against it
    - **Short:** 8 hex characters, matching existing cache files

Examples:
    >>> content_hash("doc", "readme") == content_hash("doc", "readme")
    True
    >>> content_hash("doc A", "readme") != content_hash("doc B", "readme")
    True
    >>> len(content_hash("doc", "readme"))
    8

Tags:
    hashing, cache, fingerprint, praxis
"""

import hashlib

FINGERPRINT_LENGTH = 8


def content_hash(document_content: str, spec_content: str, length: int = FINGERPRINT_LENGTH) -> str:
    """Fingerprint of a document checked against its specification.

    SHA-256 of the concatenated contents, truncated to *length* hex chars.
    """
    digest = hashlib.sha256((document_content + spec_content).encode("utf-8"))
    return digest.hexdigest()[:length]
