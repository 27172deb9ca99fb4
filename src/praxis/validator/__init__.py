"""
Document verification and its result cache.

Architecture::

    hashing.py             content_hash() fingerprint of document + README
    models.py              ValidationResult, Severity, DocumentType
    cache.py               CacheManager (read / write / stats / orphans)
    prompts.py             system prompt and validation question
    document_validator.py  DocumentValidator, parse_response()
    llm/                   LLMProvider protocol, OpenRouter and mock backends
"""

from praxis.validator.cache import CacheManager, CacheMetadata, CacheStats, OrphanedCacheFile
from praxis.validator.document_validator import DocumentValidator, parse_response
from praxis.validator.hashing import content_hash
from praxis.validator.models import DocumentType, Severity, ValidationResult

__all__ = [
    "CacheManager",
    "CacheMetadata",
    "CacheStats",
    "DocumentType",
    "DocumentValidator",
    "OrphanedCacheFile",
    "Severity",
    "ValidationResult",
    "content_hash",
    "parse_response",
]
