"""
Cache key generation utilities.

Sandi Metz Principles:
- Single Responsibility: Fingerprint generation
- Small functions: Each does one thing
- Pure functions: No side effects
"""

import hashlib
import re

KEY_HASH_LENGTH = 16
KEY_DELIMITER = ":"

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """
    Normalize text for comparison.

    Args:
        text: Raw text

    Returns:
        Lowercased, trimmed text with internal whitespace collapsed
    """
    return _WHITESPACE.sub(" ", text.strip().lower())


def build_fingerprint(*parts: str | int) -> str:
    """
    Join request parameters into a normalized fingerprint.

    Args:
        *parts: Text parameters (normalized) and numbers (kept verbatim)

    Returns:
        Delimited fingerprint
    """
    return KEY_DELIMITER.join(
        normalize_text(part) if isinstance(part, str) else str(part)
        for part in parts
    )


def hash_fingerprint(fingerprint: str) -> str:
    """
    Digest fingerprint into a short hex key.

    Args:
        fingerprint: Normalized fingerprint

    Returns:
        First 16 hex characters of the SHA-256 digest
    """
    digest = hashlib.sha256(fingerprint.encode("utf-8")).hexdigest()
    return digest[:KEY_HASH_LENGTH]


def generate_cache_key(namespace: str, *parts: str | int) -> str:
    """
    Generate namespaced cache key for a request.

    Args:
        namespace: Category tag (e.g. "quiz")
        *parts: Semantically relevant request parameters

    Returns:
        Cache key (namespace:hash)
    """
    return f"{namespace}{KEY_DELIMITER}{hash_fingerprint(build_fingerprint(*parts))}"


def namespace_pattern(namespace: str) -> str:
    """
    Get key pattern matching every key of a namespace.

    Args:
        namespace: Category tag

    Returns:
        Glob pattern for SCAN
    """
    return f"{namespace}{KEY_DELIMITER}*"
