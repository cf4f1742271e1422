"""Test hash utilities."""

import hashlib

from tutor_ai.utils.hasher import (
    build_fingerprint,
    generate_cache_key,
    hash_fingerprint,
    namespace_pattern,
    normalize_text,
)


class TestHashUtilities:
    """Test hash utility functions."""

    def test_should_normalize_text(self):
        """Test case, trim and whitespace normalization."""
        assert normalize_text("  What   is\tAI?\n ") == "what is ai?"

    def test_should_keep_numbers_verbatim_in_fingerprint(self):
        """Test numbers are not normalized."""
        assert build_fingerprint("Fractions", 10, "Math") == "fractions:10:math"

    def test_should_hash_to_sixteen_hex_chars(self):
        """Test digest truncation."""
        digest = hash_fingerprint("fractions:10:math")
        expected = hashlib.sha256(b"fractions:10:math").hexdigest()[:16]
        assert digest == expected
        assert len(digest) == 16

    def test_should_generate_consistent_cache_keys(self):
        """Test keys ignore case and whitespace differences."""
        key1 = generate_cache_key("response", "What is AI?", 10, "Science")
        key2 = generate_cache_key("response", "  what  is ai? ", 10, "science")
        assert key1 == key2

    def test_should_generate_different_keys_for_different_parameters(self):
        """Test every part influences the key."""
        key1 = generate_cache_key("response", "What is AI?", 10, "Science")
        key2 = generate_cache_key("response", "What is AI?", 11, "Science")
        assert key1 != key2

    def test_cache_key_should_have_namespace_prefix(self):
        """Test cache key format."""
        key = generate_cache_key("quiz", "topic")
        namespace, digest = key.split(":")
        assert namespace == "quiz"
        assert len(digest) == 16

    def test_should_build_namespace_pattern(self):
        """Test SCAN pattern."""
        assert namespace_pattern("hint") == "hint:*"
