"""
Content fingerprints for byte-exact compliance comparison.

Two contents are compliant only if their SHA-256 digests are equal. There is
no normalization: a single differing byte, including whitespace inside the
text, counts as a mismatch.
"""

import hashlib


def fingerprint(text: str) -> str:
    """
    Compute the SHA-256 fingerprint of text content.

    Args:
        text: Text to hash (encoded as UTF-8)

    Returns:
        64-character lowercase hex digest
    """
    return hashlib.sha256(text.encode('utf-8')).hexdigest()


def fingerprints_match(current: str, expected: str) -> bool:
    """Check whether two texts have the same fingerprint."""
    return fingerprint(current) == fingerprint(expected)
