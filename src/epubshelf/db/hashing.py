# ABOUTME: SHA-256 hashing of EPUB bytes for deduplication on import.
# ABOUTME: Hashes the pristine file contents, so rebuilt copies never collide with them.

import hashlib


def compute_hash(data: bytes) -> str:
    """Compute the SHA-256 hash of a byte string.

    Returns:
        Lowercase hex digest string (64 characters).
    """
    return hashlib.sha256(data).hexdigest()
