"""Import file fingerprinting."""

import hashlib
import logging
from pathlib import Path

from brokerledger.domain.errors import IntegrityError, StructuralError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def file_sha256(path: Path) -> str:
    """Return the lowercase hex SHA-256 digest of the whole file."""
    digest = hashlib.sha256()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as e:
        raise StructuralError(f"Could not read import file: {e}", path=path) from e
    return digest.hexdigest()


def validate_checksum(path: Path, expected: str) -> str:
    """Check that the file at ``path`` hashes to ``expected``.

    Returns:
        The computed digest

    Raises:
        IntegrityError: If the digests differ
    """
    actual = file_sha256(path)
    expected = expected.strip().lower()
    if actual != expected:
        raise IntegrityError(path, expected=expected, actual=actual)
    logger.debug("sha256sum for %s matches manifest", path)
    return actual
