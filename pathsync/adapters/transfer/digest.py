"""Content digests used to detect unchanged destinations."""

from pathlib import Path

import blake3

_CHUNK_SIZE = 1024 * 1024


def file_digest(path: Path) -> str:
    """Compute the blake3 digest of a file, streaming it in chunks.

    Args:
        path: File to hash.

    Returns:
        64 lowercase hex chars.

    Raises:
        OSError: If the file can't be read.
    """
    hasher = blake3.blake3()
    with path.open("rb") as f:
        while chunk := f.read(_CHUNK_SIZE):
            hasher.update(chunk)
    return hasher.hexdigest()


def same_content(first: Path, second: Path) -> bool:
    """Check whether two files have identical content."""
    if first.stat().st_size != second.stat().st_size:
        return False
    return file_digest(first) == file_digest(second)
