"""File hashing."""

import hashlib
from pathlib import Path

import xxhash

from .fileio import _long_path

ALGORITHMS = ("xxh64", "md5", "sha1", "sha256", "sha512")


def _new_hasher(algorithm: str):
    if algorithm == "xxh64":
        return xxhash.xxh64()
    if algorithm in ALGORITHMS:
        return hashlib.new(algorithm)
    raise ValueError(f"Unsupported hash algorithm: {algorithm}")


def compute_file_hash(file_path: Path, algorithm: str = "xxh64", chunk_size: int = 65536) -> str:
    """Compute the hex digest of a file, xxhash64 by default."""
    hasher = _new_hasher(algorithm)
    with open(_long_path(file_path), 'rb') as f:
        while chunk := f.read(chunk_size):
            hasher.update(chunk)
    return hasher.hexdigest()
