"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements streaming content fingerprints using pluggable hash algorithms.

Files are read in fixed-size chunks and folded into a seeded xxHash64 state,
so memory use does not depend on file size.
"""

import logging
from typing import BinaryIO

import xxhash
from dirdiff.core.models import SENTINEL_FINGERPRINT
from dirdiff.core.interfaces import Hasher, HashAlgorithm, ByteSink

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    def __init__(self, seed: int = 0):
        self.seed = seed

    def new_sink(self) -> ByteSink:
        return xxhash.xxh64(seed=self.seed)


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Produces 64-bit unsigned fingerprints.
    """

    def __init__(self, algorithm: HashAlgorithm = None, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.algorithm = algorithm or XXHashAlgorithmImpl()
        self.chunk_size = chunk_size

    def hash_stream(self, stream: BinaryIO) -> int:
        """Folds every remaining byte of the stream into a fresh hash state."""
        sink = self.algorithm.new_sink()
        while True:
            chunk = stream.read(self.chunk_size)
            if not chunk:
                break
            sink.update(chunk)
        return sink.intdigest()

    def compute_fingerprint(self, path: str) -> int:
        """
        Fingerprint of the file's full content.
        Files that cannot be opened or read get SENTINEL_FINGERPRINT instead of an exception.
        """
        try:
            with open(path, 'rb') as f:
                return self.hash_stream(f)
        except OSError as e:
            logger.warning(f"Could not read {path}: {e}")
            return SENTINEL_FINGERPRINT
