"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Full-content file hashing with pluggable hash algorithms, and detection key
construction for each HashMode.
"""

import hashlib
import xxhash

from clup.core.errors import HashingError
from clup.core.interfaces import Hasher, HashAlgorithm
from clup.core.models import File, HashMode


# Use the same way to implement and use any other hashing algorithm
class MD5AlgorithmImpl(HashAlgorithm):
    name = "md5"

    def new(self):
        return hashlib.md5()


class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxh64"

    def new(self):
        return xxhash.xxh64()


HASH_ALGORITHMS = {
    MD5AlgorithmImpl.name: MD5AlgorithmImpl,
    XXHashAlgorithmImpl.name: XXHashAlgorithmImpl,
}


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Each file is opened once and streamed through the digest in fixed-size blocks.
    """

    BLOCK_SIZE = 1024 * 1024

    def __init__(self, algorithm: HashAlgorithm = None):
        self.algorithm = algorithm or MD5AlgorithmImpl()

    def compute_full_hash(self, file: File) -> str:
        """
        Returns the hex digest of the whole file.
        Raises HashingError if the file cannot be read.
        """
        digest = self.algorithm.new()
        try:
            with open(file.path, 'rb') as f:
                for block in iter(lambda: f.read(self.BLOCK_SIZE), b''):
                    digest.update(block)
        except OSError as e:
            raise HashingError(file.path, e.strerror or str(e)) from e
        return digest.hexdigest()


def build_detection_key(file: File, digest: str, mode: HashMode) -> str:
    """Combines the content digest with the attributes selected by the hash mode."""
    if mode == HashMode.CONTENT_AND_EXTENSION:
        return f"{digest}{file.extension}"
    if mode == HashMode.CONTENT_AND_FILENAME:
        return f"{digest}|{file.name}"
    return digest
