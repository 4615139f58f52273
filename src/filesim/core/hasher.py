"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements whole-file content hashing using the File class and pluggable hash algorithms.

HasherImpl reads files in fixed-size chunks and memoizes the digest in the File's
ContentSignature, so each file is read at most once per process.
"""

import hashlib
import os
import xxhash
from filesim.core.models import File, SignatureError
from filesim.core.interfaces import Hasher, HashAlgorithm

READ_CHUNK_SIZE = 1024 * 1024  # 1MB


class Sha256AlgorithmImpl(HashAlgorithm):
    name = "sha256"

    @staticmethod
    def new():
        return hashlib.sha256()


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxhash"

    @staticmethod
    def new():
        return xxhash.xxh64()


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Computes and caches the full content digest of a file.
    """

    def __init__(self, algorithm: HashAlgorithm = None):
        self.algorithm = algorithm or Sha256AlgorithmImpl()

    def compute_full_hash(self, file: File) -> bytes:
        """
        Returns the memoized digest, computing it on first use.
        Fills in size and modification time when the File does not carry them.

        Raises:
            SignatureError: if the file cannot be read (also on every later call).
        """
        signature = file.signature
        if signature.is_computed:
            return signature.digest
        if signature.is_failed:
            raise SignatureError(signature.error)

        try:
            digest, size, mtime = self._hash_file(file.path)
        except OSError as e:
            message = f"Failed to read {file.path}: {e}"
            signature.mark_failed(message)
            raise SignatureError(message) from e

        if file.size is None:
            file.size = size
        if file.last_modified is None:
            file.last_modified = mtime

        signature.mark_computed(digest)
        return digest

    def _hash_file(self, path: str):
        hash_obj = self.algorithm.new()
        total = 0
        with open(path, 'rb') as f:
            mtime = int(os.fstat(f.fileno()).st_mtime)
            while True:
                chunk = f.read(READ_CHUNK_SIZE)
                if not chunk:
                    break
                hash_obj.update(chunk)
                total += len(chunk)
        return hash_obj.digest(), total, mtime
