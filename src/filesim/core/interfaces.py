"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the clustering system.
These protocols enforce structural typing using Python's `typing.Protocol` to ensure
consistency across modules while maintaining flexibility and modularity.

Key Components:
---------------
- HashAlgorithm: Standardized interface for hash functions (e.g., SHA-256, xxHash).
- Hasher: Interface for computing (and memoizing) a file's content signature.
- FileScanner: Interface for scanning directories and returning file metadata.
- ClusterStrategy: Interface for turning a list of files into groups (transitive or tiered).
"""

from typing import Protocol, List, Tuple, Optional, Callable
from filesim.core.models import File, Group, ClusteringParams


# ===== Interfaces =====

class HashObject(Protocol):
    def update(self, data: bytes) -> None: ...
    def digest(self) -> bytes: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-256 or xxHash
    without affecting the rest of the clustering logic.
    """
    name: str

    @staticmethod
    def new() -> HashObject:
        """Returns an incremental hash object for chunked reads."""
        ...


class Hasher(Protocol):
    """Interface for computing a whole-file content digest."""
    def compute_full_hash(self, file: File) -> bytes: ...


class FileScanner(Protocol):
    """
    Interface for scanning file systems and collecting file metadata.
    """
    def scan(
        self,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[File]:
        """
        Scan files from the configured directory.

        Args:
            progress_callback: Optional callback for reporting progress (stage, current, total).

        Returns:
            List of all scanned files.
        """
        ...


class ClusterStrategy(Protocol):
    """
    Interface for a clustering strategy.

    Both strategies share the "anchor + absorb" skeleton: each unprocessed file in
    input order becomes an anchor and absorbs later files it is related to.
    """
    def process(
        self,
        files: List[File],
        params: ClusteringParams,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Tuple[List[Group], List[bool]]:
        """
        Build groups for one clustering pass.

        Args:
            files: Files to cluster, in input order.
            params: Validated clustering parameters.
            progress_callback: Optional callback for progress updates (stage, current, total).

        Returns:
            A tuple containing:
                - Groups in creation order
                - Per-index flags, True where the file was absorbed into an emitted group
        """
        ...

    @property
    def comparisons(self) -> int:
        """Number of pairwise metric evaluations performed by the last pass."""
        ...
