"""
Unified command orchestrator for clustering.
This is the SINGLE source of truth for the workflow — used by the CLI and library callers.
No UI dependencies — pure Python.
"""
import time
from typing import List, Optional, Callable, Tuple

from filesim.core.models import (
    File, ClusteringParams, ClusteringResult, ClusteringStats, ClusterMode
)
from filesim.core.clusterer import ClusteringEngine
from filesim.core.hasher import HasherImpl
from filesim.core.interfaces import HashAlgorithm
from filesim.core.signatures import SignatureCollector


class ClusteringCommand:
    """
    Orchestrates the clustering workflow:
    1. Wrap identifiers as File objects
    2. In content mode, compute content signatures in parallel and drop unreadable files
    3. Run the clustering engine with the strategy selected by params.mode

    Usage:
        params = ClusteringParams(threshold=70, mode=ClusterMode.CONTENT)
        command = ClusteringCommand()
        result, stats = command.execute(
            paths,
            params,
            progress_callback=cli_progress_printer
        )
    """

    def __init__(self, hash_algorithm: HashAlgorithm = None, max_workers: Optional[int] = None):
        self._engine = ClusteringEngine()
        self._collector = SignatureCollector(HasherImpl(hash_algorithm), max_workers=max_workers)
        self._files: List[File] = []

    def execute(
            self,
            identifiers: List[str],
            params: ClusteringParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> Tuple[ClusteringResult, ClusteringStats]:
        """
        Execute clustering with given parameters.

        Args:
            identifiers: Distinct names (name mode) or readable paths (content mode)
            params: Validated clustering parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Tuple of (clustering_result, statistics)
        """
        stats = ClusteringStats()
        total_start_time = time.time()

        files = [File(path=identifier) for identifier in identifiers]
        failures = []

        if params.mode == ClusterMode.CONTENT:
            start_time = time.time()
            files, failures = self._collector.collect(files, progress_callback=progress_callback)
            stats.update_stage("signatures", 0, len(files), time.time() - start_time)

        self._files = files

        start_time = time.time()
        result = self._engine.cluster(files, params, progress_callback=progress_callback)
        result.failures = failures
        stats.comparisons = self._engine.last_comparisons
        stats.update_stage(
            "clustering",
            groups_found=result.summary.groups_found,
            files_processed=result.summary.total_files,
            duration=time.time() - start_time,
        )

        stats.total_time = time.time() - total_start_time
        return result, stats

    def get_files(self) -> List[File]:
        """Get the clustered files after execution."""
        return self._files.copy()  # Return copy to prevent external mutation
