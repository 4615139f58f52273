"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

clusterer.py
Implements the clustering engine that turns files into similar-file groups.
Supports two strategies:
    - name:    transitive closure over filename similarity (threshold-filtered)
    - content: hash → size + name → name tiers, anchor-only matching
"""
from typing import List, Dict, Optional, Callable, Union

from filesim.core.models import (
    File, ClusteringParams, ClusteringResult, ClusteringSummary, ClusterMode, Algorithm
)
from filesim.core.interfaces import ClusterStrategy
from filesim.core.strategies import TransitiveStrategy, TieredStrategy


# =============================
# Main Clustering Engine
# =============================
class ClusteringEngine:
    """
    Runs one clustering pass with the strategy selected by params.mode and
    assembles the result: sorted groups, leftover files and summary counts.
    """

    def __init__(self, strategies: Optional[Dict[ClusterMode, ClusterStrategy]] = None):
        self.strategies: Dict[ClusterMode, ClusterStrategy] = strategies or {
            ClusterMode.NAME: TransitiveStrategy(),
            ClusterMode.CONTENT: TieredStrategy(),
        }
        self.last_comparisons = 0

    def cluster(
            self,
            files: List[File],
            params: ClusteringParams,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> ClusteringResult:
        """
        Cluster files (in input order) according to params.
        Args:
            files: Distinct files; the engine does not de-duplicate
            params: Validated clustering parameters
            progress_callback (Optional[Callable[[str, int, int], None]]): Reports progress per anchor.
        Returns:
            ClusteringResult
        """
        strategy = self.strategies[params.mode]
        groups, absorbed = strategy.process(files, params, progress_callback=progress_callback)
        self.last_comparisons = strategy.comparisons

        leftover = [f for f, taken in zip(files, absorbed) if not taken]

        # Sort by descending similarity; stable, so ties keep creation order
        groups.sort(key=lambda g: -g.similarity)

        summary = ClusteringSummary(
            total_files=len(files),
            groups_found=len(groups),
            ungrouped_files=len(leftover),
            threshold_used=params.threshold_fraction,
        )
        return ClusteringResult(groups=groups, leftover=leftover, summary=summary)

    def cluster_names(
            self,
            names: List[str],
            params: ClusteringParams,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> ClusteringResult:
        """Convenience wrapper for plain name/path strings."""
        return self.cluster([File(path=name) for name in names], params, progress_callback)


def group_files(
        names: List[str],
        threshold: float,
        algorithm: Union[Algorithm, str] = Algorithm.AUTO,
        case_sensitive: bool = False,
        min_group_size: int = 2,
) -> ClusteringResult:
    """
    Filename-only clustering in one call.

    Args:
        names: Distinct file names or paths, in input order
        threshold: Similarity threshold as a percentage (0–100)
    """
    params = ClusteringParams(
        threshold=threshold,
        algorithm=algorithm,
        case_sensitive=case_sensitive,
        min_group_size=min_group_size,
        mode=ClusterMode.NAME,
    )
    return ClusteringEngine().cluster_names(names, params)
