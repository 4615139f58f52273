"""
Core clustering engine — similarity metrics, content signatures, strategies and scanner.

This package contains the algorithmic foundation of filesim:
- similarity: Levenshtein, Jaro-Winkler, Token, Substring and Auto filename metrics
- HasherImpl + Sha256AlgorithmImpl/XXHashAlgorithmImpl: memoized whole-file digests
- SignatureCollector: parallel signature acquisition with per-file failure isolation
- TransitiveStrategy / TieredStrategy: the two clustering strategies
- ClusteringEngine: runs a pass and assembles the ClusteringResult
- FileScannerImpl: recursive directory traversal
- Models: File, Group, ClusteringResult and configuration objects

All components are pure Python with no UI dependencies.
"""

from .scanner import FileScannerImpl
from .hasher import HasherImpl, Sha256AlgorithmImpl, XXHashAlgorithmImpl
from .signatures import SignatureCollector
from .similarity import calculate_similarity, name_similarity
from .strategies import TransitiveStrategy, TieredStrategy, PairwiseScoreCache
from .clusterer import ClusteringEngine, group_files
from .models import (
    Algorithm, ClusterMode, SimilarityTier, SignatureState, OutputFormat,
    File, ContentSignature, Group, ClusteringParams, ClusteringResult, ClusteringSummary,
    ClusteringStats, SignatureFailure, SignatureError)

__all__ = [
    "FileScannerImpl",
    "HasherImpl",
    "Sha256AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "SignatureCollector",
    "calculate_similarity",
    "name_similarity",
    "TransitiveStrategy",
    "TieredStrategy",
    "PairwiseScoreCache",
    "ClusteringEngine",
    "group_files",
    "Algorithm",
    "ClusterMode",
    "SimilarityTier",
    "SignatureState",
    "OutputFormat",
    "File",
    "ContentSignature",
    "Group",
    "ClusteringParams",
    "ClusteringResult",
    "ClusteringSummary",
    "ClusteringStats",
    "SignatureFailure",
    "SignatureError",
]
