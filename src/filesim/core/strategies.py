"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/strategies.py
Clustering strategies for FileSim's similarity engine.

CLASS HIERARCHY
---------------
PairwiseScoreCache  : Memoizes metric evaluations for one clustering pass
TransitiveStrategy  : Name mode. Seeds a group from an anchor, then closes it
                      transitively over the thresholded similarity relation
TieredStrategy      : Content mode. Each later file is compared with the anchor only,
                      using Identical → Content → Name tiers

STRATEGY CONTRACTS
------------------
Each strategy implements `process()` which:
  • Walks anchors in input order, skipping files already absorbed
  • Returns groups in creation order (ids start at 1) plus per-index "absorbed" flags
  • Reports progress via callback (stage name, processed anchors, total anchors)

The absorbed flags live in a plain list created inside each call; nothing outlives it.
"""

import logging
from dataclasses import dataclass
from typing import List, Dict, Optional, Callable, Tuple

from filesim.core.models import File, Group, ClusteringParams, SimilarityTier
from filesim.core.similarity import calculate_similarity, name_similarity
from filesim.core.interfaces import ClusterStrategy

logger = logging.getLogger(__name__)


class PairwiseScoreCache:
    """
    Memoizes scores by unordered index pair.
    Only valid for symmetric metrics, which all public metrics are.
    """

    def __init__(self, score_func: Callable[[int, int], float]):
        self._score_func = score_func
        self._scores: Dict[Tuple[int, int], float] = {}

    def score(self, i: int, j: int) -> float:
        key = (i, j) if i < j else (j, i)
        cached = self._scores.get(key)
        if cached is None:
            cached = self._score_func(*key)
            self._scores[key] = cached
        return cached

    @property
    def evaluations(self) -> int:
        return len(self._scores)


class TransitiveStrategy(ClusterStrategy):
    """
    Filename-only clustering with transitive closure.

    A group that ends up smaller than min_group_size is discarded without marking its
    members, so they stay available to later anchors and may join a later group.
    """

    STAGE_NAME = "Clustering"

    def __init__(self):
        self._comparisons = 0

    @property
    def comparisons(self) -> int:
        return self._comparisons

    def process(
            self,
            files: List[File],
            params: ClusteringParams,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Tuple[List[Group], List[bool]]:
        names = [f.path for f in files]
        threshold = params.threshold_fraction
        cache = PairwiseScoreCache(
            lambda i, j: calculate_similarity(
                names[i], names[j], params.algorithm, params.case_sensitive
            )
        )

        total = len(files)
        processed = [False] * total
        groups: List[Group] = []

        for i in range(total):
            if progress_callback:
                progress_callback(self.STAGE_NAME, i + 1, total)
            if processed[i]:
                continue

            members, scores = self._build_candidate(i, processed, cache, threshold)

            if len(members) < params.min_group_size:
                continue

            similarity = sum(scores) / len(scores) if scores else 1.0
            group = Group(
                id=len(groups) + 1,
                files=[files[idx] for idx in members],
                similarity=similarity,
            )
            groups.append(group)
            for idx in members:
                processed[idx] = True
            logger.debug(f"Accepted group {group.id}: {len(members)} files, similarity {similarity:.3f}")

        self._comparisons = cache.evaluations
        return groups, processed

    @staticmethod
    def _build_candidate(
            anchor: int,
            processed: List[bool],
            cache: PairwiseScoreCache,
            threshold: float
    ) -> Tuple[List[int], List[float]]:
        """
        Seed a candidate group from the anchor and close it transitively.
        Returns member indices in insertion order and every score that caused a join.
        """
        total = len(processed)
        members = [anchor]
        included = {anchor}
        scores: List[float] = []

        # Seed: later, unprocessed files similar to the anchor
        for j in range(anchor + 1, total):
            if processed[j]:
                continue
            score = cache.score(anchor, j)
            if score >= threshold:
                members.append(j)
                included.add(j)
                scores.append(score)

        # Closure: each pass scans the members known at its start against every
        # remaining index (earlier anchors included) until a pass adds nothing
        added_any = True
        while added_any:
            added_any = False
            for member in list(members):
                for k in range(total):
                    if processed[k] or k in included:
                        continue
                    score = cache.score(member, k)
                    if score >= threshold:
                        members.append(k)
                        included.add(k)
                        scores.append(score)
                        added_any = True

        return members, scores


@dataclass(frozen=True)
class TierMatch:
    tier: SimilarityTier
    score: float


class TieredStrategy(ClusterStrategy):
    """
    Content-aware clustering. Not transitive: later files are compared with the anchor only.

    The group's tier is set by its first match; its similarity is the minimum match score.
    Any anchor with at least one match forms a group; min_group_size does not apply.
    """

    STAGE_NAME = "Tiered clustering"
    CONTENT_NAME_THRESHOLD = 0.8  # same size + name similarity above this → CONTENT
    NAME_THRESHOLD = 0.9  # name similarity above this → NAME

    def __init__(self):
        self._comparisons = 0

    @property
    def comparisons(self) -> int:
        return self._comparisons

    @classmethod
    def compare(cls, first: File, second: File) -> Optional[TierMatch]:
        """
        Evaluate the tiers in priority order; the first one that matches wins.
        Returns None when the pair is unrelated.
        """
        if first.digest is not None and first.digest == second.digest:
            return TierMatch(SimilarityTier.IDENTICAL, 1.0)

        similarity = name_similarity(first.name, second.name)

        if first.size is not None and first.size == second.size \
                and similarity > cls.CONTENT_NAME_THRESHOLD:
            return TierMatch(SimilarityTier.CONTENT, similarity)

        if similarity > cls.NAME_THRESHOLD:
            return TierMatch(SimilarityTier.NAME, similarity)

        return None

    def process(
            self,
            files: List[File],
            params: ClusteringParams,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Tuple[List[Group], List[bool]]:
        total = len(files)
        processed = [False] * total
        groups: List[Group] = []
        comparisons = 0

        for i in range(total):
            if progress_callback:
                progress_callback(self.STAGE_NAME, i + 1, total)
            if processed[i]:
                continue

            members = [i]
            tier: Optional[SimilarityTier] = None
            score = 1.0

            for j in range(i + 1, total):
                if processed[j]:
                    continue
                match = self.compare(files[i], files[j])
                comparisons += 1
                if match is None:
                    continue
                members.append(j)
                processed[j] = True
                if tier is None:
                    tier = match.tier
                score = min(score, match.score)

            if len(members) > 1:
                processed[i] = True
                group = Group(
                    id=len(groups) + 1,
                    files=[files[idx] for idx in members],
                    similarity=score,
                    tier=tier,
                )
                groups.append(group)
                logger.debug(f"Accepted {tier.value} group {group.id}: {len(members)} files")

        self._comparisons = comparisons
        return groups, processed
