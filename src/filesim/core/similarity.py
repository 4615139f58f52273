"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/similarity.py
Pairwise filename similarity metrics.

Every metric maps two strings to a score in [0, 1], is symmetric and never raises:
- levenshtein: normalized edit distance
- jaro:        Jaro-Winkler
- token:       Jaccard index over alphanumeric tokens
- substring:   containment of the shorter normalized name in the longer one
- auto:        weighted blend of token, jaro and levenshtein

name_similarity() is the normalized-name metric behind content-mode tiers.
"""

from typing import Callable, Dict
from rapidfuzz.distance import JaroWinkler, Levenshtein

from filesim.core.models import Algorithm
from filesim.core.normalizer import normalize_for_substring, normalize_name, token_set

_DELIMITERS = ('_', '-', ' ')


def levenshtein_similarity(s1: str, s2: str) -> float:
    max_len = max(len(s1), len(s2))
    if max_len == 0:
        return 1.0
    return 1.0 - Levenshtein.distance(s1, s2) / max_len


def jaro_winkler_similarity(s1: str, s2: str) -> float:
    if not s1 and not s2:
        return 1.0
    if not s1 or not s2:
        return 0.0
    # Fixed argument order keeps the greedy match count identical both ways
    first, second = sorted((s1, s2))
    return JaroWinkler.similarity(first, second)


def token_similarity(s1: str, s2: str) -> float:
    tokens1 = token_set(s1)
    tokens2 = token_set(s2)

    if not tokens1 and not tokens2:
        return 1.0
    if not tokens1 or not tokens2:
        return 0.0

    return len(tokens1 & tokens2) / len(tokens1 | tokens2)


def substring_similarity(s1: str, s2: str) -> float:
    n1 = normalize_for_substring(s1)
    n2 = normalize_for_substring(s2)

    if not n1 and not n2:
        return 1.0
    if not n1 or not n2:
        return 0.0

    shorter, longer = (n1, n2) if len(n1) <= len(n2) else (n2, n1)
    if shorter in longer:
        return len(shorter) / len(longer)
    return 0.0


def has_delimiters(s1: str, s2: str) -> bool:
    """True if either name looks structured (underscore, hyphen or space)."""
    return any(d in s1 or d in s2 for d in _DELIMITERS)


def auto_similarity(s1: str, s2: str) -> float:
    levenshtein = levenshtein_similarity(s1, s2)
    jaro = jaro_winkler_similarity(s1, s2)
    token = token_similarity(s1, s2)

    if has_delimiters(s1, s2):
        score = token * 0.6 + jaro * 0.3 + levenshtein * 0.1
    else:
        score = jaro * 0.5 + levenshtein * 0.3 + token * 0.2
    return min(1.0, max(0.0, score))


_METRICS: Dict[Algorithm, Callable[[str, str], float]] = {
    Algorithm.LEVENSHTEIN: levenshtein_similarity,
    Algorithm.JARO: jaro_winkler_similarity,
    Algorithm.TOKEN: token_similarity,
    Algorithm.SUBSTRING: substring_similarity,
    Algorithm.AUTO: auto_similarity,
}


def calculate_similarity(
        s1: str,
        s2: str,
        algorithm: Algorithm = Algorithm.AUTO,
        case_sensitive: bool = False
) -> float:
    """
    Similarity of two names under the selected algorithm.
    Both names are lower-cased first unless case_sensitive is set.
    """
    if not case_sensitive:
        s1 = s1.lower()
        s2 = s2.lower()

    if s1 == s2:
        return 1.0

    return _METRICS[algorithm](s1, s2)


def name_similarity(name1: str, name2: str) -> float:
    """
    Levenshtein similarity of lower-cased, alphanumeric-only names.
    Extensions are kept, so "a.txt" and "a.doc" differ.
    """
    n1 = normalize_name(name1)
    n2 = normalize_name(name2)

    if n1 == n2:
        return 1.0
    if not n1 or not n2:
        return 0.0

    return levenshtein_similarity(n1, n2)
