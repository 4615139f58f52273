"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/normalizer.py
Filename normalization helpers shared by the similarity metrics.
"""

import re
from functools import lru_cache
from typing import FrozenSet, Tuple

# Pre-compiled regex patterns (performance optimization)
_PATTERN_TOKENS = re.compile(r'[^\W_]+')
_PATTERN_NON_ALNUM = re.compile(r'[\W_]+')


@lru_cache(maxsize=8192)
def tokenize(name: str) -> Tuple[str, ...]:
    """
    Split a name into maximal runs of alphanumeric characters.
    Every other character is a separator and is discarded.

    Examples:
        "file_name.txt" → ("file", "name", "txt")
        "report-v1"     → ("report", "v1")
    """
    return tuple(_PATTERN_TOKENS.findall(name))


@lru_cache(maxsize=8192)
def token_set(name: str) -> FrozenSet[str]:
    """Distinct tokens of a name."""
    return frozenset(tokenize(name))


def strip_extension(name: str) -> str:
    """Drop everything from the last dot onward ("a.tar.gz" → "a.tar")."""
    dot = name.rfind('.')
    if dot == -1:
        return name
    return name[:dot]


@lru_cache(maxsize=8192)
def normalize_name(name: str) -> str:
    """
    Lower-case a name and keep only its alphanumeric characters.
    The extension is kept: "Report-Final.pdf" → "reportfinalpdf".
    """
    return _PATTERN_NON_ALNUM.sub('', name.lower())


@lru_cache(maxsize=8192)
def normalize_for_substring(name: str) -> str:
    """
    Normalization used by substring containment: strip the extension,
    then keep lower-cased alphanumerics ("report_final.pdf" → "reportfinal").
    """
    return normalize_name(strip_extension(name))
