"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models and domain logic for file similarity clustering.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union
import os
from enum import Enum


# =============================
# Enums
# =============================

class Algorithm(Enum):
    """
    Filename similarity algorithm used by the transitive (name) clustering mode.
    """
    LEVENSHTEIN = "levenshtein"
    JARO = "jaro"
    TOKEN = "token"
    SUBSTRING = "substring"
    AUTO = "auto"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            Algorithm.LEVENSHTEIN: "Levenshtein",
            Algorithm.JARO: "Jaro-Winkler",
            Algorithm.TOKEN: "Token",
            Algorithm.SUBSTRING: "Substring",
            Algorithm.AUTO: "Auto",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class ClusterMode(Enum):
    """
    Clustering mode: which strategy turns pairwise scores into groups.
    """
    NAME = "name"
    CONTENT = "content"

    def __repr__(self) -> str:
        return self.value


class SimilarityTier(str, Enum):
    """Which rule matched a pair in content mode (highest priority first)."""
    IDENTICAL = "identical"
    CONTENT = "content"
    NAME = "name"


class SignatureState(Enum):
    PENDING = "pending"
    COMPUTED = "computed"
    FAILED = "failed"


class OutputFormat(Enum):
    TEXT = "text"
    JSON = "json"
    CSV = "csv"


# ======================
#  Exceptions
# ======================

class SignatureError(RuntimeError):
    """Raised when a file's content signature cannot be acquired."""


# ======================
#  Core Data Models
# ======================

@dataclass
class ContentSignature:
    """
    Content fingerprint of a single file.
    Starts PENDING and resolves exactly once to COMPUTED (digest) or FAILED (error).
    """
    state: SignatureState = SignatureState.PENDING
    digest: Optional[bytes] = None
    error: Optional[str] = None

    def mark_computed(self, digest: bytes) -> None:
        if self.state is not SignatureState.PENDING:
            raise ValueError(f"Signature already resolved ({self.state.value})")
        if not isinstance(digest, bytes):
            raise ValueError("Digest must be bytes")
        self.digest = digest
        self.state = SignatureState.COMPUTED

    def mark_failed(self, error: str) -> None:
        if self.state is not SignatureState.PENDING:
            raise ValueError(f"Signature already resolved ({self.state.value})")
        self.error = error
        self.state = SignatureState.FAILED

    @property
    def is_computed(self) -> bool:
        return self.state is SignatureState.COMPUTED

    @property
    def is_failed(self) -> bool:
        return self.state is SignatureState.FAILED


@dataclass
class File:
    """
    A single item to cluster.
    The path is the identity; name-only inputs use the bare filename as the path.
    """
    path: str
    size: Optional[int] = None  # in bytes
    name: Optional[str] = None
    extension: Optional[str] = None
    last_modified: Optional[int] = None  # epoch seconds
    signature: ContentSignature = field(default_factory=ContentSignature)

    def __post_init__(self):
        """Automatically extract basename and extension from path if not provided."""
        if self.name is None:
            self.name = os.path.basename(self.path) or self.path

        if self.extension is None:
            _, ext = os.path.splitext(self.name)
            self.extension = ext.lower()  # ".PDF" → ".pdf"

    @classmethod
    def from_path(cls, path: str) -> "File":
        """Builds a File with size and modification time taken from the file system."""
        stat_result = os.stat(path)
        return cls(
            path=path,
            size=stat_result.st_size,
            last_modified=int(stat_result.st_mtime),
        )

    @property
    def digest(self) -> Optional[bytes]:
        return self.signature.digest

    def __repr__(self):
        return f"<File path={self.path}, size={self.size}>"


@dataclass
class SignatureFailure:
    """An item dropped from clustering because its signature could not be read."""
    path: str
    reason: str


@dataclass(frozen=True)
class Group:
    """
    A cluster of similar files, emitted once per clustering pass and never changed afterwards.
    """
    id: int
    files: List[File]
    similarity: float
    tier: Optional[SimilarityTier] = None

    @property
    def file_count(self) -> int:
        return len(self.files)

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]

    def to_dict(self) -> Dict[str, object]:
        data = {
            "id": self.id,
            "files": self.paths,
            "similarity": self.similarity,
        }
        if self.tier is not None:
            data["tier"] = self.tier.value
        return data

    def __repr__(self):
        return f"<Group id={self.id}, count={len(self.files)}, similarity={self.similarity:.3f}>"


@dataclass
class ClusteringSummary:
    total_files: int
    groups_found: int
    ungrouped_files: int
    threshold_used: float

    def to_dict(self) -> Dict[str, Union[int, float]]:
        return {
            "total_files": self.total_files,
            "groups_found": self.groups_found,
            "ungrouped_files": self.ungrouped_files,
            "threshold_used": self.threshold_used,
        }


@dataclass
class ClusteringResult:
    """
    Output of a clustering pass.
    Every clustered file is in exactly one group or in the leftover list.
    Files whose signature failed are listed in `failures` only.
    """
    groups: List[Group]
    leftover: List[File]
    summary: ClusteringSummary
    failures: List[SignatureFailure] = field(default_factory=list)

    @property
    def ungrouped(self) -> List[str]:
        return [f.path for f in self.leftover]

    def to_dict(self) -> Dict[str, object]:
        return {
            "groups": [g.to_dict() for g in self.groups],
            "ungrouped": self.ungrouped,
            "summary": self.summary.to_dict(),
        }


class ClusteringStats:
    """
    Statistics collected while a clustering command runs.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.comparisons: int = 0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

    def print_summary(self) -> str:
        labels = {
            "signatures": "🔍 Content Signatures",
            "clustering": "📁 Clustering",
        }

        lines = [
            "📊 Clustering Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s",
            f"Pairwise Comparisons: {self.comparisons}\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage.lower(), stage.title())
            lines.append(f"{label}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        return "\n".join(lines)


"""
DTO for clustering parameters with built-in validation.
Interface-agnostic — used by both the CLI and library callers.
"""

@dataclass
class ClusteringParams:
    """Parameters for a clustering operation with validation."""
    threshold: float = 70  # percentage, 0–100
    algorithm: Algorithm = Algorithm.AUTO
    case_sensitive: bool = False
    min_group_size: int = 2
    mode: ClusterMode = ClusterMode.NAME

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if isinstance(self.algorithm, str):
            try:
                self.algorithm = Algorithm(self.algorithm.strip().lower())
            except ValueError:
                raise ValueError(f"Unknown algorithm: '{self.algorithm}'")

        if isinstance(self.mode, str):
            try:
                self.mode = ClusterMode(self.mode.strip().lower())
            except ValueError:
                raise ValueError(f"Unknown clustering mode: '{self.mode}'")

        if self.threshold < 0 or self.threshold > 100:
            raise ValueError(f"Threshold must be between 0 and 100, got: {self.threshold}")

        if self.min_group_size < 2:
            raise ValueError(f"Minimum group size must be at least 2, got: {self.min_group_size}")

    @property
    def threshold_fraction(self) -> float:
        """Threshold as a similarity score in [0, 1]."""
        return self.threshold / 100.0
