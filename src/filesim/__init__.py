"""
FileSim — groups files by filename similarity or by content.

Core features:
- Five filename metrics: Levenshtein, Jaro-Winkler, Token, Substring and a weighted Auto blend
- Transitive name clustering and tiered content clustering (identical → content → name)
- Text, JSON and CSV reports
- Optional safe cleanup of content duplicates to the system trash (via send2trash)
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("filesim")
except Exception:
    __version__ = "0.1.0"

# Public API: only what users should import directly
from filesim.commands import ClusteringCommand
from filesim.core import (
    Algorithm, ClusterMode, ClusteringParams, ClusteringResult, File, Group,
    ClusteringEngine, calculate_similarity, group_files)
from filesim.utils.convert_utils import ConvertUtils
from filesim.services import FileService, GroupService, InputService, ReportService

__all__ = [
    "ClusteringCommand",
    "Algorithm",
    "ClusterMode",
    "ClusteringParams",
    "ClusteringResult",
    "File",
    "Group",
    "ClusteringEngine",
    "calculate_similarity",
    "group_files",
    "ConvertUtils",
    "FileService",
    "GroupService",
    "InputService",
    "ReportService",
    "__version__",
]
