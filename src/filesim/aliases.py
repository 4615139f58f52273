from filesim.core.models import Algorithm, ClusterMode, OutputFormat
from filesim.core.hasher import Sha256AlgorithmImpl, XXHashAlgorithmImpl

ALGORITHM_ALIASES = {
    "levenshtein": Algorithm.LEVENSHTEIN,
    "jaro": Algorithm.JARO,
    "jaro-winkler": Algorithm.JARO,
    "token": Algorithm.TOKEN,
    "substring": Algorithm.SUBSTRING,
    "auto": Algorithm.AUTO,
}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())

ALGORITHM_HELP_TEXT = (
    "Filename similarity algorithm (name mode):\n"
    "  levenshtein : Normalized edit distance\n"
    "  jaro        : Jaro-Winkler, rewards shared prefixes (alias: jaro-winkler)\n"
    "  token       : Shared alphanumeric tokens\n"
    "  substring   : Shorter name contained in the longer one (extension ignored)\n"
    "  auto        : Weighted blend, token-heavy for delimited names. Default: auto\n"
)

MODE_ALIASES = {
    "name": ClusterMode.NAME,
    "content": ClusterMode.CONTENT,
}

MODE_CHOICES = list(MODE_ALIASES.keys())

MODE_HELP_TEXT = (
    "Clustering mode:\n"
    "  name    : Filename similarity with transitive grouping (uses --threshold/--algorithm)\n"
    "  content : Identical hash → same size + similar name → very similar name\n"
    "            (reads every file; inputs must be readable paths). Default: name\n"
)

FORMAT_ALIASES = {
    "text": OutputFormat.TEXT,
    "json": OutputFormat.JSON,
    "csv": OutputFormat.CSV,
}

FORMAT_CHOICES = list(FORMAT_ALIASES.keys())

HASH_ALIASES = {
    "sha256": Sha256AlgorithmImpl,
    "xxhash": XXHashAlgorithmImpl,
}

HASH_CHOICES = list(HASH_ALIASES.keys())

HASH_HELP_TEXT = (
    "Content hash used in content mode:\n"
    "  sha256 : SHA-256 (default)\n"
    "  xxhash : xxHash64, faster on large files\n"
)

EPILOG_TEXT = """
Examples:
  Group names given on the command line
  %(prog)s report_v1.pdf report_v2.pdf image001.jpg readme.txt

  Group every filename found under a directory, 80%% threshold, token matching
  %(prog)s -d ~/Documents -t 80 -a token

  Read names from a list file and write JSON to a file
  %(prog)s -i names.txt -f json -o groups.json

  Find identical and near-identical files by content
  %(prog)s -d ~/Downloads --mode content

  Same as above + move all but one file per group to trash (with confirmation prompt)
  %(prog)s -d ~/Downloads --mode content --keep-one
"""
