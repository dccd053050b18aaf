"""
sigmatch - File Type Identification by Magic Numbers

Identifies the probable format of a file by comparing its leading bytes
against a catalog of known file signatures.
"""

__version__ = "1.0.0"
__author__ = "sigmatch contributors"

from .errors import (
    SigmatchError,
    FileUnreadable,
    CatalogError,
    CatalogUnreadable,
    CatalogMalformed,
    MalformedSignature,
    NoMatchFound,
)
from .signatures import SignatureDB, SignatureRecord
from .matcher import matches, match_all
from .selector import MatchResult, select_best

__all__ = [
    "SigmatchError",
    "FileUnreadable",
    "CatalogError",
    "CatalogUnreadable",
    "CatalogMalformed",
    "MalformedSignature",
    "NoMatchFound",
    "SignatureDB",
    "SignatureRecord",
    "matches",
    "match_all",
    "MatchResult",
    "select_best",
    "identify",
]


def identify(data: bytes, db: SignatureDB, check_trailer: bool = False) -> MatchResult:
    """Match ``data`` against ``db`` and select the best record."""
    return select_best(match_all(data, db, check_trailer))
