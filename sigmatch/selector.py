"""
Best-match selection.

A record with a trailer replaces a best match that has none; otherwise a
longer header replaces the current best, whether or not it has a trailer.
Ties keep the record that came first in the catalog.
"""

from dataclasses import dataclass
from typing import List, Sequence

from .errors import NoMatchFound
from .signatures import SignatureRecord


@dataclass(frozen=True)
class MatchResult:
    """Primary classification plus the other records that matched."""
    primary: SignatureRecord
    secondary: List[SignatureRecord]
    matches: List[SignatureRecord]

    @property
    def ambiguous(self) -> bool:
        return len(self.matches) > 1


def _beats(candidate: SignatureRecord, best: SignatureRecord) -> bool:
    if candidate.has_trailer and not best.has_trailer:
        return True
    return len(candidate.header_tokens()) > len(best.header_tokens())


def select_best(matches: Sequence[SignatureRecord]) -> MatchResult:
    """
    Pick the most specific record from a non-empty match list.

    Raises:
        NoMatchFound: ``matches`` is empty
    """
    if not matches:
        raise NoMatchFound("no known signature matched")

    best = matches[0]
    for candidate in matches[1:]:
        if _beats(candidate, best):
            best = candidate

    secondary = [m for m in matches if m != best]
    return MatchResult(primary=best, secondary=secondary, matches=list(matches))
