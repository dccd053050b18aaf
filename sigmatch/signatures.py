"""
File Signature Catalog for sigmatch

Holds the signature records (magic bytes, optional trailer, extensions and
metadata) that inspected files are compared against, and loads them from a
JSON catalog.
"""

import json
import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional

from .errors import CatalogMalformed, CatalogUnreadable, MalformedSignature

logger = logging.getLogger(__name__)

here = os.path.abspath(os.path.dirname(__file__))

CATALOG_FILENAME = "file_sigs.json"
BUNDLED_CATALOG = os.path.join(here, "data", CATALOG_FILENAME)

_HEX_BYTE = re.compile(r"[0-9A-Fa-f]{2}")


def split_tokens(pattern: Optional[str]) -> List[str]:
    """Split a hex pattern into tokens. An absent pattern has none."""
    if pattern is None:
        return []
    return pattern.split()


def decode_token(token: str, record: "SignatureRecord") -> int:
    """Decode one two-digit hex token, blaming ``record`` if it is invalid."""
    if not _HEX_BYTE.fullmatch(token):
        raise MalformedSignature(record, token)
    return int(token, 16)


@dataclass(frozen=True)
class SignatureRecord:
    """One catalog entry describing a file format."""
    description: str
    category: str
    extension: str
    header: Optional[str] = None
    trailer: Optional[str] = None
    offset: int = 0  # Metadata only, matching always starts at byte 0

    def header_tokens(self) -> List[str]:
        return split_tokens(self.header)

    def trailer_tokens(self) -> List[str]:
        return split_tokens(self.trailer)

    def header_bytes(self) -> bytes:
        return bytes(decode_token(t, self) for t in self.header_tokens())

    def trailer_bytes(self) -> bytes:
        return bytes(decode_token(t, self) for t in self.trailer_tokens())

    @property
    def has_trailer(self) -> bool:
        return self.trailer is not None

    def extensions(self) -> List[str]:
        """Extensions conventionally used by this format, in catalog order."""
        return self.extension.split("|")

    def to_dict(self) -> Dict[str, Any]:
        """Return the record in catalog (JSON) form."""
        return {
            'header': self.header,
            'trailer': self.trailer,
            'offset': self.offset,
            'ext': self.extension,
            'category': self.category,
            'desc': self.description,
        }


def _require_str(entry: dict, key: str, index: int, path: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str):
        raise CatalogMalformed(
            path, f"record #{index}: '{key}' must be a string, got {type(value).__name__}"
        )
    return value


def _optional_str(entry: dict, key: str, index: int, path: str) -> Optional[str]:
    value = entry.get(key)
    if value is not None and not isinstance(value, str):
        raise CatalogMalformed(
            path, f"record #{index}: '{key}' must be a string or null"
        )
    return value


def record_from_entry(entry: Any, index: int, path: str = "<catalog>") -> SignatureRecord:
    """
    Build a record from one decoded catalog entry.

    The entry is validated completely, including every hex token of its
    header and trailer, so a corrupt catalog fails here rather than while
    matching.
    """
    if not isinstance(entry, dict):
        raise CatalogMalformed(path, f"record #{index} is not an object")

    offset = entry.get('offset')
    # bool is an int subclass but never a valid offset
    if not isinstance(offset, int) or isinstance(offset, bool) or offset < 0:
        raise CatalogMalformed(
            path, f"record #{index}: 'offset' must be a non-negative integer"
        )

    record = SignatureRecord(
        description=_require_str(entry, 'desc', index, path),
        category=_require_str(entry, 'category', index, path),
        extension=_require_str(entry, 'ext', index, path),
        header=_optional_str(entry, 'header', index, path),
        trailer=_optional_str(entry, 'trailer', index, path),
        offset=offset,
    )

    try:
        record.header_bytes()
        record.trailer_bytes()
    except MalformedSignature as e:
        raise MalformedSignature(record, e.token, index) from None

    return record


def find_catalog(explicit: Optional[str] = None) -> str:
    """
    Resolve which catalog file to load.

    Order: an explicitly given path, ``file_sigs.json`` in the working
    directory, then the catalog bundled with the package.
    """
    if explicit:
        return explicit

    local = os.path.join(os.getcwd(), CATALOG_FILENAME)
    if os.path.isfile(local):
        logger.debug("Using catalog from working directory: %s", local)
        return local

    return BUNDLED_CATALOG


class SignatureDB:
    """
    Ordered, read-only collection of signature records.

    Catalog order is significant: it decides which record wins a tie
    during best-match selection.
    """

    def __init__(self, records: Optional[Iterable[SignatureRecord]] = None,
                 source: Optional[str] = None):
        self._signatures: List[SignatureRecord] = list(records or [])
        self.source = source

    @classmethod
    def from_records(cls, records: Iterable[SignatureRecord]) -> "SignatureDB":
        return cls(records)

    @classmethod
    def load(cls, path: str) -> "SignatureDB":
        """
        Load a JSON catalog.

        Args:
            path: Path to a JSON array of signature objects

        Raises:
            CatalogUnreadable: the file cannot be opened or read
            CatalogMalformed: the content is not a valid catalog
            MalformedSignature: a header/trailer holds an invalid hex token
        """
        path = str(path)
        try:
            with open(path, 'rb') as f:
                raw = json.load(f)
        except OSError as e:
            raise CatalogUnreadable(path, e.strerror or str(e)) from e
        except ValueError as e:
            raise CatalogMalformed(path, f"invalid JSON: {e}") from e

        if not isinstance(raw, list):
            raise CatalogMalformed(path, "root element must be a list of records")

        records = [record_from_entry(entry, i, path) for i, entry in enumerate(raw)]
        logger.debug("Loaded %d signatures from %s", len(records), path)
        return cls(records, source=path)

    @classmethod
    def default(cls) -> "SignatureDB":
        """Load the catalog bundled with sigmatch."""
        return cls.load(BUNDLED_CATALOG)

    def get_by_category(self, category: str) -> List[SignatureRecord]:
        """Get records by category."""
        return [s for s in self._signatures if s.category == category]

    def categories(self) -> List[str]:
        """Categories in the order they first appear in the catalog."""
        seen: List[str] = []
        for sig in self._signatures:
            if sig.category not in seen:
                seen.append(sig.category)
        return seen

    def __len__(self) -> int:
        return len(self._signatures)

    def __iter__(self) -> Iterator[SignatureRecord]:
        return iter(self._signatures)
