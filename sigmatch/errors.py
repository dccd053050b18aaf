"""
Exception types for sigmatch.

Every failure the tool can report derives from SigmatchError, so the CLI
can turn any of them into a single diagnostic line.
"""

from typing import Optional


class SigmatchError(Exception):
    """Base class for all sigmatch errors."""


class FileUnreadable(SigmatchError):
    """The file under inspection does not exist or cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


class CatalogError(SigmatchError):
    """The signature catalog cannot be used."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Signature catalog {path}: {reason}")


class CatalogUnreadable(CatalogError):
    """The catalog file is missing or cannot be read."""


class CatalogMalformed(CatalogError):
    """The catalog file is not a valid list of signature records."""


class MalformedSignature(SigmatchError):
    """A header or trailer token is not a two-digit hex byte."""

    def __init__(self, record, token: str, index: Optional[int] = None):
        self.record = record
        self.token = token
        self.index = index
        where = f"record #{index} " if index is not None else "record "
        name = getattr(record, "description", None) or "<unnamed>"
        super().__init__(
            f"{where}'{name}' has an invalid hex byte {token!r}"
        )


class NoMatchFound(SigmatchError):
    """No catalog record matched the inspected data."""
