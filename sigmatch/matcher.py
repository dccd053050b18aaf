"""
Signature matching.

A record matches when every byte of its header pattern equals the byte at
the same position at the start of the inspected data.
"""

from typing import Iterable, List

from .signatures import SignatureRecord, decode_token


def matches(buffer: bytes, record: SignatureRecord, check_trailer: bool = False) -> bool:
    """
    Check whether ``record``'s header matches the start of ``buffer``.

    A record without a header matches any buffer, including an empty one.
    The trailer is ignored unless ``check_trailer`` is set, in which case
    the buffer must also end with the trailer bytes.

    Raises:
        MalformedSignature: a token is not a two-digit hex byte
    """
    for i, token in enumerate(record.header_tokens()):
        byte = decode_token(token, record)
        if i >= len(buffer) or buffer[i] != byte:
            return False

    if check_trailer and record.trailer is not None:
        return buffer.endswith(record.trailer_bytes())

    return True


def match_all(buffer: bytes, records: Iterable[SignatureRecord],
              check_trailer: bool = False) -> List[SignatureRecord]:
    """Return every record matching ``buffer``, in catalog order."""
    return [r for r in records if matches(buffer, r, check_trailer)]
