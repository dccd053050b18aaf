"""
Utility Functions for sigmatch
"""

import os
from typing import Tuple

from .errors import FileUnreadable


def format_size(size: int) -> str:
    """Format size in human-readable format."""
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024:
            return f"{size:.2f} {unit}" if unit != 'B' else f"{size} {unit}"
        size /= 1024
    return f"{size:.2f} PB"


def validate_source(path: str) -> Tuple[bool, str]:
    """
    Validate the path of the file to inspect.

    Returns:
        Tuple of (is_valid, message)
    """
    if not os.path.exists(path):
        return False, "Path does not exist"

    if os.path.isdir(path):
        return False, "Path is a directory"

    if not os.access(path, os.R_OK):
        return False, "No read permission on file"

    return True, "File"


def read_file(path: str) -> bytes:
    """
    Read a whole file into memory.

    Raises:
        FileUnreadable: the path is missing, not a file, or unreadable
    """
    valid, msg = validate_source(path)
    if not valid:
        raise FileUnreadable(path, msg)

    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise FileUnreadable(path, e.strerror or str(e)) from e


def hex_dump(data: bytes, offset: int = 0, length: int = 256) -> str:
    """
    Create hex dump of data.

    Args:
        data: Bytes to dump
        offset: Starting offset for display
        length: Number of bytes to show

    Returns:
        Formatted hex dump string
    """
    lines = []
    data = data[:length]

    for i in range(0, len(data), 16):
        chunk = data[i:i + 16]
        hex_part = ' '.join(f'{b:02x}' for b in chunk)
        hex_part = hex_part.ljust(48)

        ascii_part = ''.join(
            chr(b) if 32 <= b < 127 else '.'
            for b in chunk
        )

        addr = offset + i
        lines.append(f'{addr:08x}  {hex_part} |{ascii_part}|')

    return '\n'.join(lines)
