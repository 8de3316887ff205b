"""Line sources for ingestion batches.

The index builder consumes any iterable of raw lines. These helpers adapt
the concrete inputs (files on disk, uploaded payloads) into that shape.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path


def iter_file_lines(path: Path) -> Iterator[str]:
    """Yield raw lines from a text file without loading it whole.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    if not path.exists():
        raise FileNotFoundError(f"Price file not found: {path}")

    with path.open("r", encoding="utf-8-sig") as f:
        for line in f:
            yield line.rstrip("\r\n")


def split_payload(payload: bytes) -> list[str]:
    """Decode an uploaded payload into lines.

    A UTF-8 byte-order mark is dropped so it cannot leak into the header.

    Raises:
        UnicodeDecodeError: If the payload is not UTF-8
    """
    return payload.decode("utf-8-sig").splitlines()
