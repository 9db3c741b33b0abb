"""YAML document stream writer."""

from __future__ import annotations

import sys
from typing import TextIO


class DocumentWriter:
    """Writes one ``---`` separated document per emitted pod.

    Flushes after every document so a downstream reader sees each one as
    soon as it is emitted.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self.count = 0

    def write(self, serialized: str) -> None:
        self._stream.write(f"---\n{serialized}\n")
        self._stream.flush()
        self.count += 1
