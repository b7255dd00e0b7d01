"""Reassemble newline-delimited records from arbitrarily split network reads."""

from __future__ import annotations

import codecs
import logging


logger = logging.getLogger(__name__)

RECORD_DELIMITER = "\n"


class ChunkBuffer:
    """Accumulate raw bytes and release only complete logical records.

    One pending fragment is kept between reads. Bytes go through an
    incremental UTF-8 decoder first, so a multi-byte character cut in half by
    the network is held back rather than mangled.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._fragment = ""
        self.discarded = ""

    @property
    def pending(self) -> str:
        """The incomplete record carried over to the next read."""
        return self._fragment

    def feed(self, data: bytes) -> list[str]:
        """Append ``data`` and return every record it completed, in order."""
        self._fragment += self._decoder.decode(data)
        if RECORD_DELIMITER not in self._fragment:
            return []
        *records, self._fragment = self._fragment.split(RECORD_DELIMITER)
        return records

    def close(self) -> None:
        """Signal end of input.

        The trailing unterminated fragment is dropped, not flushed as a record.
        """
        leftover = self._fragment + self._decoder.decode(b"", final=True)
        self._fragment = ""
        self.discarded = leftover
        if leftover.strip():
            logger.debug(
                "Stream ended mid-record; discarding %d trailing characters",
                len(leftover),
            )
