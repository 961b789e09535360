from __future__ import annotations

import io
from typing import Iterable, Iterator, List, Optional, Union

from .errors import EndOfInput, MalformedScalar

RawLine = Union[str, bytes]


class LineCursor:
    """
    Forward-only line reader with a consumed-line counter.

    Contract:
      - advance() consumes exactly one raw line and increments the counter by one.
      - At end of input advance() raises EndOfInput and the counter is unchanged.
      - current() is the number of lines consumed, i.e. the 1-based number of
        the last line returned.
      - There is no rollback; at_end() only peeks.

    Byte lines are decoded one at a time with ``encoding``; a line that does not
    decode is consumed and raises MalformedScalar with its line number.
    """

    def __init__(self, lines: Iterable[RawLine], encoding: str = "ascii"):
        self._it: Iterator[RawLine] = iter(lines)
        self._encoding = encoding
        self._peeked: Optional[RawLine] = None
        self._has_peeked = False
        self._line = 0

    @classmethod
    def from_text(cls, text: str) -> "LineCursor":
        return cls(io.StringIO(text))

    def current(self) -> int:
        return self._line

    def _pull(self) -> Optional[RawLine]:
        try:
            return next(self._it, None)
        except UnicodeDecodeError as e:
            # text streams decode ahead of us; the failing line is the next one
            self._line += 1
            raise MalformedScalar(f"undecodable input ({e.reason})", self._line) from None

    def _next_raw(self) -> Optional[RawLine]:
        if self._has_peeked:
            self._has_peeked = False
            raw, self._peeked = self._peeked, None
            return raw
        return self._pull()

    def at_end(self) -> bool:
        if not self._has_peeked:
            self._peeked = self._pull()
            self._has_peeked = True
        return self._peeked is None

    def advance(self) -> str:
        raw = self._next_raw()
        if raw is None:
            raise EndOfInput(self._line)
        self._line += 1
        if isinstance(raw, bytes):
            try:
                raw = raw.decode(self._encoding)
            except UnicodeDecodeError as e:
                raise MalformedScalar(
                    f"undecodable byte {raw[e.start:e.end]!r} for encoding {self._encoding!r}", self._line
                ) from None
        return raw.rstrip("\r\n")

    def skip(self, n: int) -> List[str]:
        """Consume n lines and return them."""
        return [self.advance() for _ in range(int(n))]
