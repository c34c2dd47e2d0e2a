"""Response source that reads keystrokes typed by an operator."""

import sys
from dataclasses import dataclass
from typing import TextIO

from case_lifecycle.responders.base import ResponseSource


@dataclass(frozen=True, kw_only=True)
class ConsoleResponseSource(ResponseSource):
    """Blocking line reader on a text stream (standard input by default)."""

    stream: TextIO | None = None

    def read_key(self) -> str:
        """Read one line and return its first character.

        Only a printable, non-blank first character counts. A bare Enter, a
        line starting with whitespace and end of input all give "".
        """
        source = self.stream if self.stream is not None else sys.stdin
        line = source.readline()
        first = line[:1]
        return first if first > " " else ""
