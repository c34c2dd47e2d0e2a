"""Response sources that answer without a human at the keyboard."""

from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field

from case_lifecycle.errors import ResponsesExhaustedError
from case_lifecycle.responders.base import ResponseSource


@dataclass(frozen=True, kw_only=True)
class AutomaticResponseSource(ResponseSource):
    """Gives the same configured answer to every prompt."""

    key: str
    automatic: bool = True

    def read_key(self) -> str:
        """Return the configured key."""
        return self.key


@dataclass(kw_only=True)
class ScriptedResponseSource(ResponseSource):
    """Replays a fixed sequence of keys, one per read."""

    keys: Iterable[str] = ()
    _pending: deque[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._pending = deque(self.keys)

    @property
    def remaining(self) -> int:
        """Number of keys not yet consumed."""
        return len(self._pending)

    def read_key(self) -> str:
        """Pop the next scripted key."""
        if not self._pending:
            raise ResponsesExhaustedError("Scripted responses exhausted")
        return self._pending.popleft()
