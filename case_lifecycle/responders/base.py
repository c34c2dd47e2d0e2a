"""Abstract base class for operator response sources."""

from abc import ABC, abstractmethod


class ResponseSource(ABC):
    """Supplies one keystroke per prompt.

    An empty string stands for a bare Enter and selects the prompt's default.
    Sources that answer without a human set ``automatic`` so the prompt can
    say so.
    """

    automatic: bool = False

    @abstractmethod
    def read_key(self) -> str:
        """Return the next response key, or "" for the default answer."""
