"""Disposition values a test case can end up in."""

from enum import StrEnum


class Disposition(StrEnum):
    """Run-continuation and verdict state of a single test case.

    ABORTED is the state of a record that has not been initialized yet. A
    successfully initialized and authorized case starts in CONTINUE.
    """

    CONTINUE = "continue"
    DNT = "dnt"
    FAILED = "failed"
    QUITTED = "quitted"
    ABORTED = "aborted"

    @property
    def is_okay(self) -> bool:
        """Case is either running normally or deliberately skipped."""
        return self in {Disposition.CONTINUE, Disposition.DNT}

    @property
    def ends_run(self) -> bool:
        """Operator asked to stop the whole run after this case."""
        return self in {Disposition.QUITTED, Disposition.ABORTED}

    @property
    def counts_as_pass(self) -> bool:
        """Disposition does not by itself make the case fail."""
        return self not in {Disposition.FAILED, Disposition.ABORTED}
