"""Output policy and the console that honours it."""

import sys
from dataclasses import dataclass
from typing import TextIO

from case_lifecycle.models.options import TestOptions

BELL = "\a"


@dataclass(frozen=True, kw_only=True)
class OutputPolicy:
    """Resolved output switches for one call site.

    Every flag already accounts for silent mode, so callers never combine
    flags themselves.
    """

    silent: bool = False
    verbose: bool = False
    summary: bool = False
    progress: bool = True
    step_numbers: bool = False
    batch: bool = False
    beep: bool = True
    simulated: bool = False

    @classmethod
    def from_options(cls, options: TestOptions | None) -> "OutputPolicy":
        """Derive the policy from options, falling back to library defaults."""
        if options is None:
            return cls()

        silent = options.silent
        return cls(
            silent=silent,
            verbose=options.verbose and not silent,
            summary=options.summary,
            progress=options.show_progress and not silent,
            step_numbers=options.show_step_numbers and not silent,
            batch=options.batch_mode,
            beep=options.beep and not silent,
            simulated=options.simulated,
        )


@dataclass(frozen=True, kw_only=True)
class Console:
    """Line-oriented writer that drops everything in silent mode."""

    policy: OutputPolicy
    stream: TextIO | None = None

    def write(self, text: str) -> None:
        """Write text as-is, without adding a newline."""
        if self.policy.silent:
            return
        out = self.stream if self.stream is not None else sys.stdout
        out.write(text)
        out.flush()

    def line(self, text: str = "") -> None:
        """Write text followed by a newline."""
        self.write(f"{text}\n")

    def beep(self) -> None:
        """Sound the console alert if the policy allows it."""
        if self.policy.beep:
            self.write(BELL)
