"""Operator prompts asked before and after a test runs.

Each prompt keeps asking until it gets a decisive key. Help keys print an
explanation and ask again, and unknown keys just ask again. A bare Enter
picks the prompt's positive answer.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from case_lifecycle.models.disposition import Disposition
from case_lifecycle.models.options import TestOptions
from case_lifecycle.output import Console
from case_lifecycle.responders.base import ResponseSource
from case_lifecycle.responders.console import ConsoleResponseSource
from case_lifecycle.responders.scripted import AutomaticResponseSource

log = logging.getLogger(__name__)

HELP_KEYS = frozenset({"h", "?"})


@dataclass(frozen=True, kw_only=True)
class Choice:
    """One decisive answer of a prompt."""

    disposition: Disposition
    echo: str


@dataclass(frozen=True, kw_only=True)
class PromptSequence:
    """Text and key table of one prompt."""

    prompt: str
    choices: Mapping[str, Choice]
    default_key: str
    help_lines: Sequence[str]

    def choice_for(self, key: str) -> Choice | None:
        """Map a keystroke to its choice, or None if it is not decisive."""
        key = key.lower() or self.default_key
        return self.choices.get(key)


BEFORE = PromptSequence(
    prompt="For this test [(c)ontinue, (s)kip, (q)uit, (a)bort, (h)elp]",
    choices={
        "c": Choice(disposition=Disposition.CONTINUE, echo="Continuing..."),
        "s": Choice(disposition=Disposition.DNT, echo="Skipping..."),
        "q": Choice(disposition=Disposition.QUITTED, echo="Quitting..."),
        "a": Choice(disposition=Disposition.ABORTED, echo="Aborting..."),
    },
    default_key="c",
    help_lines=(
        "Continue:  Go ahead and perform the upcoming test.",
        "Skip:      Do not perform the test.  Treat it as passed.",
        "Quit:      Do not perform any more tests.  Treat this test as passed.",
        "Abort:     Do not perform any more tests.  Treat this test as failed.",
    ),
)

AFTER = PromptSequence(
    prompt="Disposition [(p)ass, (f)ail, (q)uit, (a)bort, (h)elp]",
    choices={
        "p": Choice(disposition=Disposition.CONTINUE, echo="Passed."),
        "f": Choice(disposition=Disposition.FAILED, echo="Failed."),
        "q": Choice(disposition=Disposition.QUITTED, echo="Quitting..."),
        "a": Choice(disposition=Disposition.ABORTED, echo="Aborting..."),
    },
    default_key="p",
    help_lines=(
        "Pass:      Indicate that the test has passed.",
        "Fail:      Indicate that the test has failed.",
        "Quit:      Treat this test as passed, and end the unit-testing.",
        "Abort:     Treat this test as failed, and end the unit-testing.",
    ),
)


def ask(
    sequence: PromptSequence,
    responder: ResponseSource,
    console: Console,
    message: str | None = None,
) -> Disposition:
    """Prompt until the responder gives a decisive key and return its disposition."""
    policy = console.policy
    console.beep()

    while True:
        if not policy.batch:
            if message:
                console.write(f"\n{message}:\n{sequence.prompt} ")
            else:
                console.write(f"\n{sequence.prompt} ")

        key = responder.read_key()
        if responder.automatic and not policy.batch:
            console.line(f"\n(Responding automatically with {key})")

        if (choice := sequence.choice_for(key)) is not None:
            if policy.verbose:
                console.line(choice.echo)
            return choice.disposition

        if key.lower() in HELP_KEYS:
            console.line()
            for help_line in sequence.help_lines:
                console.line(help_line)
        else:
            log.debug("Ignoring unrecognized response %r", key)


@dataclass(frozen=True, kw_only=True)
class InteractionProtocol:
    """Response sources for the pre-test and post-test prompts."""

    before: ResponseSource = field(default_factory=ConsoleResponseSource)
    after: ResponseSource = field(default_factory=ConsoleResponseSource)

    @classmethod
    def from_options(cls, options: TestOptions | None) -> "InteractionProtocol":
        """Answer automatically where options configure a response key."""
        if options is None:
            return cls()

        before: ResponseSource = ConsoleResponseSource()
        after: ResponseSource = ConsoleResponseSource()
        if options.response_before:
            before = AutomaticResponseSource(key=options.response_before)
        if options.response_after:
            after = AutomaticResponseSource(key=options.response_after)
        return cls(before=before, after=after)

    def ask_before(
        self, console: Console, message: str | None = None
    ) -> Disposition:
        """Ask whether the upcoming test should run."""
        return ask(BEFORE, self.before, console, message)

    def ask_after(self, console: Console, message: str | None = None) -> Disposition:
        """Ask how the test that just ran turned out."""
        return ask(AFTER, self.after, console, message)
