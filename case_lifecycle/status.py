"""Per-case status record: selection, outcomes, disposition and timing."""

import logging
from typing import Annotated, Any, TextIO

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    InstanceOf,
    SkipValidation,
)

from case_lifecycle.errors import InvalidStatusError
from case_lifecycle.interaction import InteractionProtocol
from case_lifecycle.models.disposition import Disposition
from case_lifecycle.models.options import TestOptions
from case_lifecycle.output import Console, OutputPolicy
from case_lifecycle.selection import admit_case, admit_subtest
from case_lifecycle.timing import (
    SystemTimeSource,
    TimeSource,
    Timestamp,
    time_difference_ms,
)

log = logging.getLogger(__name__)

MAX_NAME_LENGTH = 127


def truncate_name(value: str) -> str:
    """Clip a name to MAX_NAME_LENGTH characters."""
    return value[:MAX_NAME_LENGTH]


BoundedName = Annotated[str, AfterValidator(truncate_name)]


class CaseStatus(BaseModel):
    """Mutable state of one test case, owned by the code running that case.

    A new instance is in the cleared state: disposition ABORTED, so nothing
    can proceed until initialize() has authorized the case.
    """

    model_config = ConfigDict(validate_assignment=True, arbitrary_types_allowed=True)

    options: TestOptions | None = None
    group_name: BoundedName = ""
    case_description: BoundedName = ""
    subtest_name: BoundedName = ""
    test_group: int = 0
    test_case: int = 0
    subtest: int = 0
    test_result: bool = True
    subtest_error_count: int = 0
    failed_subtest: int = 0
    disposition: Disposition = Disposition.ABORTED
    start_time: InstanceOf[Timestamp] = Timestamp.ZERO
    end_time: InstanceOf[Timestamp] = Timestamp.ZERO
    duration_ms: float = 0.0

    clock: InstanceOf[TimeSource] = Field(
        default_factory=SystemTimeSource, exclude=True, repr=False
    )
    interaction: InstanceOf[InteractionProtocol] | None = Field(
        default=None, exclude=True, repr=False
    )
    stream: SkipValidation[TextIO | None] = Field(
        default=None, exclude=True, repr=False
    )

    # Lifecycle

    def clear(self) -> bool:
        """Reset every field to its safe default and detach the options."""
        self.options = None
        self.group_name = ""
        self.case_description = ""
        self.subtest_name = ""
        self.test_group = 0
        self.test_case = 0
        self.subtest = 0
        self.test_result = True
        self.subtest_error_count = 0
        self.failed_subtest = 0
        self.disposition = Disposition.ABORTED
        self.start_time = Timestamp.ZERO
        self.end_time = Timestamp.ZERO
        self.duration_ms = 0.0
        return True

    def initialize(
        self,
        options: TestOptions | None,
        test_group: int,
        test_case: int,
        group_name: str | None,
        case_name: str | None,
    ) -> bool:
        """Set up the case and decide whether it is allowed to run.

        Returns the selection decision, not merely whether the arguments
        were valid. A rejected case is marked DNT and counted as passed.
        Invalid arguments leave the record cleared (ABORTED).
        """
        self.clear()
        if test_group <= 0 or test_case <= 0:
            log.error("invalid test group or case number")
            return False

        if options is None or group_name is None or case_name is None:
            log.error("null options, or group/case names")
            return False

        self.group_name = group_name
        self.case_description = case_name
        self.test_group = test_group
        self.test_case = test_case
        self.disposition = Disposition.CONTINUE
        self.options = options

        admitted = admit_case(options, test_group, test_case, group_name, case_name)
        console = self.console()
        if admitted:
            if console.policy.progress:
                tag = "Simulated TEST" if console.policy.simulated else "TEST"
                console.line(f"\n{tag} {options.current_test + 1:3d}:  ")

            if console.policy.summary:
                console.line(
                    f"  Group {test_group} '{self.group_name}', "
                    f"Case {test_case} '{self.case_description}'"
                )
            else:
                self.show_title()
        else:
            self.disposition = Disposition.DNT
            self.test_result = True
            if console.policy.verbose:
                console.line(
                    f"  Group {test_group} '{self.group_name}', "
                    f"Case {test_case} '{self.case_description}' skipped"
                )

        self.start_time = self.clock.now()
        return admitted

    def reset(self) -> bool:
        """Put the case back into CONTINUE."""
        self.disposition = Disposition.CONTINUE
        return True

    def console(self) -> Console:
        """Console bound to this case's output policy."""
        return Console(
            policy=OutputPolicy.from_options(self.options), stream=self.stream
        )

    # Timing

    def start_timer(self) -> bool:
        """Stamp a new start time and forget the previous end time."""
        self.end_time = Timestamp.ZERO
        self.start_time = self.clock.now()
        return True

    def time_delta(self, reset: bool = False) -> float:
        """Milliseconds since the start time, or -1.0 if the timer never started.

        A negative delta is returned but not stored in duration_ms. With
        reset, the start time moves to now so the next call measures a new
        interval.
        """
        if self.start_time.is_zero:
            log.error("logged unit-test start time was 0")
            return -1.0

        self.end_time = self.clock.now()
        result = time_difference_ms(self.start_time, self.end_time)
        if result >= 0.0:
            self.duration_ms = result
        else:
            log.error("time-difference < 0.0, left unassigned")

        if reset:
            self.start_time = self.clock.now()
            log.info("unit-test start time reset!")

        return result

    # Sub-tests and outcomes

    def next_subtest(self, tag: str | None) -> bool:
        """Enter the next sub-test and report whether it should run.

        The sub-test counter and name advance whether or not the sub-test
        is selected. In summary mode sub-tests are only listed, never run.
        """
        console = self.console()
        policy = console.policy
        if not tag:
            tag = "unnamed"
            if policy.progress:
                console.line("! empty tag: next_subtest()\n")

        if policy.summary:
            self.subtest += 1
            self.subtest_name = tag
            console.line(f"  Sub-test {self.subtest}: '{tag}'")
            return False

        admitted = admit_subtest(self.options, self.subtest + 1, tag)
        self.subtest += 1
        self.subtest_name = tag
        if admitted:
            if policy.step_numbers:
                if self.subtest == 1:
                    console.line()
                console.line(f"  Sub-test {self.subtest}: {self.subtest_name}")
        elif policy.verbose:
            console.line(f"  Sub-test {self.subtest} ({tag}) skipped")

        return admitted

    def record_result(self, flag: bool) -> bool:
        """Record the outcome of the current sub-test.

        Failures are counted and the first failing sub-test index is kept.
        """
        self.test_result = flag
        if not flag:
            self.subtest_error_count += 1
            if self.failed_subtest == 0:
                self.failed_subtest = self.subtest

            console = self.console()
            if console.policy.progress:
                tag = (
                    "FAILURE in simulated sub-test"
                    if console.policy.simulated
                    else "FAILURE in sub-test"
                )
                console.line(f"  {tag} {self.subtest} ['{self.subtest_name}']")
        return True

    def fail(self) -> bool:
        """Record a failure of the current sub-test."""
        return self.record_result(False)

    def fail_deliberately(self) -> bool:
        """Record a failure that is expected, and say so."""
        result = self.fail()
        console = self.console()
        if console.policy.progress:
            console.line("! This FAILURE is deliberate.")
        return result

    def int_check(self, expected: int, actual: int) -> bool:
        """Record whether two integers are equal."""
        return int_check(self, expected, actual)

    def string_check(self, expected: str | None, actual: str | None) -> bool:
        """Record whether two optional strings are equal."""
        return string_check(self, expected, actual)

    def bool_check(self, expected: bool, actual: bool) -> bool:
        """Record whether two booleans are equal."""
        return bool_check(self, expected, actual)

    @property
    def passed(self) -> bool:
        """Case verdict: no sub-test has failed."""
        if self.subtest_error_count < 0:
            log.error("sub-test error count < 0")
        return self.subtest_error_count == 0

    @property
    def failed(self) -> bool:
        """Negation of passed."""
        return not self.passed

    # Disposition

    @property
    def is_continue(self) -> bool:
        return self.disposition is Disposition.CONTINUE

    @property
    def is_skipped(self) -> bool:
        return self.disposition is Disposition.DNT

    @property
    def is_failed(self) -> bool:
        return self.disposition is Disposition.FAILED

    @property
    def is_quitted(self) -> bool:
        return self.disposition is Disposition.QUITTED

    @property
    def is_aborted(self) -> bool:
        return self.disposition is Disposition.ABORTED

    @property
    def is_okay(self) -> bool:
        return self.disposition.is_okay

    def can_proceed(self) -> bool:
        """Whether the case body may run: not aborted and not skipped."""
        result = self.disposition not in {Disposition.ABORTED, Disposition.DNT}
        if not result:
            log.info("Test is aborted or is to be skipped")
        return result

    def ignore(self) -> bool:
        """Settle a case that will not run, returning True if it must be skipped.

        Skipped and quitted cases pass, and an aborted case fails. A case in
        any other state must actually run, so False is returned. Stopping the
        whole run on QUITTED is left to the caller.
        """
        if self.is_skipped or self.is_quitted:
            self.record_result(True)
            return True

        if self.is_aborted:
            self.fail_deliberately()
            return True

        return False

    # Operator interaction

    def _interaction(self) -> InteractionProtocol:
        if self.interaction is not None:
            return self.interaction
        return InteractionProtocol.from_options(self.options)

    def prompt(self, message: str | None = None) -> bool:
        """Ask the operator whether to run the upcoming test.

        Returns True only if the operator chose to continue. Otherwise the
        case is settled right away: it passes unless the answer was abort.
        Without interactive mode the case is simply skipped.
        """
        interactive = self.options is not None and self.options.interactive
        if interactive:
            disposition = self._interaction().ask_before(self.console(), message)
        else:
            disposition = Disposition.DNT

        self.disposition = disposition
        result = disposition is Disposition.CONTINUE
        if not result:
            self.record_result(not self.is_failed and not self.is_aborted)
        return result

    def response(self, message: str | None = None) -> bool:
        """Ask the operator how the test that just ran turned out.

        Returns True only if the operator reported a pass. Quit passes the
        case, while fail and abort fail it. Without interactive mode the case
        is marked skipped and passes.
        """
        interactive = self.options is not None and self.options.interactive
        if interactive:
            disposition = self._interaction().ask_after(self.console(), message)
        else:
            disposition = Disposition.DNT

        self.disposition = disposition
        result = disposition is Disposition.CONTINUE
        if result:
            log.info("User indicates test succeeded")
        else:
            if self.is_failed:
                ok = False
                log.info("User indicates test failed")
            elif self.is_aborted:
                ok = False
                log.info("User indicates test aborted")
            else:
                ok = True
                log.info("User quits, but passes this test")
            self.record_result(ok)
        return result

    # Diagnostics

    def show_title(self) -> bool:
        """Print the case heading in verbose mode."""
        console = self.console()
        if console.policy.verbose:
            group_name = self.group_name or "unnamed"
            case_name = self.case_description or "none given"
            console.line(
                f"\n  Unit test({self.test_group}, {self.test_case}) "
                f"[{group_name} ({case_name})]"
            )
        return True

    def show(self) -> bool:
        """Print every field of the record."""
        console = self.console()
        console.line("- CaseStatus:")
        for name, value in self._dump_fields().items():
            console.line(f"-    {name + ':':<26}{value}")
        return True

    def trace(self, context: str | None = None) -> bool:
        """Print the identity and error count, optionally tagged with a context."""
        console = self.console()
        if context is not None:
            console.line(f"- Context: {context}")
        console.line("- CaseStatus partial settings:")
        console.line(
            f"-    Group, case, & sub-test:  '{self.group_name}', "
            f"'{self.case_description}', & '{self.subtest_name}'"
        )
        console.line(f"-    Subtest error count:      {self.subtest_error_count}")
        return True

    def _dump_fields(self) -> dict[str, Any]:
        def stamp(value: Timestamp) -> str:
            return f"{value.seconds}.{value.microseconds:06d}"

        return {
            "options": "set" if self.options is not None else "none",
            "group_name": self.group_name,
            "case_description": self.case_description,
            "subtest_name": self.subtest_name,
            "test_group": self.test_group,
            "test_case": self.test_case,
            "subtest": self.subtest,
            "test_result": str(self.test_result).lower(),
            "subtest_error_count": self.subtest_error_count,
            "failed_subtest": self.failed_subtest,
            "disposition": self.disposition.value,
            "start_time": stamp(self.start_time),
            "end_time": stamp(self.end_time),
            "duration_ms": f"{self.duration_ms:g}",
        }


def ensure_status(obj: Any) -> CaseStatus:
    """Return obj if it is a CaseStatus, otherwise raise InvalidStatusError."""
    if not isinstance(obj, CaseStatus):
        raise InvalidStatusError(f"Expected a CaseStatus, got {type(obj).__name__}")
    return obj


def _report_mismatch(status: CaseStatus | None, text: str) -> None:
    if status is None:
        console = Console(policy=OutputPolicy())
    else:
        console = status.console()
    console.line(f"? {text}")


def _record(status: CaseStatus | None, flag: bool) -> None:
    if status is not None:
        ensure_status(status).record_result(flag)


def int_check(status: CaseStatus | None, expected: int, actual: int) -> bool:
    """Compare two integers and record the result on status.

    A mismatch always returns False, even when no status is given.
    """
    flag = actual == expected
    _record(status, flag)
    if not flag:
        _report_mismatch(status, f"{expected} expected, {actual} actual")
    return flag and status is not None


def string_check(
    status: CaseStatus | None, expected: str | None, actual: str | None
) -> bool:
    """Compare two optional strings and record the result on status.

    Two missing values are equal; a missing and a present value are not.
    """
    if expected is None:
        flag = actual is None
    else:
        flag = actual is not None and actual == expected

    _record(status, flag)
    if not flag:
        shown_expected = "null pointer" if expected is None else expected
        shown_actual = "null pointer" if actual is None else actual
        _report_mismatch(
            status, f"'{shown_expected}' expected, '{shown_actual}' actual"
        )
    return flag and status is not None


def bool_check(status: CaseStatus | None, expected: bool, actual: bool) -> bool:
    """Compare two booleans and record the result on status."""
    flag = actual == expected
    _record(status, flag)
    if not flag:
        _report_mismatch(
            status,
            f"{str(expected).lower()} expected, {str(actual).lower()} actual",
        )
    return flag and status is not None
