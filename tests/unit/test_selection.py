"""Tests for the group, case and sub-test selection gate."""

import pytest

from case_lifecycle.models.options import TestOptions
from case_lifecycle.selection import admit_case, admit_subtest


def test_no_options_admit_everything() -> None:
    """Without options every case and sub-test is admitted."""
    assert admit_case(None, 3, 7, "group", "case")
    assert admit_subtest(None, 12, "step")


@pytest.mark.parametrize(
    ("options", "group", "group_name", "expected"),
    [
        (TestOptions(test_group=2), 2, "any", True),
        (TestOptions(test_group=2), 1, "any", False),
        (TestOptions(named_group="alpha"), 5, "alpha", True),
        (TestOptions(named_group="alpha"), 5, "Alpha", False),
        (TestOptions(named_group="alpha"), 5, "alphabet", False),
        (TestOptions(test_group=2, named_group="alpha"), 2, "beta", True),
        (TestOptions(test_group=2, named_group="alpha"), 1, "alpha", False),
        (TestOptions(), 99, "", True),
    ],
)
def test_group_tier(
    options: TestOptions, group: int, group_name: str, expected: bool
) -> None:
    """Numeric group filter wins over the exact, case-sensitive name filter."""
    assert admit_case(options, group, 1, group_name, "case") is expected


@pytest.mark.parametrize(
    ("options", "case", "case_name", "expected"),
    [
        (TestOptions(test_case=4), 4, "x", True),
        (TestOptions(test_case=4), 3, "x", False),
        (TestOptions(named_case="open file"), 1, "open file", True),
        (TestOptions(named_case="open file"), 1, "open files", False),
        (TestOptions(test_case=1, named_case="other"), 1, "x", True),
    ],
)
def test_case_tier(
    options: TestOptions, case: int, case_name: str, expected: bool
) -> None:
    """The case tier applies the same numeric-then-named rule."""
    assert admit_case(options, 1, case, "group", case_name) is expected


def test_case_tier_only_checked_when_group_admitted() -> None:
    """A rejected group rejects the case even when the case filter matches."""
    options = TestOptions(test_group=2, test_case=1)

    assert not admit_case(options, 1, 1, "group", "case")
    assert admit_case(options, 2, 1, "group", "case")


@pytest.mark.parametrize(
    ("options", "index", "tag", "expected"),
    [
        (TestOptions(single_subtest=2), 2, "any", True),
        (TestOptions(single_subtest=2), 3, "any", False),
        (TestOptions(named_subtest="alpha"), 1, "alpha", True),
        (TestOptions(named_subtest="alpha"), 2, "beta", False),
        (TestOptions(single_subtest=1, named_subtest="beta"), 1, "alpha", True),
    ],
)
def test_subtest_filters(
    options: TestOptions, index: int, tag: str, expected: bool
) -> None:
    """Sub-tests are gated by number first, then by exact name."""
    assert admit_subtest(options, index, tag) is expected
