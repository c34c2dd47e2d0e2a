"""Decide which groups, cases and sub-tests are allowed to run."""

import logging

from case_lifecycle.models.options import TestOptions

log = logging.getLogger(__name__)


def _tier_admits(
    number_filter: int, name_filter: str | None, number: int, name: str
) -> bool:
    """Apply one numeric-then-named filter tier.

    A non-zero numeric filter wins over the named one. Names must match
    exactly, including case.
    """
    if number_filter != 0:
        return number == number_filter
    if name_filter is not None:
        return name == name_filter
    return True


def admit_case(
    options: TestOptions | None,
    test_group: int,
    test_case: int,
    group_name: str,
    case_name: str,
) -> bool:
    """Check a (group, case) pair against the group and case filters."""
    if options is None:
        return True

    if not _tier_admits(
        options.test_group, options.named_group, test_group, group_name
    ):
        log.debug("Group %d '%s' not selected", test_group, group_name)
        return False

    if not _tier_admits(options.test_case, options.named_case, test_case, case_name):
        log.debug("Case %d '%s' not selected", test_case, case_name)
        return False

    return True


def admit_subtest(options: TestOptions | None, next_index: int, tag: str) -> bool:
    """Check the sub-test about to get index next_index against the filters."""
    if options is None:
        return True
    return _tier_admits(options.single_subtest, options.named_subtest, next_index, tag)
