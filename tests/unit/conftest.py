"""Shared fixtures for unit tests."""

import pytest

from case_lifecycle.models.options import TestOptions
from case_lifecycle.status import CaseStatus
from case_lifecycle.testing.clock import ManualTimeSource
from case_lifecycle.testing.factories import TestOptionsFactory


@pytest.fixture
def clock() -> ManualTimeSource:
    """Create a clock that only moves when advanced."""
    return ManualTimeSource()


@pytest.fixture
def quiet_options() -> TestOptions:
    """Create options that select everything and print nothing."""
    return TestOptionsFactory.build()


@pytest.fixture
def status(clock: ManualTimeSource) -> CaseStatus:
    """Create a cleared status record on the manual clock."""
    return CaseStatus(clock=clock)
