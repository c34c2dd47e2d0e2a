"""Models for the options that drive test selection and output."""

from typing import Any, Literal

from pydantic import Field, field_validator, model_validator

from case_lifecycle.models.base import Model

TESTGROUP_MAX = 100
TESTCASE_MAX = 100
SUBTEST_MAX = 1000

BeforeKey = Literal["", "c", "s", "q", "a"]
AfterKey = Literal["", "p", "f", "q", "a"]


class TestOptions(Model):
    """Selection filters and mode flags shared by every case of a run.

    A zero numeric filter and a missing named filter both mean "no filter".
    The numeric filter of a tier takes precedence over the named one.
    """

    __test__ = False

    test_group: int = Field(
        default=0, ge=0, le=TESTGROUP_MAX, description="Run only this group number"
    )
    named_group: str | None = Field(
        default=None, description="Run only the group with this exact name"
    )
    test_case: int = Field(
        default=0, ge=0, le=TESTCASE_MAX, description="Run only this case number"
    )
    named_case: str | None = Field(
        default=None, description="Run only the case with this exact name"
    )
    single_subtest: int = Field(
        default=0, ge=0, le=SUBTEST_MAX, description="Run only this sub-test number"
    )
    named_subtest: str | None = Field(
        default=None, description="Run only the sub-test with this exact name"
    )

    verbose: bool = Field(default=False, description="Show extra output")
    summary: bool = Field(
        default=False, description="List groups, cases and sub-tests without running"
    )
    show_progress: bool = Field(default=True, description="Show test numbers")
    show_step_numbers: bool = Field(default=False, description="Show sub-test steps")
    silent: bool = Field(default=False, description="Suppress all output")
    simulated: bool = Field(
        default=False, description="Tests are simulated, tag output accordingly"
    )

    batch_mode: bool = Field(
        default=False, description="Answer every prompt automatically"
    )
    interactive: bool = Field(default=False, description="Prompt the operator")
    beep: bool = Field(default=True, description="Alert before each prompt")

    current_test: int = Field(
        default=0, ge=0, description="Zero-based index of the test being run"
    )
    response_before: BeforeKey = Field(
        default="", description="Automatic answer to the pre-test prompt"
    )
    response_after: AfterKey = Field(
        default="", description="Automatic answer to the post-test prompt"
    )

    @field_validator("response_before", "response_after", mode="before")
    @classmethod
    def _lower_response(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.lower()
        return value

    @model_validator(mode="before")
    @classmethod
    def _apply_batch_mode(cls, data: Any) -> Any:
        """Batch mode implies automatic, non-verbose answers to every prompt."""
        if isinstance(data, dict) and data.get("batch_mode"):
            data = {
                **data,
                "interactive": True,
                "response_before": "c",
                "response_after": "p",
                "verbose": False,
            }
        return data
