"""Load test options from a YAML settings file."""

import logging
from pathlib import Path

import yaml

from case_lifecycle.errors import OptionsFileError
from case_lifecycle.models.options import TestOptions

log = logging.getLogger(__name__)


def load_test_options(path: Path) -> TestOptions:
    """Load and validate TestOptions from a YAML file.

    An empty file gives the default options.

    Raises:
        FileNotFoundError: If the file does not exist
        OptionsFileError: If the document is not a mapping
        pydantic.ValidationError: If a setting is unknown or out of range

    """
    if not path.is_file():
        raise FileNotFoundError(f"Options file not found: {path}")

    data = yaml.safe_load(path.read_text())
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise OptionsFileError(
            f"Options file {path} must contain a mapping, got {type(data).__name__}"
        )

    log.debug("Loaded %d option(s) from %s", len(data), path)
    return TestOptions.model_validate(data)
