"""Tests for chanlog._version — version components and strings."""

import re

from chanlog import __app_name__, __version__
from chanlog._version import (
    BASE_VERSION,
    MAJOR, MINOR, PATCH,
    VERSION,
    get_base_version,
)


def test_base_version_format():
    """Base version should be MAJOR.MINOR.PATCH-PHASE."""
    base = get_base_version()
    assert re.match(r"^\d+\.\d+\.\d+(-\w+)?$", base), \
        f"Unexpected base version format: {base}"


def test_base_version_matches_components():
    """Base version should match the MAJOR.MINOR.PATCH constants."""
    assert get_base_version().startswith(f"{MAJOR}.{MINOR}.{PATCH}")


def test_constants_match_functions():
    assert VERSION == __version__
    assert BASE_VERSION == get_base_version()


def test_setup_version_matches_components():
    """setup.py declares the MAJOR.MINOR.PATCH release."""
    from pathlib import Path
    setup_py = (Path(__file__).resolve().parent.parent / "setup.py").read_text()
    assert f'version="{MAJOR}.{MINOR}.{PATCH}' in setup_py


def test_app_name():
    assert __app_name__ == "chanlog"
