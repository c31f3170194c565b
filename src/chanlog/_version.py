"""
Version information for chanlog.

The single source of version numbers for chanlog. __version__ carries
build metadata (branch, build number, date, commit hash) after the
semantic version; --version prints both forms.

Format: MAJOR.MINOR.PATCH[-PHASE]_BRANCH_BUILD-YYYYMMDD-COMMITHASH
Example: 0.3.0-beta_main_7-20261016-1f2e3d4c
"""

# Version components - edit these for version bumps
MAJOR = 0
MINOR = 3
PATCH = 0
PHASE = "beta"  # None, "alpha", "beta", "rc1", etc.

# Keep in step with the components above and setup.py
__version__ = "0.3.0-beta_main_7-20261016-1f2e3d4c"
__app_name__ = "chanlog"


def get_version():
    """Return the full version string including branch and build info."""
    return __version__


def get_base_version():
    """Return the semantic version string (MAJOR.MINOR.PATCH[-PHASE])."""
    if "_" in __version__:
        return __version__.split("_")[0]
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    if PHASE:
        base = f"{base}-{PHASE}"
    return base


VERSION = get_version()
BASE_VERSION = get_base_version()
