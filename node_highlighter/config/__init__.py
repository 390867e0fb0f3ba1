"""Configuration package."""

import logging
from pathlib import Path

from .pattern_config import PatternConfig, get_profile, load_pattern_config, reset_profile, set_profile
from .profile_loader import ProfileConfig, load_profile

logger = logging.getLogger(__name__)


def get_app_name() -> str:
    """Get application name."""
    return "Structural Node Highlighter"


def get_app_version() -> str:
    """Get application version from pyproject.toml."""
    try:
        import tomli
        pyproject_path = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            pyproject = tomli.load(f)
            return pyproject.get("project", {}).get("version", "0.1.0")
    except Exception as e:
        # Installed without the source tree
        logger.debug(f"Could not read version from pyproject.toml: {e}")
        return "0.1.0"


__all__ = [
    'PatternConfig',
    'ProfileConfig',
    'get_app_name',
    'get_app_version',
    'get_profile',
    'load_pattern_config',
    'load_profile',
    'reset_profile',
    'set_profile',
]
