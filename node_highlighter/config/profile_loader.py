"""Profile loader for configurable pattern-propagation behavior."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml


@dataclass
class ProfileConfig:
    """Configuration profile."""
    name: str
    description: str = ""
    pattern: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProfileConfig':
        """Create ProfileConfig from dictionary."""
        return cls(
            name=data.get('name', 'default'),
            description=data.get('description', ''),
            pattern=data.get('pattern') or {},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'name': self.name,
            'description': self.description,
            'pattern': self.pattern,
        }


def get_profiles_dir() -> Path:
    """Get directory containing profile YAML files.

    NH_PROFILES_DIR overrides the default configs/profiles directory
    relative to the project root.

    Returns:
        Path to profiles directory
    """
    env_dir = os.getenv('NH_PROFILES_DIR')
    if env_dir:
        return Path(env_dir)
    # node_highlighter/config/profile_loader.py -> node_highlighter/config -> node_highlighter -> root
    project_root = Path(__file__).resolve().parent.parent.parent
    return project_root / "configs" / "profiles"


def load_profile(profile_name: str = "default") -> ProfileConfig:
    """Load a configuration profile.

    Args:
        profile_name: Name of profile to load (without .yaml extension)

    Returns:
        ProfileConfig object

    Raises:
        FileNotFoundError: If profile file doesn't exist
        ValueError: If profile file is invalid
    """
    profile_path = get_profiles_dir() / f"{profile_name}.yaml"

    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_name} (expected at {profile_path})")

    try:
        with open(profile_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in profile {profile_name}: {e}") from e

    if not data:
        raise ValueError(f"Profile file is empty: {profile_path}")
    if not isinstance(data, dict):
        raise ValueError(f"Profile {profile_name} must be a mapping")
    if not isinstance(data.get('pattern') or {}, dict):
        raise ValueError(f"Profile {profile_name}: 'pattern' must be a mapping")

    return ProfileConfig.from_dict(data)


def list_available_profiles() -> list[str]:
    """List all available profile names (without .yaml extension)."""
    profiles_dir = get_profiles_dir()

    if not profiles_dir.exists():
        return ["default"]

    profiles = [profile_file.stem for profile_file in profiles_dir.glob("*.yaml")]
    return sorted(profiles) if profiles else ["default"]


def get_default_profile() -> ProfileConfig:
    """Get default profile (always available).

    Returns:
        Default ProfileConfig
    """
    try:
        return load_profile("default")
    except FileNotFoundError:
        # Built-in defaults
        return ProfileConfig(name="default", description="Default configuration")
