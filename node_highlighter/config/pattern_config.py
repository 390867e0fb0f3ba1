"""Tunable constants of the pattern-propagation engine.

The similarity threshold and the three feature normalization constants are
coupled (scores are raw dot products of the scaled features), so they are
always loaded and overridden together as one PatternConfig.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Optional

from .profile_loader import ProfileConfig, get_default_profile, load_profile

logger = logging.getLogger(__name__)

# Environment variable -> PatternConfig field
ENV_OVERRIDES = {
    'NH_LINE_TOLERANCE': 'line_tolerance',
    'NH_X_NORM': 'x_norm',
    'NH_FONT_NORM': 'font_norm',
    'NH_LENGTH_NORM': 'length_norm',
    'NH_SIMILARITY_THRESHOLD': 'similarity_threshold',
    'NH_X_MATCH_TOLERANCE': 'x_match_tolerance',
}


@dataclass(frozen=True)
class PatternConfig:
    """Constants used by extraction, encoding, matching and expansion.

    Attributes:
        line_tolerance: Quantization step T for vertical positions
        x_norm: Divisor for the x feature
        font_norm: Divisor for the font size feature
        length_norm: Divisor for the text length feature (capped at 1)
        similarity_threshold: Raw dot-product score a node must exceed
        x_match_tolerance: Max |x - seed.x| (exclusive) for flowing alignment
    """

    line_tolerance: float = 3.0
    x_norm: float = 1000.0
    font_norm: float = 100.0
    length_norm: float = 500.0
    similarity_threshold: float = 0.985
    x_match_tolerance: float = 15.0

    def __post_init__(self):
        for name in ('line_tolerance', 'x_norm', 'font_norm', 'length_norm', 'x_match_tolerance'):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0, got {getattr(self, name)}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PatternConfig':
        """Create PatternConfig from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown pattern settings: {', '.join(unknown)}")
        values: Dict[str, float] = {}
        for k, v in data.items():
            if k not in known:
                continue
            try:
                values[k] = float(v)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Invalid pattern setting {k}: {v!r}") from e
        return cls(**values)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def _env_overrides() -> Dict[str, float]:
    overrides: Dict[str, float] = {}
    for env_name, field_name in ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw is None or raw.strip() == "":
            continue
        try:
            overrides[field_name] = float(raw)
        except ValueError:
            logger.warning(f"Invalid value for {env_name}: {raw!r}, ignoring")
    return overrides


def load_pattern_config(profile: Optional[ProfileConfig] = None) -> PatternConfig:
    """Resolve the pattern configuration.

    Order of precedence: NH_* environment variables, then the profile's
    ``pattern`` mapping, then built-in defaults.

    Args:
        profile: Profile to read from (active profile if None)

    Returns:
        PatternConfig
    """
    if profile is None:
        profile = get_profile()

    config = PatternConfig.from_dict(profile.pattern)
    overrides = _env_overrides()
    if overrides:
        logger.info(f"Pattern settings overridden from environment: {overrides}")
        config = replace(config, **overrides)
    return config


# Profile that load_pattern_config() reads when none is passed
_active_profile: Optional[ProfileConfig] = None


def set_profile(profile_name: str = "default") -> ProfileConfig:
    """Make the named YAML profile the source of pattern settings.

    Raises:
        FileNotFoundError: If the profile doesn't exist
        ValueError: If the profile is invalid
    """
    global _active_profile
    _active_profile = load_profile(profile_name)
    logger.info(f"Active pattern profile: {_active_profile.name}")
    return _active_profile


def get_profile() -> ProfileConfig:
    """Active profile, falling back to the default profile."""
    return _active_profile if _active_profile is not None else get_default_profile()


def reset_profile() -> None:
    global _active_profile
    _active_profile = None
