"""
Configuration and Feature Flags for the Layout Conversion Engine

This module provides the grid constants used by the viewport converter and
feature flags for debug-only behaviour. Both are controlled via environment
variables so they can be toggled without code changes.

Usage:
    from responsive_layout.config.settings import get_settings, is_enabled

    settings = get_settings()
    columns = settings.narrow_columns

    if is_enabled('debug_layout_assertions'):
        # Raise on malformed geometry instead of logging it
        ...

Environment Variables:
    LAYOUT_DEBUG_ASSERTIONS=true/false - Raise on malformed layout geometry
    LAYOUT_WIDE_COLUMNS=<int>          - Column count of the desktop grid
    LAYOUT_NARROW_COLUMNS=<int>        - Column count of the mobile grid
    LAYOUT_ROW_SPACING=<int>           - Rows left empty between stacked items

Production Default:
    Debug assertions are off. The engine stays total: malformed geometry is
    logged and passed through rather than rejected.
"""

import os
from dataclasses import dataclass
from typing import Dict


# Feature flags with environment variable overrides
FEATURE_FLAGS: Dict[str, bool] = {
    # Geometry checks on converter input/output
    'debug_layout_assertions': os.getenv('LAYOUT_DEBUG_ASSERTIONS', 'false').lower() == 'true',
}


@dataclass(frozen=True)
class EngineSettings:
    """Grid constants shared by both conversion directions."""
    wide_columns: int = 12
    narrow_columns: int = 4
    row_spacing: int = 2
    default_item_height: int = 4


def get_settings() -> EngineSettings:
    """
    Build engine settings from the environment.

    Returns:
        EngineSettings with any environment overrides applied

    Example:
        >>> get_settings().wide_columns
        12
    """
    defaults = EngineSettings()
    return EngineSettings(
        wide_columns=int(os.getenv('LAYOUT_WIDE_COLUMNS', defaults.wide_columns)),
        narrow_columns=int(os.getenv('LAYOUT_NARROW_COLUMNS', defaults.narrow_columns)),
        row_spacing=int(os.getenv('LAYOUT_ROW_SPACING', defaults.row_spacing)),
        default_item_height=defaults.default_item_height,
    )


def _require_flag(flag: str) -> None:
    if flag not in FEATURE_FLAGS:
        raise KeyError(
            f"Unknown feature flag: '{flag}' (known: {', '.join(sorted(FEATURE_FLAGS))})"
        )


def is_enabled(flag: str) -> bool:
    """
    Report whether a debug flag is on.

    Raises:
        KeyError: If ``flag`` is not one of FEATURE_FLAGS
    """
    _require_flag(flag)
    return FEATURE_FLAGS[flag]


def set_flag(flag: str, enabled: bool) -> None:
    """Override a flag in-process. Tests use this; deployments use the environment."""
    _require_flag(flag)
    FEATURE_FLAGS[flag] = enabled
