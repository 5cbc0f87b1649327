"""Engine configuration: grid constants and feature flags."""

from .settings import (
    FEATURE_FLAGS,
    EngineSettings,
    get_settings,
    is_enabled,
    set_flag,
)

__all__ = [
    "FEATURE_FLAGS",
    "EngineSettings",
    "get_settings",
    "is_enabled",
    "set_flag",
]
