"""Layout models for the responsive layout engine.

Pydantic schemas for nodes, grid layouts, and the versioned desktop/mobile
layout pair. Models are frozen; updates produce new instances.
"""

from .layout import (
    Viewport,
    Node,
    LayoutItem,
    GridSettings,
    LayoutConfig,
)
from .layout_pair import (
    MasterLayout,
    DerivedLayout,
    MasterDerivedLayouts,
    LegacyLayouts,
    Layouts,
)

__all__ = [
    # Grid layouts
    "Viewport",
    "Node",
    "LayoutItem",
    "GridSettings",
    "LayoutConfig",

    # Layout pairs
    "MasterLayout",
    "DerivedLayout",
    "MasterDerivedLayouts",
    "LegacyLayouts",
    "Layouts",
]
