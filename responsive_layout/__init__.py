"""Responsive layout conversion engine.

Converts grid document layouts between a 12-column desktop master and a
4-column mobile derived layout, and tracks whether the derived layout is
generated, customized, or stale relative to its master.
"""

from responsive_layout.models import (
    DerivedLayout,
    LayoutConfig,
    LayoutItem,
    LegacyLayouts,
    MasterDerivedLayouts,
    MasterLayout,
    Node,
    Viewport,
)
from responsive_layout.core import (
    ConversionResult,
    SwitchResult,
    ViewportConverter,
    apply_node_patch,
    create_initial,
    ensure_versioned,
    fingerprint,
    is_stale,
    is_versioned,
    load_layouts,
    mark_generated,
    migrate_legacy,
    regenerate_mobile,
    select_for_viewport,
    switch_viewport,
    to_legacy,
    to_narrow,
    to_wide,
    update_derived,
    update_master,
)

__version__ = "0.1.0"

__all__ = [
    "DerivedLayout",
    "LayoutConfig",
    "LayoutItem",
    "LegacyLayouts",
    "MasterDerivedLayouts",
    "MasterLayout",
    "Node",
    "Viewport",
    "ConversionResult",
    "SwitchResult",
    "ViewportConverter",
    "apply_node_patch",
    "create_initial",
    "ensure_versioned",
    "fingerprint",
    "is_stale",
    "is_versioned",
    "load_layouts",
    "mark_generated",
    "migrate_legacy",
    "regenerate_mobile",
    "select_for_viewport",
    "switch_viewport",
    "to_legacy",
    "to_narrow",
    "to_wide",
    "update_derived",
    "update_master",
]
