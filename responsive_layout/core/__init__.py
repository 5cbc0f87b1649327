"""
Core Layer - Layout Conversion Engine

Pure, synchronous functions over the layout models:

Modules:
- fingerprint: order-independent layout hashing for staleness checks
- migration: versioned pair creation and legacy migration
- rules: per-node-type mobile policy table
- converter: desktop ↔ mobile layout conversion
- transitions: master/derived state updates and staleness
- viewport_switch: regeneration and viewport switching
- validation: error types and debug-only geometry checks
"""

from .fingerprint import (
    fingerprint,
    generate_layout_hash,
)
from .migration import (
    create_initial,
    ensure_versioned,
    is_versioned,
    load_layouts,
    migrate_legacy,
    parse_layouts,
    to_legacy,
)
from .rules import (
    COMPATIBLE_PAIRS,
    DEFAULT_MOBILE_RULES,
    MOBILE_OPTIMIZATION_RULES,
    MobileRules,
    NodeType,
    SpacingMode,
    get_mobile_rules,
)
from .converter import (
    ConversionResult,
    ViewportConverter,
    apply_node_patch,
    to_narrow,
    to_wide,
)
from .transitions import (
    is_stale,
    mark_generated,
    master_changed_since_generation,
    select_for_viewport,
    update_derived,
    update_master,
)
from .viewport_switch import (
    SwitchResult,
    regenerate_mobile,
    switch_viewport,
)
from .validation import (
    InvalidLayoutPayloadError,
    LayoutEngineError,
    MalformedLayoutError,
    validate_layout_geometry,
)

__all__ = [
    # Fingerprinting
    'fingerprint',
    'generate_layout_hash',
    # Migration
    'create_initial',
    'ensure_versioned',
    'is_versioned',
    'load_layouts',
    'migrate_legacy',
    'parse_layouts',
    'to_legacy',
    # Rules
    'COMPATIBLE_PAIRS',
    'DEFAULT_MOBILE_RULES',
    'MOBILE_OPTIMIZATION_RULES',
    'MobileRules',
    'NodeType',
    'SpacingMode',
    'get_mobile_rules',
    # Conversion
    'ConversionResult',
    'ViewportConverter',
    'apply_node_patch',
    'to_narrow',
    'to_wide',
    # Transitions
    'is_stale',
    'mark_generated',
    'master_changed_since_generation',
    'select_for_viewport',
    'update_derived',
    'update_master',
    # Switching
    'SwitchResult',
    'regenerate_mobile',
    'switch_viewport',
    # Errors
    'InvalidLayoutPayloadError',
    'LayoutEngineError',
    'MalformedLayoutError',
    'validate_layout_geometry',
]
