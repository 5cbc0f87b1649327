"""
Mobile Optimization Rules - Single Source of Truth for Per-Type Layout Policy

This module declares how each node type behaves when a desktop layout is
collapsed into the single-column mobile grid, and back:
- stacking priority (lower values are stacked first)
- preferred mobile column span
- height heuristic applied to the desktop height
- content-adaptation hints (font scale, spacing, mobile-only styles)
- preferred desktop width for a node that sits alone on a row
- which type pairs may share a desktop row

The table is built once at import and exposed read-only. Unknown node types
fall back to DEFAULT_MOBILE_RULES.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


class NodeType(str, Enum):
    """Canonical node type tags known to the rule table."""
    HEADING = "heading"
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    TABLE = "table"
    CALLOUT = "callout"
    QUOTE = "quote"
    POLL = "poll"
    REFERENCE = "reference"
    SEPARATOR = "separator"


class SpacingMode(str, Enum):
    """Padding density applied to a node on mobile."""
    COMPACT = "compact"
    NORMAL = "normal"
    LOOSE = "loose"


class Rounding(str, Enum):
    FLOOR = "floor"
    CEIL = "ceil"


@dataclass(frozen=True)
class HeightRule:
    """Maps a desktop row span to a mobile row span."""
    multiplier: Fraction = Fraction(1)
    minimum: int = 3
    rounding: Rounding = Rounding.CEIL
    fixed: Optional[int] = None

    def apply(self, desktop_height: int) -> int:
        """Mobile height for a node that spans ``desktop_height`` rows on desktop."""
        if self.fixed is not None:
            return self.fixed
        scaled = desktop_height * self.multiplier
        rounded = math.floor(scaled) if self.rounding is Rounding.FLOOR else math.ceil(scaled)
        return max(self.minimum, rounded)


@dataclass(frozen=True)
class MobileRules:
    """Mobile layout policy for one node type."""
    # Layout
    force_full_width: bool = True
    stack_vertically: bool = True
    preferred_mobile_columns: Optional[int] = None  # None = full narrow width
    minimum_touch_target: Optional[int] = None      # px
    stacking_priority: int = 5
    height: HeightRule = field(default_factory=HeightRule)

    # Content adaptations (hints only, never change geometry)
    scale_font: Optional[float] = None
    adjust_spacing: Optional[SpacingMode] = SpacingMode.NORMAL
    mobile_specific_styles: Optional[Mapping[str, Any]] = None


DEFAULT_MOBILE_RULES = MobileRules()

MOBILE_OPTIMIZATION_RULES: Mapping[str, MobileRules] = MappingProxyType({
    # Headings first, compacted
    NodeType.HEADING.value: MobileRules(
        preferred_mobile_columns=4,
        stacking_priority=1,
        height=HeightRule(Fraction("0.7"), minimum=2, rounding=Rounding.FLOOR),
        scale_font=0.9,
        adjust_spacing=SpacingMode.COMPACT,
    ),
    # Key takeaways: prominent, extra padding
    NodeType.CALLOUT.value: MobileRules(
        preferred_mobile_columns=4,
        stacking_priority=1,
        height=HeightRule(Fraction("1.3"), minimum=4),
        adjust_spacing=SpacingMode.LOOSE,
        mobile_specific_styles=MappingProxyType({
            "padding": "20px",
            "borderRadius": "12px",
        }),
    ),
    NodeType.IMAGE.value: MobileRules(
        preferred_mobile_columns=4,
        stacking_priority=2,
        height=HeightRule(minimum=6),
        adjust_spacing=SpacingMode.NORMAL,
        mobile_specific_styles=MappingProxyType({
            "objectFit": "contain",
            "maxHeight": "300px",
        }),
    ),
    NodeType.VIDEO.value: MobileRules(
        preferred_mobile_columns=4,
        stacking_priority=2,
        adjust_spacing=SpacingMode.NORMAL,
        mobile_specific_styles=MappingProxyType({
            "aspectRatio": "16/9",
        }),
    ),
    NodeType.QUOTE.value: MobileRules(
        preferred_mobile_columns=4,
        stacking_priority=2,
        scale_font=1.0,
        adjust_spacing=SpacingMode.LOOSE,
        mobile_specific_styles=MappingProxyType({
            "fontStyle": "italic",
            "borderLeft": "4px solid #3b82f6",
            "paddingLeft": "16px",
        }),
    ),
    # Body text needs more rows once reflowed to the narrow width
    NodeType.TEXT.value: MobileRules(
        preferred_mobile_columns=4,
        stacking_priority=3,
        height=HeightRule(Fraction("1.2"), minimum=3),
        scale_font=1.1,
        adjust_spacing=SpacingMode.NORMAL,
    ),
    NodeType.TABLE.value: MobileRules(
        preferred_mobile_columns=4,
        stacking_priority=4,
        height=HeightRule(Fraction("1.5"), minimum=8),
        adjust_spacing=SpacingMode.COMPACT,
        mobile_specific_styles=MappingProxyType({
            "fontSize": "14px",
            "responsive": "scroll",
        }),
    ),
    NodeType.POLL.value: MobileRules(
        preferred_mobile_columns=4,
        minimum_touch_target=44,
        stacking_priority=5,
        adjust_spacing=SpacingMode.NORMAL,
    ),
    NodeType.REFERENCE.value: MobileRules(
        preferred_mobile_columns=4,
        stacking_priority=6,
        scale_font=0.9,
        adjust_spacing=SpacingMode.COMPACT,
    ),
    NodeType.SEPARATOR.value: MobileRules(
        preferred_mobile_columns=4,
        stacking_priority=7,
        height=HeightRule(fixed=1),
        adjust_spacing=SpacingMode.COMPACT,
        mobile_specific_styles=MappingProxyType({
            "height": "1px",
            "margin": "16px 0",
        }),
    ),
})

# Padding (px) per spacing mode
SPACING_PADDING: Mapping[SpacingMode, Mapping[str, int]] = MappingProxyType({
    SpacingMode.COMPACT: MappingProxyType({"paddingX": 12, "paddingY": 8}),
    SpacingMode.NORMAL: MappingProxyType({"paddingX": 16, "paddingY": 12}),
    SpacingMode.LOOSE: MappingProxyType({"paddingX": 20, "paddingY": 16}),
})

# Desktop column span for a node alone on its row (12-column grid)
DESKTOP_WIDTHS: Mapping[str, int] = MappingProxyType({
    NodeType.HEADING.value: 8,
    NodeType.TEXT.value: 8,
    NodeType.CALLOUT.value: 8,
    NodeType.IMAGE.value: 10,
    NodeType.TABLE.value: 12,
    NodeType.SEPARATOR.value: 12,
})
DEFAULT_DESKTOP_WIDTH = 10

# Type pairs allowed side by side on a desktop row (either order)
COMPATIBLE_PAIRS: FrozenSet[FrozenSet[str]] = frozenset({
    frozenset({NodeType.TEXT.value, NodeType.IMAGE.value}),
    frozenset({NodeType.HEADING.value, NodeType.TEXT.value}),
    frozenset({NodeType.CALLOUT.value, NodeType.REFERENCE.value}),
})

# Block names used by older documents
LEGACY_TYPE_ALIASES: Mapping[str, str] = MappingProxyType({
    "headingBlock": NodeType.HEADING.value,
    "textBlock": NodeType.TEXT.value,
    "imageBlock": NodeType.IMAGE.value,
    "videoEmbedBlock": NodeType.VIDEO.value,
    "tableBlock": NodeType.TABLE.value,
    "keyTakeawayBlock": NodeType.CALLOUT.value,
    "quoteBlock": NodeType.QUOTE.value,
    "pollBlock": NodeType.POLL.value,
    "referenceBlock": NodeType.REFERENCE.value,
    "separatorBlock": NodeType.SEPARATOR.value,
})


def normalize_node_type(node_type: str) -> str:
    """Map legacy block names onto canonical type tags; other tags pass through."""
    return LEGACY_TYPE_ALIASES.get(node_type, node_type)


def get_mobile_rules(node_type: str) -> MobileRules:
    """
    Look up the mobile policy for a node type.

    Args:
        node_type: Node type tag (canonical or legacy block name)

    Returns:
        The type's MobileRules, or DEFAULT_MOBILE_RULES for unknown types
    """
    rules = MOBILE_OPTIMIZATION_RULES.get(normalize_node_type(node_type))
    if rules is None:
        logger.debug(f"No mobile rules for node type '{node_type}', using defaults")
        return DEFAULT_MOBILE_RULES
    return rules


def get_desktop_width(node_type: str) -> int:
    """Desktop column span for a node of this type alone on a row."""
    return DESKTOP_WIDTHS.get(normalize_node_type(node_type), DEFAULT_DESKTOP_WIDTH)


def build_compatible_pairs(pairs: Iterable[Tuple[str, str]]) -> FrozenSet[FrozenSet[str]]:
    """
    Build a compatibility allow-list from type pairs.

    Args:
        pairs: (type_a, type_b) tuples; order within a pair is irrelevant

    Returns:
        Allow-list usable by ``can_share_row``

    Example:
        >>> extra = build_compatible_pairs([("image", "callout")])
        >>> can_share_row("callout", "image", COMPATIBLE_PAIRS | extra)
        True
    """
    return frozenset(
        frozenset({normalize_node_type(a), normalize_node_type(b)}) for a, b in pairs
    )


def can_share_row(
    previous_type: str,
    current_type: str,
    compatible_pairs: FrozenSet[FrozenSet[str]] = COMPATIBLE_PAIRS,
) -> bool:
    """Check whether two node types may sit side by side on a desktop row."""
    pair = frozenset({normalize_node_type(previous_type), normalize_node_type(current_type)})
    return pair in compatible_pairs


def spacing_padding(mode: SpacingMode) -> Dict[str, int]:
    """Padding dict for a spacing mode."""
    return dict(SPACING_PADDING[SpacingMode(mode)])


__all__ = [
    "NodeType",
    "SpacingMode",
    "Rounding",
    "HeightRule",
    "MobileRules",
    "DEFAULT_MOBILE_RULES",
    "MOBILE_OPTIMIZATION_RULES",
    "SPACING_PADDING",
    "DESKTOP_WIDTHS",
    "DEFAULT_DESKTOP_WIDTH",
    "COMPATIBLE_PAIRS",
    "LEGACY_TYPE_ALIASES",
    "normalize_node_type",
    "get_mobile_rules",
    "get_desktop_width",
    "build_compatible_pairs",
    "can_share_row",
    "spacing_padding",
]
