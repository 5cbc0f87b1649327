"""
Viewport Converter - Desktop ↔ Mobile Grid Layout Conversion

Two directional algorithms over the same node collection:

- to_narrow (desktop → mobile): stable-sort nodes by (stacking priority,
  desktop row), then stack them in one column with a running row cursor.
  Heights come from each type's height heuristic.
- to_wide (mobile → desktop): walk nodes in mobile order, group maximal runs
  of adjacent type-compatible nodes onto shared rows, and give lone nodes
  their preferred desktop width.

Both directions also return content-adaptation patches: partial nodes of the
form ``{"data": {...}}`` that a document store may merge into a node's data
bag. The converter never mutates nodes or layouts.

Conversion is total over the node collection. A node without a source item
is treated as a zero-sized item at row 0; items whose node is not in the
collection are dropped.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Union

from responsive_layout.config.settings import EngineSettings, get_settings
from responsive_layout.models.layout import LayoutConfig, LayoutItem, Node

from .rules import (
    COMPATIBLE_PAIRS,
    can_share_row,
    get_desktop_width,
    get_mobile_rules,
    spacing_padding,
)
from .validation import check_layout_geometry

logger = logging.getLogger(__name__)

NodePatch = Dict[str, Any]
NodeLike = Union[Node, Mapping[str, Any]]

# Data keys written by to_narrow and cleared by to_wide
MOBILE_HINT_KEYS = ("mobileStyles", "mobileFontSize", "mobileSpacing")


@dataclass
class ConversionResult:
    """Output of one conversion direction."""
    layout: LayoutConfig
    node_patches: Dict[str, NodePatch] = field(default_factory=dict)


@dataclass
class _Placed:
    """A node paired with its source item (None when the node has no placement)."""
    node: Node
    item: Optional[LayoutItem]
    order: int

    @property
    def source_y(self) -> int:
        return self.item.y if self.item is not None else 0

    @property
    def source_h(self) -> int:
        return self.item.h if self.item is not None else 0


def coerce_nodes(nodes: Iterable[NodeLike]) -> List[Node]:
    """Validate nodes and drop repeated IDs (first occurrence wins)."""
    result = []
    seen = set()
    for raw in nodes:
        node = Node.model_validate(raw)
        if node.id in seen:
            logger.warning(f"Duplicate node {node.id} in collection, ignoring repeat")
            continue
        seen.add(node.id)
        result.append(node)
    return result


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def apply_node_patch(node: NodeLike, patch: NodePatch) -> Node:
    """
    Merge a content-adaptation patch into a node.

    Keys in ``patch["data"]`` overwrite the node's data bag; keys whose value is
    None are removed. Other node attributes are left untouched.

    Args:
        node: Node to patch
        patch: Partial node as returned in ``ConversionResult.node_patches``

    Returns:
        New Node with the merged data bag
    """
    node = Node.model_validate(node)
    data = dict(node.data)
    for key, value in patch.get("data", {}).items():
        if value is None:
            data.pop(key, None)
        else:
            data[key] = value
    return node.model_copy(update={"data": data})


class ViewportConverter:
    """
    Converts grid layouts between the desktop and mobile viewports.

    Example:
        converter = ViewportConverter()
        result = converter.to_narrow(nodes, desktop_layout)
        mobile_layout = result.layout
    """

    def __init__(
        self,
        compatible_pairs: Optional[FrozenSet[FrozenSet[str]]] = None,
        settings: Optional[EngineSettings] = None,
    ):
        """
        Args:
            compatible_pairs: Side-by-side allow-list for to_wide
                (defaults to rules.COMPATIBLE_PAIRS)
            settings: Grid constants (defaults to get_settings() at call time)
        """
        self.compatible_pairs = compatible_pairs if compatible_pairs is not None else COMPATIBLE_PAIRS
        self._settings = settings

    @property
    def settings(self) -> EngineSettings:
        """Grid constants; read from the environment unless pinned at construction."""
        return self._settings or get_settings()

    # =========================================================================
    # Desktop → Mobile
    # =========================================================================

    def to_narrow(self, nodes: Iterable[NodeLike], master_layout: LayoutConfig) -> ConversionResult:
        """
        Collapse a desktop layout into a single-column mobile layout.

        Args:
            nodes: Full node collection
            master_layout: Desktop layout to convert

        Returns:
            ConversionResult with the mobile layout and mobile hint patches
        """
        master_layout = LayoutConfig.model_validate(master_layout)
        check_layout_geometry(master_layout, "desktop input")

        placed = self._place(coerce_nodes(nodes), master_layout)
        ordered = self._prioritize(placed)

        columns = self.settings.narrow_columns
        items = []
        cursor = 0
        for entry in ordered:
            rules = get_mobile_rules(entry.node.type)
            width = min(rules.preferred_mobile_columns or columns, columns)
            height = rules.height.apply(entry.source_h)
            items.append(LayoutItem(node_id=entry.node.id, x=0, y=cursor, w=width, h=height))
            cursor += height + self.settings.row_spacing

        layout = LayoutConfig(columns=columns, items=items)
        check_layout_geometry(layout, "mobile output")

        patches = {}
        for entry in placed:
            patch = self.mobile_adaptations(entry.node)
            if patch:
                patches[entry.node.id] = patch

        logger.debug(
            f"Converted {len(items)} nodes to mobile ({cursor} rows, {len(patches)} patches)"
        )
        return ConversionResult(layout=layout, node_patches=patches)

    def _prioritize(self, placed: List[_Placed]) -> List[_Placed]:
        """Order by stacking priority, then by desktop row."""
        return sorted(
            placed,
            key=lambda entry: (
                get_mobile_rules(entry.node.type).stacking_priority,
                entry.source_y,
            ),
        )

    @staticmethod
    def mobile_adaptations(node: Node) -> NodePatch:
        """Mobile content hints for a node, or an empty dict if it has none."""
        rules = get_mobile_rules(node.type)
        data: Dict[str, Any] = {}

        if rules.mobile_specific_styles:
            data["mobileStyles"] = dict(rules.mobile_specific_styles)

        font_size = node.data.get("fontSize")
        if rules.scale_font and isinstance(font_size, (int, float)) and not isinstance(font_size, bool):
            data["mobileFontSize"] = _round_half_up(font_size * rules.scale_font)

        if rules.adjust_spacing:
            data["mobileSpacing"] = spacing_padding(rules.adjust_spacing)

        return {"data": data} if data else {}

    # =========================================================================
    # Mobile → Desktop
    # =========================================================================

    def to_wide(self, nodes: Iterable[NodeLike], narrow_layout: LayoutConfig) -> ConversionResult:
        """
        Expand a mobile layout into a multi-column desktop layout.

        Args:
            nodes: Full node collection
            narrow_layout: Mobile layout to convert

        Returns:
            ConversionResult with the desktop layout and patches clearing
            mobile-only hints
        """
        narrow_layout = LayoutConfig.model_validate(narrow_layout)
        check_layout_geometry(narrow_layout, "mobile input")

        placed = self._place(coerce_nodes(nodes), narrow_layout)
        groups = self._group(sorted(placed, key=lambda entry: (entry.source_y, entry.order)))

        columns = self.settings.wide_columns
        items = []
        cursor = 0
        for group in groups:
            heights = [self._wide_height(entry) for entry in group]
            if len(group) > 1:
                width = columns // len(group)
                for index, (entry, height) in enumerate(zip(group, heights)):
                    items.append(LayoutItem(
                        node_id=entry.node.id, x=index * width, y=cursor, w=width, h=height
                    ))
            else:
                entry = group[0]
                width = min(get_desktop_width(entry.node.type), columns)
                items.append(LayoutItem(node_id=entry.node.id, x=0, y=cursor, w=width, h=heights[0]))
            cursor += max(heights) + self.settings.row_spacing

        layout = LayoutConfig(columns=columns, items=items)
        check_layout_geometry(layout, "desktop output")

        patches = {}
        for entry in placed:
            patch = self.desktop_adaptations(entry.node)
            if patch:
                patches[entry.node.id] = patch

        logger.debug(
            f"Converted {len(items)} nodes to desktop in {len(groups)} rows "
            f"({len(patches)} patches)"
        )
        return ConversionResult(layout=layout, node_patches=patches)

    def _group(self, ordered: List[_Placed]) -> List[List[_Placed]]:
        """Split nodes into maximal runs where each node fits beside its predecessor."""
        max_group = self.settings.wide_columns
        groups: List[List[_Placed]] = []
        current: List[_Placed] = []

        for entry in ordered:
            if current and (
                len(current) < max_group
                and can_share_row(current[-1].node.type, entry.node.type, self.compatible_pairs)
            ):
                current.append(entry)
                continue
            if current:
                groups.append(current)
            current = [entry]

        if current:
            groups.append(current)
        return groups

    def _wide_height(self, entry: _Placed) -> int:
        if entry.item is None:
            return self.settings.default_item_height
        return entry.item.h

    @staticmethod
    def desktop_adaptations(node: Node) -> NodePatch:
        """Patch clearing mobile-only hints from a node, or an empty dict."""
        data = {key: None for key in MOBILE_HINT_KEYS if key in node.data}
        return {"data": data} if data else {}

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _place(nodes: List[Node], layout: LayoutConfig) -> List[_Placed]:
        """Pair each node with its item in ``layout``; items of unknown nodes are dropped."""
        index = layout.item_index()
        placed = [
            _Placed(node=node, item=index.get(node.id), order=order)
            for order, node in enumerate(nodes)
        ]

        missing = [entry.node.id for entry in placed if entry.item is None]
        if missing:
            logger.debug(f"{len(missing)} nodes have no source item, using defaults: {missing}")

        known = {node.id for node in nodes}
        dropped = [node_id for node_id in index if node_id not in known]
        if dropped:
            logger.debug(f"Dropping {len(dropped)} items for nodes not in collection: {dropped}")

        return placed


_converter = ViewportConverter()


def get_converter() -> ViewportConverter:
    """Get the shared converter."""
    return _converter


def to_narrow(nodes: Iterable[NodeLike], master_layout: LayoutConfig) -> ConversionResult:
    """Collapse a desktop layout into a mobile layout with the shared converter."""
    return get_converter().to_narrow(nodes, master_layout)


def to_wide(nodes: Iterable[NodeLike], narrow_layout: LayoutConfig) -> ConversionResult:
    """Expand a mobile layout into a desktop layout with the shared converter."""
    return get_converter().to_wide(nodes, narrow_layout)


__all__ = [
    "NodePatch",
    "MOBILE_HINT_KEYS",
    "ConversionResult",
    "ViewportConverter",
    "apply_node_patch",
    "coerce_nodes",
    "get_converter",
    "to_narrow",
    "to_wide",
]
