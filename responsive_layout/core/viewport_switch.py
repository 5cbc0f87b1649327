"""Viewport switching on top of the converter and the state transitions.

The document store calls into this module when the editor switches
viewport or the user asks for a fresh mobile layout. It decides whether the
stored mobile layout can be reused, regenerates it when stale, and never
regenerates the desktop master from the mobile side, with one exception: a
document authored only on mobile (empty master, populated mobile layout)
gets its master seeded from the mobile layout.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Union

from responsive_layout.models.layout import LayoutConfig, Viewport
from responsive_layout.models.layout_pair import MasterDerivedLayouts

from .converter import NodeLike, NodePatch, ViewportConverter, coerce_nodes, get_converter
from .migration import PairLike, ensure_versioned
from .transitions import is_stale, mark_generated, update_master

logger = logging.getLogger(__name__)


@dataclass
class SwitchResult:
    """Outcome of a viewport switch or regeneration request."""
    layouts: MasterDerivedLayouts
    layout: LayoutConfig
    node_patches: Dict[str, NodePatch] = field(default_factory=dict)
    regenerated: bool = False


def regenerate_mobile(
    nodes: Iterable[NodeLike],
    pair: PairLike,
    force: bool = False,
    converter: Optional[ViewportConverter] = None,
    timestamp: Optional[str] = None,
) -> SwitchResult:
    """
    Produce the mobile layout, regenerating it only when needed.

    The stored mobile layout is reused when it is customized or not stale.
    Customized layouts are only replaced when ``force`` is set, including
    hand edits made before the first generation.

    Args:
        nodes: Full node collection
        pair: Current layout pair (legacy payloads are migrated first)
        force: Regenerate even if the stored layout is current or customized
        converter: Converter to use (defaults to the shared one)
        timestamp: ISO 8601 time recorded on regeneration

    Returns:
        SwitchResult for the mobile viewport
    """
    pair = ensure_versioned(pair)
    if not force and pair.mobile.has_customizations:
        logger.debug("Mobile layout is customized, keeping it")
        return SwitchResult(layouts=pair, layout=pair.mobile.data)
    if not force and not is_stale(pair):
        logger.debug("Mobile layout is current, reusing it")
        return SwitchResult(layouts=pair, layout=pair.mobile.data)

    converter = converter or get_converter()
    result = converter.to_narrow(nodes, pair.desktop.data)
    updated = mark_generated(pair, result.layout, timestamp=timestamp)

    logger.info(
        f"Regenerated mobile layout ({len(result.layout.items)} items, force={force})"
    )
    return SwitchResult(
        layouts=updated,
        layout=updated.mobile.data,
        node_patches=result.node_patches,
        regenerated=True,
    )


def _show_desktop(
    nodes: Iterable[NodeLike],
    pair: MasterDerivedLayouts,
    converter: ViewportConverter,
    timestamp: Optional[str],
) -> SwitchResult:
    nodes = coerce_nodes(nodes)
    patches = {}
    for node in nodes:
        patch = converter.desktop_adaptations(node)
        if patch:
            patches[node.id] = patch

    if pair.desktop.data.items or not pair.mobile.data.items:
        return SwitchResult(layouts=pair, layout=pair.desktop.data, node_patches=patches)

    # Document authored on mobile only: seed the master once
    result = converter.to_wide(nodes, pair.mobile.data)
    updated = update_master(pair, result.layout, timestamp=timestamp)
    logger.info(f"Seeded empty desktop layout from {len(pair.mobile.data.items)} mobile items")
    return SwitchResult(
        layouts=updated,
        layout=updated.desktop.data,
        node_patches=result.node_patches,
        regenerated=True,
    )


def switch_viewport(
    current: Union[Viewport, str],
    target: Union[Viewport, str],
    nodes: Iterable[NodeLike],
    pair: PairLike,
    converter: Optional[ViewportConverter] = None,
    timestamp: Optional[str] = None,
) -> SwitchResult:
    """
    Switch the editor from one viewport to another.

    Args:
        current: Viewport being left
        target: Viewport being shown
        nodes: Full node collection
        pair: Current layout pair
        converter: Converter to use (defaults to the shared one)
        timestamp: ISO 8601 time recorded on any change

    Returns:
        SwitchResult with the layout of ``target``
    """
    current, target = Viewport(current), Viewport(target)
    pair = ensure_versioned(pair)

    if current is target:
        return SwitchResult(layouts=pair, layout=pair.layout_for(target))

    converter = converter or get_converter()
    logger.debug(f"Switching viewport {current.value} -> {target.value}")

    if target is Viewport.MOBILE:
        return regenerate_mobile(nodes, pair, converter=converter, timestamp=timestamp)
    return _show_desktop(nodes, pair, converter, timestamp)


__all__ = [
    "SwitchResult",
    "regenerate_mobile",
    "switch_viewport",
]
