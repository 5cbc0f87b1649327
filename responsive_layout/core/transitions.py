"""Layout state transitions for the versioned master/derived pair.

Every function returns a new pair and leaves its input untouched; the caller
is responsible for swapping the stored pair in a single step.

Transitions:
    update_master   - hand edit of the desktop layout
    update_derived  - hand edit of the mobile layout (marks it customized)
    mark_generated  - mobile layout regenerated from the current master

Staleness:
    is_stale tells a regeneration policy whether the mobile layout should be
    regenerated. A customized mobile layout is never reported stale; the raw
    master comparison stays available via master_changed_since_generation.
"""

import logging
from typing import Optional, Union

from responsive_layout.models.layout import LayoutConfig, Viewport
from responsive_layout.models.layout_pair import MasterDerivedLayouts

from .fingerprint import generate_layout_hash
from .migration import PairLike, ensure_versioned, utc_now

logger = logging.getLogger(__name__)


def update_master(
    pair: PairLike,
    layout: LayoutConfig,
    timestamp: Optional[str] = None,
) -> MasterDerivedLayouts:
    """
    Replace the desktop layout. The mobile side is never touched.

    Args:
        pair: Current layout pair
        layout: New desktop layout
        timestamp: ISO 8601 modification time (defaults to now)

    Returns:
        New layout pair
    """
    pair = ensure_versioned(pair)
    master = pair.desktop.model_copy(update={
        "data": LayoutConfig.model_validate(layout),
        "last_modified": timestamp or utc_now(),
    })
    return pair.model_copy(update={"desktop": master})


def update_derived(
    pair: PairLike,
    layout: LayoutConfig,
    timestamp: Optional[str] = None,
) -> MasterDerivedLayouts:
    """
    Replace the mobile layout after a hand edit.

    A direct edit always counts as a customization, even if it happens to equal
    what generation would produce.

    Args:
        pair: Current layout pair
        layout: New mobile layout
        timestamp: ISO 8601 modification time (defaults to now)

    Returns:
        New layout pair with ``has_customizations`` set
    """
    pair = ensure_versioned(pair)
    if not pair.mobile.has_customizations:
        logger.debug("Mobile layout edited by hand, marking as customized")

    derived = pair.mobile.model_copy(update={
        "data": LayoutConfig.model_validate(layout),
        "has_customizations": True,
        "last_modified": timestamp or utc_now(),
    })
    return pair.model_copy(update={"mobile": derived})


def mark_generated(
    pair: PairLike,
    layout: LayoutConfig,
    timestamp: Optional[str] = None,
) -> MasterDerivedLayouts:
    """
    Store a mobile layout generated from the current master.

    This is the only transition that sets ``is_generated`` and clears
    ``has_customizations``. The baseline hash is the current master fingerprint.

    Args:
        pair: Current layout pair
        layout: Mobile layout produced by the converter
        timestamp: ISO 8601 generation time (defaults to now)

    Returns:
        New layout pair
    """
    pair = ensure_versioned(pair)
    master_hash = generate_layout_hash(pair.desktop.data)
    derived = pair.mobile.model_copy(update={
        "data": LayoutConfig.model_validate(layout),
        "is_generated": True,
        "generated_from_hash": master_hash,
        "has_customizations": False,
        "last_modified": timestamp or utc_now(),
    })
    logger.debug(f"Mobile layout generated from master {master_hash}")
    return pair.model_copy(update={"mobile": derived})


def master_changed_since_generation(pair: PairLike) -> bool:
    """
    Compare the recorded generation baseline with the current master.

    Returns:
        True if a baseline exists and differs from the master fingerprint
    """
    pair = ensure_versioned(pair)
    baseline = pair.mobile.generated_from_hash
    if baseline is None:
        return False
    return baseline != generate_layout_hash(pair.desktop.data)


def is_stale(pair: PairLike) -> bool:
    """
    Decide whether the mobile layout should be regenerated from the master.

    - Never generated: stale.
    - Customized by hand: not stale; a master change does not affect the result.
    - Generated without a recorded baseline: not stale (nothing to compare).
    - Otherwise: stale when the master fingerprint differs from the baseline.
    """
    pair = ensure_versioned(pair)
    derived = pair.mobile

    if not derived.is_generated:
        return True
    if derived.has_customizations:
        return False
    return master_changed_since_generation(pair)


def select_for_viewport(pair: PairLike, viewport: Union[Viewport, str]) -> LayoutConfig:
    """Grid layout shown in ``viewport``."""
    return ensure_versioned(pair).layout_for(Viewport(viewport))


__all__ = [
    "update_master",
    "update_derived",
    "mark_generated",
    "master_changed_since_generation",
    "is_stale",
    "select_for_viewport",
]
