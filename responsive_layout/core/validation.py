"""Error types and debug-only geometry checks.

The conversion core is total: malformed geometry coming from a caller is
passed through rather than rejected. With the ``debug_layout_assertions``
feature flag on, the same problems raise ``MalformedLayoutError`` so they
surface during development.
"""

import logging
from typing import List

from responsive_layout.config.settings import is_enabled
from responsive_layout.models.layout import LayoutConfig

logger = logging.getLogger(__name__)


class LayoutEngineError(Exception):
    """Base class for layout engine errors."""
    pass


class MalformedLayoutError(LayoutEngineError, ValueError):
    """Raised when debug assertions are on and a layout has invalid geometry."""

    def __init__(self, context: str, problems: List[str]):
        self.context = context
        self.problems = problems
        super().__init__(
            f"Malformed {context} layout: {'; '.join(problems)}"
        )


class InvalidLayoutPayloadError(LayoutEngineError, ValueError):
    """Raised when a stored payload matches neither layout format."""
    pass


def validate_layout_geometry(layout: LayoutConfig) -> List[str]:
    """List geometry problems of a layout.

    Checks ``x >= 0``, ``y >= 0``, ``w >= 1``, ``h >= 1`` and ``x + w <= columns``
    for every item.

    Args:
        layout: Layout to check

    Returns:
        Human-readable problems, empty if the layout is well-formed
    """
    problems = []
    if layout.columns < 1:
        problems.append(f"grid has {layout.columns} columns")

    for item in layout.items:
        if item.x < 0 or item.y < 0:
            problems.append(f"{item.node_id}: negative origin ({item.x}, {item.y})")
        if item.w < 1:
            problems.append(f"{item.node_id}: width {item.w} < 1")
        if item.h < 1:
            problems.append(f"{item.node_id}: height {item.h} < 1")
        if item.right > layout.columns:
            problems.append(
                f"{item.node_id}: spans to column {item.right} of {layout.columns}"
            )
    return problems


def check_layout_geometry(layout: LayoutConfig, context: str) -> None:
    """Assert layout geometry when debug assertions are enabled.

    Args:
        layout: Layout to check
        context: Label for messages (e.g. "desktop input")

    Raises:
        MalformedLayoutError: If debug assertions are on and problems exist
    """
    problems = validate_layout_geometry(layout)
    if not problems:
        return

    if is_enabled('debug_layout_assertions'):
        raise MalformedLayoutError(context, problems)

    logger.warning(f"Malformed {context} layout passed through: {'; '.join(problems)}")
