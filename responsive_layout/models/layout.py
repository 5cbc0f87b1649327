"""Grid layout models shared by both viewports.

This module provides schemas for a single grid layout:
- Nodes (content units owned by the document store)
- Layout items (one node's cell placement on a grid)
- Layout configurations (column count plus placed items)

Persisted Format:
    Attribute names are snake_case; the serialized names are the camelCase
    keys used by stored documents (``nodeId``, ``gridSettings``). ``to_dict()``
    always dumps by alias so stored payloads round-trip unchanged.

Geometry is deliberately not validated here. A negative width or an item
overflowing its grid is accepted on read; see
``responsive_layout.core.validation`` for the debug-only checks.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

logger = logging.getLogger(__name__)


class Viewport(str, Enum):
    """The two viewport representations of a document."""
    DESKTOP = "desktop"
    MOBILE = "mobile"


class Node(BaseModel):
    """A content unit of a document.

    The engine only reads ``id`` and ``type``; ``data`` is the author's opaque
    content bag and is never modified in place.

    Attributes:
        id: Stable node identifier
        type: Node type tag (open set, e.g. "text", "image", "table")
        data: Author-supplied content and formatting
    """

    model_config = {"frozen": True}

    id: str = Field(..., description="Stable node identifier")
    type: str = Field(..., description="Node type tag")
    data: Dict[str, Any] = Field(default_factory=dict, description="Opaque content bag")


class LayoutItem(BaseModel):
    """Placement of one node on a grid.

    Attributes:
        node_id: Identifier of the placed node
        x: Column origin
        y: Row origin
        w: Column span
        h: Row span
    """

    model_config = {"frozen": True, "populate_by_name": True}

    node_id: str = Field(..., alias="nodeId", description="Placed node ID")
    x: int = Field(..., description="Column origin")
    y: int = Field(..., description="Row origin")
    w: int = Field(..., description="Column span")
    h: int = Field(..., description="Row span")

    @property
    def right(self) -> int:
        """First column to the right of the item."""
        return self.x + self.w

    @property
    def bottom(self) -> int:
        """First row below the item."""
        return self.y + self.h

    def token(self) -> str:
        """Structural token used by layout fingerprinting."""
        return f"{self.node_id}:{self.x},{self.y},{self.w},{self.h}"


class GridSettings(BaseModel):
    """Grid parameters of a layout."""

    model_config = {"frozen": True}

    columns: int = Field(..., description="Number of grid columns")


class LayoutConfig(BaseModel):
    """A grid column count plus the items placed on that grid.

    Item order carries no meaning. Each node has at most one item per layout.

    Example:
        layout = LayoutConfig(columns=12, items=[
            LayoutItem(node_id="h1", x=0, y=0, w=12, h=4),
        ])
    """

    model_config = {"frozen": True, "populate_by_name": True}

    grid_settings: GridSettings = Field(
        ..., alias="gridSettings", description="Grid parameters"
    )
    items: List[LayoutItem] = Field(
        default_factory=list, description="Placed items (order-irrelevant)"
    )

    @model_validator(mode="before")
    @classmethod
    def accept_columns_shorthand(cls, data: Any) -> Any:
        """Allow ``LayoutConfig(columns=12, ...)`` as a shorthand for grid settings."""
        if isinstance(data, dict) and "columns" in data:
            data = dict(data)
            columns = data.pop("columns")
            data.setdefault("gridSettings", {"columns": columns})
        return data

    @classmethod
    def empty(cls, columns: int) -> "LayoutConfig":
        """Create a layout with no items."""
        return cls(columns=columns, items=[])

    @property
    def columns(self) -> int:
        """Number of grid columns."""
        return self.grid_settings.columns

    def get_item(self, node_id: str) -> Optional[LayoutItem]:
        """Find the item placing ``node_id``.

        Returns:
            The node's LayoutItem, or None if the node has no placement
        """
        for item in self.items:
            if item.node_id == node_id:
                return item
        return None

    def item_index(self) -> Dict[str, LayoutItem]:
        """Index items by node ID (the first item wins on duplicates)."""
        index: Dict[str, LayoutItem] = {}
        for item in self.items:
            if item.node_id in index:
                logger.warning(f"Duplicate layout item for node {item.node_id}, keeping the first")
                continue
            index[item.node_id] = item
        return index

    def to_dict(self) -> Dict[str, Any]:
        """Export to the persisted camelCase shape."""
        return self.model_dump(by_alias=True)


__all__ = [
    "Viewport",
    "Node",
    "LayoutItem",
    "GridSettings",
    "LayoutConfig",
]
