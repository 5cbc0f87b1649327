"""Tests for layout models.

These tests verify that layout models accept the persisted camelCase shape,
dump back to it losslessly, and stay immutable.
"""

import pytest
from pydantic import ValidationError

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

TS = "2024-05-01T12:00:00+00:00"


class TestLayoutItem:
    """Test LayoutItem model."""

    def test_create_by_field_name(self):
        item = LayoutItem(node_id="a", x=1, y=2, w=3, h=4)
        assert item.node_id == "a"
        assert (item.right, item.bottom) == (4, 6)

    def test_create_by_alias(self):
        item = LayoutItem.model_validate({"nodeId": "a", "x": 0, "y": 0, "w": 12, "h": 4})
        assert item.node_id == "a"

    def test_token(self):
        assert LayoutItem(node_id="a", x=1, y=2, w=3, h=4).token() == "a:1,2,3,4"

    def test_malformed_geometry_accepted(self):
        """Geometry is not validated on read."""
        item = LayoutItem(node_id="a", x=-1, y=0, w=0, h=-5)
        assert item.w == 0

    def test_frozen(self):
        item = LayoutItem(node_id="a", x=0, y=0, w=1, h=1)
        with pytest.raises(ValidationError):
            item.x = 5


class TestLayoutConfig:
    """Test LayoutConfig model."""

    def test_columns_shorthand(self):
        layout = LayoutConfig(columns=12, items=[])
        assert layout.columns == 12
        assert layout.grid_settings.columns == 12

    def test_persisted_shape(self):
        raw = {
            "gridSettings": {"columns": 4},
            "items": [{"nodeId": "a", "x": 0, "y": 0, "w": 4, "h": 3}],
        }
        layout = LayoutConfig.model_validate(raw)
        assert layout.columns == 4
        assert layout.to_dict() == raw

    def test_empty(self):
        layout = LayoutConfig.empty(4)
        assert layout.items == []
        assert layout.columns == 4

    def test_get_item(self):
        layout = LayoutConfig(columns=12, items=[LayoutItem(node_id="a", x=0, y=0, w=6, h=2)])
        assert layout.get_item("a").w == 6
        assert layout.get_item("missing") is None

    def test_item_index_keeps_first_duplicate(self):
        layout = LayoutConfig(columns=12, items=[
            LayoutItem(node_id="a", x=0, y=0, w=6, h=2),
            LayoutItem(node_id="a", x=6, y=0, w=6, h=2),
        ])
        assert layout.item_index()["a"].x == 0

    def test_missing_columns_rejected(self):
        with pytest.raises(ValidationError):
            LayoutConfig.model_validate({"items": []})


class TestNode:
    """Test Node model."""

    def test_defaults(self):
        node = Node(id="n1", type="text")
        assert node.data == {}

    def test_open_type(self):
        assert Node(id="n1", type="anything").type == "anything"


class TestLayoutPair:
    """Test versioned and legacy pair models."""

    def _pair(self) -> MasterDerivedLayouts:
        return MasterDerivedLayouts(
            desktop=MasterLayout(data=LayoutConfig.empty(12), last_modified=TS),
            mobile=DerivedLayout(data=LayoutConfig.empty(4), last_modified=TS),
        )

    def test_discriminators(self):
        pair = self._pair()
        assert pair.master.type == "master"
        assert pair.derived.type == "derived"
        assert pair.derived.is_generated is False
        assert pair.derived.has_customizations is False
        assert pair.derived.generated_from_hash is None

    def test_to_dict_camel_case(self):
        data = self._pair().to_dict()
        assert data["desktop"]["lastModified"] == TS
        assert data["mobile"]["isGenerated"] is False
        assert data["mobile"]["hasCustomizations"] is False
        assert "generatedFromHash" not in data["mobile"]
        assert data["mobile"]["data"]["gridSettings"] == {"columns": 4}

    def test_round_trip(self):
        pair = self._pair()
        assert MasterDerivedLayouts.model_validate(pair.to_dict()) == pair

    def test_wrong_discriminator_rejected(self):
        data = self._pair().to_dict()
        data["desktop"]["type"] = "derived"
        with pytest.raises(ValidationError):
            MasterDerivedLayouts.model_validate(data)

    def test_layout_for(self):
        pair = self._pair()
        assert pair.layout_for(Viewport.DESKTOP).columns == 12
        assert pair.layout_for("mobile").columns == 4

    def test_legacy_pair(self):
        legacy = LegacyLayouts(desktop=LayoutConfig.empty(12), mobile=LayoutConfig.empty(4))
        assert legacy.to_dict() == {
            "desktop": {"gridSettings": {"columns": 12}, "items": []},
            "mobile": {"gridSettings": {"columns": 4}, "items": []},
        }
