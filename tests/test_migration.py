"""Tests for layout pair creation and legacy migration."""

import pytest

from responsive_layout.core.fingerprint import fingerprint
from responsive_layout.core.migration import (
    create_initial,
    ensure_versioned,
    is_versioned,
    load_layouts,
    migrate_legacy,
    parse_layouts,
    to_legacy,
)
from responsive_layout.core.transitions import is_stale, update_master
from responsive_layout.core.validation import InvalidLayoutPayloadError
from responsive_layout.models.layout import LayoutConfig, LayoutItem
from responsive_layout.models.layout_pair import LegacyLayouts, MasterDerivedLayouts

TS = "2024-05-01T12:00:00+00:00"


@pytest.fixture
def desktop():
    return LayoutConfig(columns=12, items=[
        LayoutItem(node_id="h1", x=0, y=0, w=12, h=4),
        LayoutItem(node_id="t1", x=0, y=6, w=8, h=8),
    ])


@pytest.fixture
def mobile():
    return LayoutConfig(columns=4, items=[
        LayoutItem(node_id="t1", x=0, y=0, w=4, h=12),
        LayoutItem(node_id="h1", x=0, y=14, w=4, h=2),
    ])


@pytest.fixture
def legacy_dict(desktop, mobile):
    return {"desktop": desktop.to_dict(), "mobile": mobile.to_dict()}


class TestCreateInitial:
    """Test new-document layout pairs."""

    def test_empty_pair(self):
        pair = create_initial(timestamp=TS)
        assert pair.desktop.data == LayoutConfig.empty(12)
        assert pair.mobile.data == LayoutConfig.empty(4)
        assert pair.mobile.is_generated is False
        assert pair.mobile.has_customizations is False
        assert pair.mobile.generated_from_hash is None
        assert pair.desktop.last_modified == pair.mobile.last_modified == TS

    def test_default_timestamp(self):
        pair = create_initial()
        assert pair.desktop.last_modified.endswith("+00:00")

    def test_initial_is_stale(self):
        assert is_stale(create_initial()) is True


class TestIsVersioned:
    """Test format detection."""

    def test_models(self, desktop, mobile):
        assert is_versioned(create_initial()) is True
        assert is_versioned(LegacyLayouts(desktop=desktop, mobile=mobile)) is False

    def test_raw_payloads(self, legacy_dict):
        assert is_versioned(create_initial().to_dict()) is True
        assert is_versioned(legacy_dict) is False

    def test_partial_discriminators(self):
        data = create_initial().to_dict()
        data["mobile"].pop("type")
        assert is_versioned(data) is False

    def test_garbage(self):
        assert is_versioned({}) is False
        assert is_versioned(None) is False


class TestMigrateLegacy:
    """Test legacy migration."""

    def test_conservative_customization(self, legacy_dict, desktop, mobile):
        pair = migrate_legacy(legacy_dict, timestamp=TS)

        assert isinstance(pair, MasterDerivedLayouts)
        assert pair.desktop.data == desktop
        assert pair.mobile.data == mobile
        assert pair.mobile.is_generated is True
        assert pair.mobile.has_customizations is True
        assert pair.mobile.generated_from_hash == fingerprint(desktop)
        assert pair.desktop.last_modified == TS

    def test_from_model(self, desktop, mobile):
        pair = migrate_legacy(LegacyLayouts(desktop=desktop, mobile=mobile))
        assert pair.mobile.has_customizations is True

    def test_migrated_mobile_never_stale(self, legacy_dict):
        """Master edits after migration do not mark the kept mobile layout stale."""
        pair = migrate_legacy(legacy_dict)
        changed = update_master(pair, LayoutConfig.empty(12))
        assert is_stale(pair) is False
        assert is_stale(changed) is False


class TestEnsureVersioned:
    """Test ensure_versioned."""

    def test_identity_on_versioned(self):
        pair = create_initial()
        assert ensure_versioned(pair) is pair

    def test_versioned_dict_parsed(self):
        pair = create_initial(timestamp=TS)
        assert ensure_versioned(pair.to_dict()) == pair

    def test_legacy_migrated(self, legacy_dict):
        pair = ensure_versioned(legacy_dict, timestamp=TS)
        assert pair.mobile.has_customizations is True
        assert pair.desktop.last_modified == TS

    def test_malformed_payload(self):
        with pytest.raises(InvalidLayoutPayloadError, match="neither versioned nor legacy"):
            ensure_versioned({"desktop": {"foo": 1}, "mobile": {}})

    def test_malformed_payload_through_transitions(self, desktop):
        with pytest.raises(InvalidLayoutPayloadError):
            update_master({"desktop": {"foo": 1}}, desktop)

    def test_malformed_legacy_migration(self):
        with pytest.raises(InvalidLayoutPayloadError, match="Legacy layouts payload is malformed"):
            migrate_legacy({"desktop": {"gridSettings": {"columns": 12}, "items": []}})


class TestParseLayouts:
    """Test payload validation against both formats."""

    def test_versioned(self):
        pair = create_initial(timestamp=TS)
        assert parse_layouts(pair.to_dict()) == pair

    def test_legacy(self, legacy_dict, desktop):
        parsed = parse_layouts(legacy_dict)
        assert isinstance(parsed, LegacyLayouts)
        assert parsed.desktop == desktop

    def test_invalid_payload(self):
        with pytest.raises(InvalidLayoutPayloadError, match="neither versioned nor legacy"):
            parse_layouts({"desktop": {"foo": 1}})

    def test_invalid_is_value_error(self):
        with pytest.raises(ValueError):
            load_layouts("not a payload")

    def test_load_layouts(self, legacy_dict):
        pair = load_layouts(legacy_dict, timestamp=TS)
        assert pair.mobile.has_customizations is True
        assert load_layouts(pair.to_dict()) == pair


class TestToLegacy:
    """Test stripping versioning metadata."""

    def test_strip(self, legacy_dict, desktop, mobile):
        legacy = to_legacy(migrate_legacy(legacy_dict))
        assert legacy == LegacyLayouts(desktop=desktop, mobile=mobile)
        assert legacy.to_dict() == legacy_dict

    def test_legacy_passthrough(self, desktop, mobile):
        legacy = LegacyLayouts(desktop=desktop, mobile=mobile)
        assert to_legacy(legacy) is legacy

    def test_from_versioned_dict(self):
        legacy = to_legacy(create_initial().to_dict())
        assert legacy.desktop.columns == 12
        assert legacy.mobile.columns == 4
