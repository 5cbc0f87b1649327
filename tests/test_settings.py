"""Tests for engine settings, feature flags, and geometry validation."""

import logging

import pytest

from responsive_layout.config import settings
from responsive_layout.config.settings import (
    EngineSettings,
    get_settings,
    is_enabled,
    set_flag,
)
from responsive_layout.core.validation import (
    LayoutEngineError,
    MalformedLayoutError,
    check_layout_geometry,
    validate_layout_geometry,
)
from responsive_layout.models.layout import LayoutConfig, LayoutItem


@pytest.fixture
def restore_flags():
    saved = dict(settings.FEATURE_FLAGS)
    yield
    settings.FEATURE_FLAGS.clear()
    settings.FEATURE_FLAGS.update(saved)


class TestFeatureFlags:
    """Test feature flag access."""

    def test_debug_assertions_off_by_default(self):
        assert is_enabled('debug_layout_assertions') is False

    def test_unknown_flag(self):
        with pytest.raises(KeyError, match="Unknown feature flag"):
            is_enabled('no_such_flag')

    def test_set_flag(self, restore_flags):
        set_flag('debug_layout_assertions', True)
        assert is_enabled('debug_layout_assertions') is True
        assert settings.FEATURE_FLAGS == {'debug_layout_assertions': True}

    def test_set_unknown_flag(self):
        with pytest.raises(KeyError, match="known: debug_layout_assertions"):
            set_flag('no_such_flag', True)
        assert 'no_such_flag' not in settings.FEATURE_FLAGS


class TestEngineSettings:
    """Test grid constants."""

    def test_defaults(self, monkeypatch):
        for name in ("LAYOUT_WIDE_COLUMNS", "LAYOUT_NARROW_COLUMNS", "LAYOUT_ROW_SPACING"):
            monkeypatch.delenv(name, raising=False)
        assert get_settings() == EngineSettings(
            wide_columns=12, narrow_columns=4, row_spacing=2, default_item_height=4
        )

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("LAYOUT_WIDE_COLUMNS", "24")
        monkeypatch.setenv("LAYOUT_NARROW_COLUMNS", "6")
        monkeypatch.setenv("LAYOUT_ROW_SPACING", "1")

        current = get_settings()
        assert (current.wide_columns, current.narrow_columns, current.row_spacing) == (24, 6, 1)


class TestGeometryValidation:
    """Test debug-only geometry checks."""

    def test_valid_layout(self):
        layout = LayoutConfig(columns=12, items=[LayoutItem(node_id="a", x=6, y=0, w=6, h=1)])
        assert validate_layout_geometry(layout) == []

    def test_problems_listed(self):
        layout = LayoutConfig(columns=4, items=[
            LayoutItem(node_id="a", x=-1, y=0, w=0, h=0),
            LayoutItem(node_id="b", x=2, y=0, w=3, h=2),
        ])
        problems = validate_layout_geometry(layout)
        assert "a: negative origin (-1, 0)" in problems
        assert "a: width 0 < 1" in problems
        assert "a: height 0 < 1" in problems
        assert "b: spans to column 5 of 4" in problems

    def test_check_logs_without_flag(self, caplog):
        layout = LayoutConfig(columns=4, items=[LayoutItem(node_id="a", x=2, y=0, w=3, h=2)])
        with caplog.at_level(logging.WARNING):
            check_layout_geometry(layout, "mobile input")
        assert "Malformed mobile input layout" in caplog.text

    def test_check_raises_with_flag(self, monkeypatch):
        monkeypatch.setitem(settings.FEATURE_FLAGS, 'debug_layout_assertions', True)
        layout = LayoutConfig(columns=4, items=[LayoutItem(node_id="a", x=2, y=0, w=3, h=2)])

        with pytest.raises(MalformedLayoutError) as excinfo:
            check_layout_geometry(layout, "mobile input")

        assert isinstance(excinfo.value, LayoutEngineError)
        assert excinfo.value.context == "mobile input"
        assert excinfo.value.problems == ["a: spans to column 5 of 4"]
