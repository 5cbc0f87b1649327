"""Versioned master/derived layout pair and the legacy flat pair.

A document carries one layout per viewport. The desktop layout is the
*master*: hand-authored and never regenerated from the mobile side. The
mobile layout is *derived*: either generated from the master (and then
fingerprinted against it) or customized by hand.

Both sides carry a ``type`` discriminator (``"master"`` / ``"derived"``) so a
stored payload can be told apart from the legacy ``{desktop, mobile}`` pair of
bare layout configurations, which predates versioning and is only ever read
for migration.
"""

from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field

from .layout import LayoutConfig, Viewport


class MasterLayout(BaseModel):
    """The wide (desktop) layout; source of truth for regeneration.

    Attributes:
        type: Discriminator, always "master"
        data: The desktop grid layout
        last_modified: ISO 8601 timestamp of the last edit
    """

    model_config = {"frozen": True, "populate_by_name": True}

    type: Literal["master"] = Field(default="master", description="Discriminator")
    data: LayoutConfig = Field(..., description="Desktop grid layout")
    last_modified: str = Field(
        ..., alias="lastModified", description="ISO 8601 last modification timestamp"
    )


class DerivedLayout(BaseModel):
    """The narrow (mobile) layout, generated from the master or hand-edited.

    Invariant: while ``is_generated`` is true and ``has_customizations`` is
    false, ``generated_from_hash`` is the master fingerprint at generation time.

    Attributes:
        type: Discriminator, always "derived"
        data: The mobile grid layout
        is_generated: Whether the layout was ever produced by generation
        generated_from_hash: Master fingerprint the layout was generated from
        has_customizations: Whether a human edited the layout
        last_modified: ISO 8601 timestamp of the last change
    """

    model_config = {"frozen": True, "populate_by_name": True}

    type: Literal["derived"] = Field(default="derived", description="Discriminator")
    data: LayoutConfig = Field(..., description="Mobile grid layout")
    is_generated: bool = Field(
        default=False, alias="isGenerated", description="Produced by generation"
    )
    generated_from_hash: Optional[str] = Field(
        default=None, alias="generatedFromHash",
        description="Master fingerprint at generation time",
    )
    has_customizations: bool = Field(
        default=False, alias="hasCustomizations", description="Edited by hand"
    )
    last_modified: str = Field(
        ..., alias="lastModified", description="ISO 8601 last modification timestamp"
    )


class MasterDerivedLayouts(BaseModel):
    """Versioned layout pair: desktop master plus mobile derived layout.

    Treated as an immutable value. Every state transition returns a new pair.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    desktop: MasterLayout = Field(..., description="Master (wide) layout")
    mobile: DerivedLayout = Field(..., description="Derived (narrow) layout")

    @property
    def master(self) -> MasterLayout:
        return self.desktop

    @property
    def derived(self) -> DerivedLayout:
        return self.mobile

    def layout_for(self, viewport: Viewport) -> LayoutConfig:
        """Grid layout of the given viewport."""
        if Viewport(viewport) is Viewport.DESKTOP:
            return self.desktop.data
        return self.mobile.data

    def to_dict(self, exclude_none: bool = True) -> Dict[str, Any]:
        """Export to the persisted camelCase shape.

        Args:
            exclude_none: If True, omit an absent ``generatedFromHash``

        Returns:
            Plain nested dict of strings, numbers and booleans
        """
        return self.model_dump(by_alias=True, exclude_none=exclude_none)


class LegacyLayouts(BaseModel):
    """Pre-versioning flat pair; only read for migration."""

    model_config = {"frozen": True}

    desktop: LayoutConfig = Field(..., description="Desktop grid layout")
    mobile: LayoutConfig = Field(..., description="Mobile grid layout")

    def to_dict(self) -> Dict[str, Any]:
        """Export to the persisted camelCase shape."""
        return self.model_dump(by_alias=True)


# Any stored layouts payload
Layouts = Union[MasterDerivedLayouts, LegacyLayouts]


__all__ = [
    "MasterLayout",
    "DerivedLayout",
    "MasterDerivedLayouts",
    "LegacyLayouts",
    "Layouts",
]
