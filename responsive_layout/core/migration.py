"""Master/derived layout creation and legacy migration.

Stored documents come in two shapes:
- Versioned: ``{desktop: {type: "master", ...}, mobile: {type: "derived", ...}}``
- Legacy: ``{desktop: LayoutConfig, mobile: LayoutConfig}``

Legacy pairs are migrated once, at load time. The mobile side of a legacy
pair is assumed to carry manual work, so it is marked as customized and is
never silently regenerated.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Union

from pydantic import TypeAdapter, ValidationError

from responsive_layout.config.settings import get_settings
from responsive_layout.models.layout import LayoutConfig
from responsive_layout.models.layout_pair import (
    DerivedLayout,
    LegacyLayouts,
    MasterDerivedLayouts,
    MasterLayout,
)

from .fingerprint import generate_layout_hash
from .validation import InvalidLayoutPayloadError

logger = logging.getLogger(__name__)

PairLike = Union[MasterDerivedLayouts, LegacyLayouts, Mapping[str, Any]]

_LAYOUTS_ADAPTER = TypeAdapter(Union[MasterDerivedLayouts, LegacyLayouts])


def utc_now() -> str:
    """Current time as an ISO 8601 UTC string."""
    return datetime.now(timezone.utc).isoformat()


def _discriminator(side: Any) -> Optional[str]:
    if isinstance(side, (MasterLayout, DerivedLayout)):
        return side.type
    if isinstance(side, Mapping):
        return side.get("type")
    return None


def is_versioned(pair: PairLike) -> bool:
    """
    Check whether a layout pair uses the versioned master/derived format.

    Args:
        pair: Layout pair model or raw stored payload

    Returns:
        True if desktop is tagged "master" and mobile is tagged "derived"
    """
    if isinstance(pair, MasterDerivedLayouts):
        return True
    if isinstance(pair, LegacyLayouts):
        return False
    if isinstance(pair, Mapping):
        return (
            _discriminator(pair.get("desktop")) == "master"
            and _discriminator(pair.get("mobile")) == "derived"
        )
    return False


def parse_layouts(raw: Any) -> Union[MasterDerivedLayouts, LegacyLayouts]:
    """
    Validate a stored layouts payload against both known formats.

    Args:
        raw: Payload as loaded by a persistence layer

    Returns:
        MasterDerivedLayouts or LegacyLayouts

    Raises:
        InvalidLayoutPayloadError: If the payload matches neither format
    """
    if isinstance(raw, (MasterDerivedLayouts, LegacyLayouts)):
        return raw
    try:
        return _LAYOUTS_ADAPTER.validate_python(raw)
    except ValidationError as e:
        raise InvalidLayoutPayloadError(
            f"Layouts payload matches neither versioned nor legacy format: {e}"
        ) from e


def create_initial(timestamp: Optional[str] = None) -> MasterDerivedLayouts:
    """
    Create the layout pair of a new document.

    Args:
        timestamp: ISO 8601 timestamp for both sides (defaults to now)

    Returns:
        Empty desktop master and empty, never-generated mobile derived layout
    """
    settings = get_settings()
    now = timestamp or utc_now()
    return MasterDerivedLayouts(
        desktop=MasterLayout(
            data=LayoutConfig.empty(settings.wide_columns),
            last_modified=now,
        ),
        mobile=DerivedLayout(
            data=LayoutConfig.empty(settings.narrow_columns),
            is_generated=False,
            generated_from_hash=None,
            has_customizations=False,
            last_modified=now,
        ),
    )


def migrate_legacy(pair: Union[LegacyLayouts, Mapping[str, Any]], timestamp: Optional[str] = None) -> MasterDerivedLayouts:
    """
    Wrap a legacy flat pair into the versioned format.

    The stored mobile layout is marked generated *and* customized, with the
    current desktop fingerprint as its baseline, so it is never auto-overwritten
    the first time it is touched.

    Args:
        pair: Legacy pair model or raw payload
        timestamp: ISO 8601 timestamp for both sides (defaults to now)

    Returns:
        Versioned layout pair

    Raises:
        InvalidLayoutPayloadError: If the payload is not a valid legacy pair
    """
    try:
        legacy = LegacyLayouts.model_validate(pair)
    except ValidationError as e:
        raise InvalidLayoutPayloadError(f"Legacy layouts payload is malformed: {e}") from e
    now = timestamp or utc_now()
    desktop_hash = generate_layout_hash(legacy.desktop)

    logger.info(
        f"Migrating legacy layouts ({len(legacy.desktop.items)} desktop, "
        f"{len(legacy.mobile.items)} mobile items, master hash {desktop_hash})"
    )
    return MasterDerivedLayouts(
        desktop=MasterLayout(data=legacy.desktop, last_modified=now),
        mobile=DerivedLayout(
            data=legacy.mobile,
            is_generated=True,
            generated_from_hash=desktop_hash,
            has_customizations=True,
            last_modified=now,
        ),
    )


def ensure_versioned(pair: PairLike, timestamp: Optional[str] = None) -> MasterDerivedLayouts:
    """
    Return a versioned pair, migrating legacy input.

    Args:
        pair: Versioned or legacy pair, as a model or raw payload
        timestamp: Timestamp used if a migration happens

    Returns:
        The input unchanged if already versioned, otherwise its migration

    Raises:
        InvalidLayoutPayloadError: If a raw payload matches neither format
    """
    if isinstance(pair, MasterDerivedLayouts):
        return pair
    parsed = parse_layouts(pair)
    if isinstance(parsed, MasterDerivedLayouts):
        return parsed
    return migrate_legacy(parsed, timestamp=timestamp)


def load_layouts(raw: Any, timestamp: Optional[str] = None) -> MasterDerivedLayouts:
    """
    Load a stored payload of either format as a versioned pair.

    Raises:
        InvalidLayoutPayloadError: If the payload matches neither format
    """
    return ensure_versioned(parse_layouts(raw), timestamp=timestamp)


def to_legacy(pair: PairLike) -> LegacyLayouts:
    """
    Strip versioning metadata for consumers that only read two flat layouts.

    Args:
        pair: Versioned or legacy pair

    Returns:
        LegacyLayouts with the desktop and mobile grid layouts
    """
    parsed = parse_layouts(pair)
    if isinstance(parsed, LegacyLayouts):
        return parsed
    return LegacyLayouts(desktop=parsed.desktop.data, mobile=parsed.mobile.data)


__all__ = [
    "utc_now",
    "is_versioned",
    "parse_layouts",
    "create_initial",
    "migrate_legacy",
    "ensure_versioned",
    "load_layouts",
    "to_legacy",
]
