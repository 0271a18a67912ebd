from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional, Tuple

log = logging.getLogger(__name__)

# (min, max) per numeric field, matching the width of the input fields
FIELD_LIMITS: Dict[str, Tuple[int, int]] = {
    "focus_min": (1, 999),
    "short_break_min": (1, 999),
    "long_break_min": (1, 999),
    "long_break_interval": (1, 99),
}

BOOL_FIELDS = ("auto_transition", "dark_mode")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """Committed configuration. Replaced as a whole, never mutated."""
    focus_min: int = 25
    short_break_min: int = 5
    long_break_min: int = 15
    long_break_interval: int = 4
    auto_transition: bool = True
    dark_mode: bool = True


DEFAULT_SETTINGS = Settings()


@dataclass
class DraftSettings:
    focus_min: int = 25
    short_break_min: int = 5
    long_break_min: int = 15
    long_break_interval: int = 4
    auto_transition: bool = True
    dark_mode: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "DraftSettings":
        return cls(**asdict(settings))


def field_names() -> Tuple[str, ...]:
    return tuple(f.name for f in fields(Settings))


def coerce_int(raw: Any, field: str) -> Optional[int]:
    """Parse raw input for a numeric field, None if it is unusable."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if not raw.is_integer():
            return None
        value = int(raw)
    else:
        try:
            value = int(str(raw).strip())
        except ValueError:
            return None

    lo, hi = FIELD_LIMITS[field]
    if value < lo or value > hi:
        return None
    return value


def coerce_bool(raw: Any) -> Optional[bool]:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    return None


def coerce_field(field: str, raw: Any) -> Optional[Any]:
    if field in FIELD_LIMITS:
        return coerce_int(raw, field)
    if field in BOOL_FIELDS:
        return coerce_bool(raw)
    raise ValueError(f"unknown settings field: {field!r}")


class SettingsStore:
    """Committed settings plus at most one open draft."""

    def __init__(self, settings: Settings = DEFAULT_SETTINGS):
        self._settings = settings
        self._draft: Optional[DraftSettings] = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def draft(self) -> Optional[DraftSettings]:
        return self._draft

    @property
    def editing(self) -> bool:
        return self._draft is not None

    def begin_edit(self) -> DraftSettings:
        # a new edit session replaces whatever draft was still open
        self._draft = DraftSettings.from_settings(self._settings)
        return self._draft

    def update_draft_field(self, field: str, raw: Any) -> bool:
        """Apply raw input to the open draft.

        Returns True if the draft changed. Unparseable or out-of-range input
        leaves the field at its current draft value.
        """
        value = coerce_field(field, raw)
        if self._draft is None:
            log.warning("ignoring edit of %s: no draft open", field)
            return False
        if value is None:
            log.debug("rejected %r for %s, keeping %r", raw, field,
                      getattr(self._draft, field))
            return False
        setattr(self._draft, field, value)
        return True

    def commit(self, draft: Optional[DraftSettings] = None) -> Settings:
        draft = draft if draft is not None else self._draft
        if draft is None:
            return self._settings

        # Build the full replacement first, then swap in one assignment.
        # Fields that were poked into an invalid state fall back to the
        # currently committed value.
        values = {}
        for name in field_names():
            value = coerce_field(name, getattr(draft, name))
            if value is None:
                value = getattr(self._settings, name)
            values[name] = value

        self._settings = Settings(**values)
        self._draft = None
        log.info("settings committed: %s", values)
        return self._settings

    def discard(self):
        self._draft = None
