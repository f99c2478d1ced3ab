"""Websearch Contract v1.

Defines the canonical types for:
  - A configured search engine (SearchEngine)
  - The persisted engine record (engine_from_record / engine_to_record)

Engines are immutable values. Every edit produces a new SearchEngine and the
registry publishes a new snapshot.

Contract v1.1: Added the per-engine fallback flag. Records written before it
existed carry no `fallback` key and are read with a caller-chosen default.
"""

from __future__ import annotations

import uuid
from collections.abc import Collection
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_ICON = ":default"
TRIGGER_SPACE_GLYPH = "•"
URL_PLACEHOLDER = "%s"

# Legacy record keys, newest first
_LEGACY_ID_KEYS = ("guid",)
_LEGACY_ICON_KEYS = ("iconUrl", "iconPath")


def new_engine_id(taken: Collection[str] = ()) -> str:
    """Short random id, regenerated until it does not collide with `taken`."""
    while True:
        engine_id = uuid.uuid4().hex[:8]
        if engine_id not in taken:
            return engine_id


# ---------------------------------------------------------------------------
# Search engine
# ---------------------------------------------------------------------------


class SearchEngine(BaseModel):
    """One configured search engine."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Stable identifier, survives renames")
    name: str = Field(description="Display name, also matched as a keyword")
    trigger: str = Field(default="", description="Short keyword, e.g. 'gg'")
    url: str = Field(description="URL template, '%s' is replaced by the search term")
    icon_reference: str = Field(
        default=DEFAULT_ICON,
        description="file: URL, absolute path or bundled resource id like ':google'",
    )
    fallback: bool = Field(default=False, description="Offer as a fallback action")

    @field_validator("id")
    @classmethod
    def _id_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("id must not be empty")
        return v

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name must not be empty")
        return v

    @field_validator("trigger")
    @classmethod
    def _strip_trigger(cls, v: str) -> str:
        return (v or "").strip()

    def keywords(self) -> list[str]:
        """Lower-cased match keywords with a trailing separator, shortest first.

        The sort is stable so the trigger wins a length tie with the name. An
        empty trigger still yields the one-character keyword " ".
        """
        candidates = [f"{self.trigger.lower()} ", f"{self.name.lower()} "]
        return sorted(candidates, key=len)

    def display_trigger(self) -> str:
        return self.trigger.replace(" ", TRIGGER_SPACE_GLYPH)


# ---------------------------------------------------------------------------
# Persisted record
# ---------------------------------------------------------------------------


def _string_field(data: dict[str, Any], *keys: str) -> str | None:
    for key in keys:
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def is_legacy_record(data: dict[str, Any]) -> bool:
    """True when a record needs rewriting in the current format."""
    return (
        not isinstance(data.get("id"), str)
        or not data.get("id")
        or "fallback" not in data
        or "icon_reference" not in data
    )


def engine_from_record(
    data: dict[str, Any],
    default_fallback: bool = True,
    taken_ids: Collection[str] = (),
) -> SearchEngine:
    """Build a SearchEngine from a persisted record, defaulting missing fields.

    Raises ValueError (pydantic ValidationError) only when the record has no
    usable name.
    """
    engine_id = _string_field(data, "id", *_LEGACY_ID_KEYS) or new_engine_id(taken_ids)
    fallback = data.get("fallback", default_fallback)
    return SearchEngine(
        id=engine_id,
        name=_string_field(data, "name") or "",
        trigger=_string_field(data, "trigger") or "",
        url=_string_field(data, "url") or "",
        icon_reference=_string_field(data, "icon_reference", *_LEGACY_ICON_KEYS)
        or DEFAULT_ICON,
        fallback=fallback if isinstance(fallback, bool) else default_fallback,
    )


def engine_to_record(engine: SearchEngine) -> dict[str, Any]:
    return {
        "id": engine.id,
        "name": engine.name,
        "url": engine.url,
        "trigger": engine.trigger,
        "icon_reference": engine.icon_reference,
        "fallback": engine.fallback,
    }
