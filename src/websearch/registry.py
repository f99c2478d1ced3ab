"""Engine registry: the sorted, persisted engine list.

Every mutation builds a new list and hands it to set_engines(), which sorts it
by name, persists it and publishes it to subscribers as an immutable tuple.
Snapshots already handed out are never modified.
"""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from src.contracts.websearch_v1 import DEFAULT_ICON, SearchEngine, new_engine_id
from src.core.logger import logger as event_logger
from src.websearch.defaults import load_default_engines
from src.websearch.icons import commit_icon, discard_icon, is_local_icon, stage_icon
from src.websearch.store import EngineStore

logger = logging.getLogger(__name__)

EnginesSnapshot = tuple[SearchEngine, ...]
Subscriber = Callable[[EnginesSnapshot], None]


class EngineRegistry:
    """Owns the engine snapshot and the rules for changing it."""

    def __init__(
        self,
        store: EngineStore,
        icons_dir: Path | None = None,
        engines: Iterable[SearchEngine] = (),
    ) -> None:
        self._store = store
        self._icons_dir = icons_dir
        self._engines: EnginesSnapshot = self._sorted(engines)
        self._subscribers: list[Subscriber] = []

    @classmethod
    def open(cls, store: EngineStore, icons_dir: Path | None = None) -> "EngineRegistry":
        """Load from the store, seeding defaults when nothing is stored yet."""
        loaded = store.load()
        if loaded is None:
            registry = cls(store, icons_dir)
            registry.restore_defaults()
            event_logger.engines_loaded(str(store.path), len(registry.engines), seeded=True)
            return registry
        registry = cls(store, icons_dir, loaded.engines)
        if loaded.migrated:
            logger.info("Rewriting %s in the current format", store.path)
            store.save(list(registry.engines))
        return registry

    @staticmethod
    def _sorted(engines: Iterable[SearchEngine]) -> EnginesSnapshot:
        return tuple(sorted(engines, key=lambda e: e.name))

    @property
    def engines(self) -> EnginesSnapshot:
        return self._engines

    def get(self, engine_id: str) -> SearchEngine:
        for engine in self._engines:
            if engine.id == engine_id:
                return engine
        raise KeyError(engine_id)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register for new snapshots. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def set_engines(self, engines: Iterable[SearchEngine]) -> EnginesSnapshot:
        snapshot = self._sorted(engines)
        ids = [e.id for e in snapshot]
        if len(ids) != len(set(ids)):
            raise ValueError("engine ids must be unique")
        self._engines = snapshot
        self._store.save(list(snapshot))
        for callback in list(self._subscribers):
            callback(snapshot)
        return snapshot

    def restore_defaults(self) -> EnginesSnapshot:
        # Seeds never reuse an id that is still in use
        return self.set_engines(load_default_engines({e.id for e in self._engines}))

    def add_engine(
        self,
        name: str,
        url: str,
        trigger: str = "",
        fallback: bool = False,
        icon_reference: str = DEFAULT_ICON,
    ) -> SearchEngine:
        engine = SearchEngine(
            id=new_engine_id({e.id for e in self._engines}),
            name=name,
            trigger=trigger,
            url=url,
            icon_reference=icon_reference,
            fallback=fallback,
        )
        self.set_engines([*self._engines, engine])
        return engine

    def remove_engine(self, engine_id: str) -> SearchEngine:
        engine = self.get(engine_id)
        if is_local_icon(engine.icon_reference):
            discard_icon(engine.icon_reference)
        self.set_engines(e for e in self._engines if e.id != engine_id)
        return engine

    def update_engine(self, engine_id: str, **changes: Any) -> SearchEngine:
        """Replace fields of one engine. The id cannot change."""
        if "id" in changes and changes["id"] != engine_id:
            raise ValueError("engine id is immutable")
        changes.pop("id", None)
        current = self.get(engine_id)
        # Re-validate through the constructor; model_copy skips validators
        updated = SearchEngine(**{**current.model_dump(), **changes})
        if (
            updated.icon_reference != current.icon_reference
            and is_local_icon(current.icon_reference)
        ):
            discard_icon(current.icon_reference)
        self.set_engines(updated if e.id == engine_id else e for e in self._engines)
        return updated

    def set_trigger(self, engine_id: str, trigger: str) -> SearchEngine:
        return self.update_engine(engine_id, trigger=trigger)

    def set_fallback(self, engine_id: str, fallback: bool) -> SearchEngine:
        return self.update_engine(engine_id, fallback=fallback)

    def set_icon(self, engine_id: str, image_path: Path) -> SearchEngine | None:
        """Store a user image as the engine icon. Returns None if it can't be saved."""
        if self._icons_dir is None:
            raise ValueError("registry has no icons directory")
        current = self.get(engine_id)
        staged = stage_icon(Path(image_path), engine_id, self._icons_dir)
        if staged is None:
            return None
        # The old icon may be <id>.png itself, so trash it before the move
        if is_local_icon(current.icon_reference):
            discard_icon(current.icon_reference)
        icon_url = commit_icon(staged, engine_id, self._icons_dir)
        if icon_url is None:
            return None
        # Old icon is already handled; skip update_engine's discard
        updated = SearchEngine(**{**current.model_dump(), "icon_reference": icon_url})
        self.set_engines(updated if e.id == engine_id else e for e in self._engines)
        return updated
