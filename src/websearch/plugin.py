"""Websearch plugin: the query-handler and fallback-provider face of the registry."""

import time

from src.core.logger import logger as event_logger
from src.websearch.actions import UrlOpener, open_url
from src.websearch.icons import IconCache
from src.websearch.matcher import fallbacks, match, rank
from src.websearch.models import Action, RankedAction
from src.websearch.registry import EngineRegistry, EnginesSnapshot


class WebsearchPlugin:
    """Answers queries against the registry's current snapshot."""

    name = "Websearch"

    def __init__(self, registry: EngineRegistry, opener: UrlOpener = open_url) -> None:
        self.registry = registry
        self.icons = IconCache()
        self._opener = opener
        self._unsubscribe = registry.subscribe(self.icons.clear)

    @property
    def engines(self) -> EnginesSnapshot:
        return self.registry.engines

    def triggers(self) -> list[str]:
        return [f"{e.trigger} " for e in self.registry.engines if e.trigger]

    def handle_query(self, query: str) -> list[RankedAction]:
        """Trigger matches sorted by score, best first."""
        start = time.perf_counter()
        snapshot = self.registry.engines
        results = rank(match(query, snapshot, self._opener))
        event_logger.query_handled(query, len(results), 0, time.perf_counter() - start)
        return results

    def fallbacks(self, query: str) -> list[Action]:
        start = time.perf_counter()
        results = fallbacks(query, self.registry.engines, self._opener)
        event_logger.query_handled(query, 0, len(results), time.perf_counter() - start)
        return results

    def icon_for(self, action: Action) -> str | None:
        """First resolvable icon of an action, cached per reference."""
        for reference in action.icon_urls:
            if reference.startswith("xdg:"):
                continue
            resolved = self.icons.get(reference)
            if resolved:
                return resolved
        return None

    def close(self) -> None:
        self._unsubscribe()
