"""Action builder: turns an engine and a search term into an openable action."""

import logging
import webbrowser
from collections.abc import Callable
from urllib.parse import quote

from src.contracts.websearch_v1 import URL_PLACEHOLDER, SearchEngine
from src.websearch.models import Action

logger = logging.getLogger(__name__)

UrlOpener = Callable[[str], object]


def resolve_url(template: str, term: str) -> str:
    """Substitute the percent-encoded term for every '%s' in the template."""
    return template.replace(URL_PLACEHOLDER, quote(term, safe=""))


def open_url(url: str) -> bool:
    """Open a URL in the desktop's default browser."""
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as e:
        logger.warning("Could not open %s: %s", url, e)
        return False
    if not opened:
        logger.warning("No browser available to open %s", url)
    return opened


def build_action(
    engine: SearchEngine, term: str, opener: UrlOpener = open_url
) -> Action:
    url = resolve_url(engine.url, term)

    def _run() -> None:
        logger.info("Opening %s for engine %s", url, engine.id)
        opener(url)

    return Action(
        id=engine.id,
        text=engine.name,
        subtext=f"Search {engine.name} for '{term}'",
        completion=f"{engine.name} {term}",
        url=url,
        icon_urls=(f"xdg:{engine.name.lower()}", engine.icon_reference),
        on_activate=_run,
    )
