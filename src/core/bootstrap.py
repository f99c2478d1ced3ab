"""Registry and plugin wiring at startup."""

from src.core.config import config
from src.core.logger import logger
from src.websearch.actions import UrlOpener, open_url
from src.websearch.plugin import WebsearchPlugin
from src.websearch.registry import EngineRegistry
from src.websearch.store import EngineStore


def create_registry() -> EngineRegistry:
    for problem in config.validate():
        logger.warning(problem)
    store = EngineStore(config.engines_file, default_fallback=config.legacy_fallback_default)
    return EngineRegistry.open(store, icons_dir=config.icons_dir)


def create_plugin(opener: UrlOpener = open_url) -> WebsearchPlugin:
    return WebsearchPlugin(create_registry(), opener=opener)
