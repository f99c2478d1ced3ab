"""Websearch: trigger matching and fallback actions over configured search engines."""

from src.websearch.matcher import fallbacks, match, rank
from src.websearch.models import Action, RankedAction
from src.websearch.plugin import WebsearchPlugin
from src.websearch.registry import EngineRegistry
from src.websearch.store import EngineStore

__all__ = [
    "Action",
    "EngineRegistry",
    "EngineStore",
    "RankedAction",
    "WebsearchPlugin",
    "fallbacks",
    "match",
    "rank",
]
