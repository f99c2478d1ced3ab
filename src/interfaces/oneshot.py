"""One-shot interface: run a single query, print actions, exit."""

from __future__ import annotations

from src.core.bootstrap import create_plugin
from src.interfaces.formatting import format_fallback, format_match
from src.websearch.plugin import WebsearchPlugin


def run_oneshot(query: str, open_top: bool = False, plugin: WebsearchPlugin | None = None) -> int:
    if not query or not query.strip():
        print("Error: query must not be empty")
        return 2

    plugin = plugin or create_plugin()
    try:
        matches = plugin.handle_query(query)
        if matches:
            for i, ranked in enumerate(matches, 1):
                print(format_match(i, ranked))
            top = matches[0].action
        else:
            actions = plugin.fallbacks(query)
            if not actions:
                print("No matching search engine")
                return 1
            for i, action in enumerate(actions, 1):
                print(format_fallback(i, action))
            top = actions[0]
        if open_top:
            top.activate()
        return 0
    finally:
        plugin.close()


def main(query: str, open_top: bool = False) -> int:
    return run_oneshot(query=query, open_top=open_top)
