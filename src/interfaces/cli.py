"""CLI interface: query loop, colors, /help /engines /open /defaults /quit."""

import readline  # noqa: F401  (line editing for input())

from src.core.bootstrap import create_plugin
from src.core.logger import logger
from src.interfaces.formatting import (
    Colors,
    colorize,
    format_engine,
    format_fallback,
    format_match,
)
from src.websearch.models import Action
from src.websearch.plugin import WebsearchPlugin


def print_help():
    help_text = """
    ╭──────────────────────────────────────────╮
    │  Commands                                │
    ├──────────────────────────────────────────┤
    │  /help      - Show this help             │
    │  /engines   - List search engines        │
    │  /open N    - Open result N of last query│
    │  /defaults  - Restore default engines    │
    │  /quit      - Exit                       │
    ╰──────────────────────────────────────────╯
    Anything else is a query, e.g. "gg python" or "wiki launcher".
    """
    print(colorize(help_text, Colors.CYAN))


def print_engines(plugin: WebsearchPlugin):
    for engine in plugin.engines:
        print(format_engine(engine))


def show_query(plugin: WebsearchPlugin, query: str) -> list[Action]:
    """Print matches, or fallbacks when nothing matched. Returns what was shown."""
    matches = plugin.handle_query(query)
    if matches:
        for i, ranked in enumerate(matches, 1):
            print(format_match(i, ranked))
        return [r.action for r in matches]
    actions = plugin.fallbacks(query)
    if not actions:
        print(colorize("  No matching search engine", Colors.DIM))
        return []
    print(colorize("  No trigger matched, fallbacks:", Colors.DIM))
    for i, action in enumerate(actions, 1):
        print(format_fallback(i, action))
    return actions


def open_result(shown: list[Action], argument: str) -> None:
    try:
        index = int(argument) - 1
    except ValueError:
        print(colorize("  Usage: /open N", Colors.RED))
        return
    if not 0 <= index < len(shown):
        print(colorize(f"  No result {argument}", Colors.RED))
        return
    action = shown[index]
    print(colorize(f"  Opening {action.url}", Colors.GREEN))
    action.activate()


def run_cli(plugin: WebsearchPlugin | None = None):
    plugin = plugin or create_plugin()
    print(colorize("  Websearch  (type /help for commands)\n", Colors.MAGENTA, Colors.BOLD))
    shown: list[Action] = []
    try:
        while True:
            try:
                user_input = input(colorize("\n❯ ", Colors.GREEN, Colors.BOLD))
            except EOFError:
                break
            if not user_input.strip():
                continue
            command, _, argument = user_input.strip().partition(" ")
            command = command.lower()

            if command == "/help":
                print_help()
                continue

            if command == "/engines":
                print_engines(plugin)
                continue

            if command == "/open":
                open_result(shown, argument.strip())
                continue

            if command == "/defaults":
                plugin.registry.restore_defaults()
                print(colorize("  Default engines restored ✨", Colors.YELLOW))
                continue

            if command in ("/quit", "/exit", "/q"):
                break

            shown = show_query(plugin, user_input)
    except KeyboardInterrupt:
        print()
        logger.info("Interrupted")
    finally:
        plugin.close()
