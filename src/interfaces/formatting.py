"""Terminal rendering shared by the CLI and one-shot interfaces."""

from src.contracts.websearch_v1 import SearchEngine
from src.websearch.models import Action, RankedAction


class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    MAGENTA = "\033[35m"


def colorize(text: str, *colors: str) -> str:
    color_codes = "".join(colors)
    return f"{color_codes}{text}{Colors.RESET}"


def format_match(index: int, ranked: RankedAction) -> str:
    action = ranked.action
    score = f"{ranked.score:.2f}"
    return f"  {index:>2}. {action.text:<16} {score}  {action.subtext}  {action.url}"


def format_fallback(index: int, action: Action) -> str:
    return f"  {index:>2}. {action.text:<16} --    {action.subtext}  {action.url}"


def format_engine(engine: SearchEngine) -> str:
    fallback = "F" if engine.fallback else "-"
    trigger = engine.display_trigger() or "—"
    return f"  {engine.id}  {fallback}  {trigger:<8} {engine.name:<16} {engine.url}"
