"""Result models produced by the query matcher and fallback selector."""

from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Action:
    """A renderable websearch action. Activating it opens `url`."""

    id: str
    text: str
    subtext: str
    completion: str
    url: str
    icon_urls: tuple[str, ...] = ()
    on_activate: Callable[[], None] | None = field(default=None, compare=False, repr=False)

    def activate(self) -> None:
        if self.on_activate is not None:
            self.on_activate()


@dataclass(frozen=True)
class RankedAction:
    """An action paired with its match score."""

    action: Action
    score: float
