import os
import tempfile
from pathlib import Path

import pytest

# Keep the event log out of the working tree; must run before src imports.
os.environ.setdefault("WEBSEARCH_LOGS_DIR", tempfile.mkdtemp(prefix="websearch-logs-"))

from src.contracts.websearch_v1 import SearchEngine  # noqa: E402
from src.websearch.registry import EngineRegistry  # noqa: E402
from src.websearch.store import EngineStore  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "property: property-based deterministic tests")


def _make_engine(
    name: str,
    trigger: str = "",
    url: str | None = None,
    fallback: bool = False,
    engine_id: str | None = None,
    icon_reference: str = ":default",
) -> SearchEngine:
    return SearchEngine(
        id=engine_id or name.lower().replace(" ", "")[:8],
        name=name,
        trigger=trigger,
        url=url or f"https://{name.lower().replace(' ', '')}.example/search?q=%s",
        icon_reference=icon_reference,
        fallback=fallback,
    )


@pytest.fixture
def make_engine():
    return _make_engine


@pytest.fixture
def google() -> SearchEngine:
    return _make_engine(
        "Google", "gg", "https://google.com/search?q=%s", fallback=True, engine_id="g0"
    )


@pytest.fixture
def engines_file(tmp_path: Path) -> Path:
    return tmp_path / "config" / "engines.json"


@pytest.fixture
def store(engines_file: Path) -> EngineStore:
    return EngineStore(engines_file, default_fallback=True)


@pytest.fixture
def registry(store: EngineStore, tmp_path: Path) -> EngineRegistry:
    return EngineRegistry(store, icons_dir=tmp_path / "icons")


@pytest.fixture
def opened() -> list[str]:
    return []


@pytest.fixture
def opener(opened: list[str]):
    return opened.append
