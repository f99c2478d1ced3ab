"""Bundled seed engines used on first run and by restore-defaults."""

import json
from collections.abc import Collection
from pathlib import Path

from src.contracts.websearch_v1 import SearchEngine, engine_from_record
from src.websearch.constants import DEFAULT_ENGINES_RESOURCE

RESOURCES_DIR = Path(__file__).parent / "resources"


def load_default_engines(taken_ids: Collection[str] = ()) -> list[SearchEngine]:
    """Read the seed list, giving every engine a fresh id.

    Seed records always carry an explicit `fallback`, so no legacy default
    applies here.
    """
    path = RESOURCES_DIR / DEFAULT_ENGINES_RESOURCE
    records = json.loads(path.read_text(encoding="utf-8"))
    taken = set(taken_ids)
    engines = []
    for record in records:
        record = {k: v for k, v in record.items() if k not in ("id", "guid")}
        engine = engine_from_record(record, default_fallback=False, taken_ids=taken)
        taken.add(engine.id)
        engines.append(engine)
    return engines
