"""Engine store: the engine list persisted as a JSON array."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from src.contracts.websearch_v1 import (
    SearchEngine,
    engine_from_record,
    engine_to_record,
    is_legacy_record,
)
from src.core.logger import logger as event_logger

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    engines: list[SearchEngine] = field(default_factory=list)
    migrated: bool = False  # some records were legacy or skipped; rewrite the file


class EngineStore:
    """Reads and writes the engine list. Never raises on I/O problems."""

    def __init__(self, path: Path, default_fallback: bool = True) -> None:
        self.path = Path(path)
        self.default_fallback = default_fallback

    def load(self) -> LoadResult | None:
        """Parsed engines, or None when there is nothing usable (first run)."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("No engines file found at %s", self.path)
            return None
        except OSError as e:
            logger.warning("Could not read engines file %s: %s", self.path, e)
            return None

        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Engines file %s is not valid JSON: %s", self.path, e)
            return None
        if not isinstance(records, list):
            logger.warning("Engines file %s does not hold a list", self.path)
            return None

        result = LoadResult()
        taken: set[str] = set()
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                logger.warning("Skipping engine record %d: not an object", index)
                result.migrated = True
                continue
            try:
                engine = engine_from_record(record, self.default_fallback, taken)
            except ValidationError as e:
                logger.warning("Skipping engine record %d: %s", index, e)
                result.migrated = True
                continue
            if engine.id in taken:
                # Duplicate ids break identity, so the later record gets a new one
                record = {k: v for k, v in record.items() if k not in ("id", "guid")}
                engine = engine_from_record(record, self.default_fallback, taken)
                result.migrated = True
            if is_legacy_record(record):
                result.migrated = True
            taken.add(engine.id)
            result.engines.append(engine)

        event_logger.engines_loaded(str(self.path), len(result.engines))
        return result

    def save(self, engines: list[SearchEngine]) -> bool:
        """Atomically replace the file with the given engines."""
        payload = json.dumps(
            [engine_to_record(e) for e in engines], indent=2, ensure_ascii=False
        )
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload + "\n", encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            event_logger.critical(
                f"Could not write to file: '{self.path}'.", exception=e
            )
            event_logger.engines_saved(str(self.path), len(engines), success=False)
            return False
        event_logger.engines_saved(str(self.path), len(engines), success=True)
        return True
