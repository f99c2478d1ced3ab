"""Websearch contract v1: the search engine record and its persisted form."""

from src.contracts.websearch_v1 import (
    SearchEngine,
    engine_from_record,
    engine_to_record,
    new_engine_id,
)

__all__ = [
    "SearchEngine",
    "engine_from_record",
    "engine_to_record",
    "new_engine_id",
]
