"""Shared constants for query matching and engine persistence."""

# Score of a fully typed keyword; partial prefixes scale linearly below it.
MAX_SCORE = 1.0

# Search term shown for fallback actions built without a query
EMPTY_TERM_PLACEHOLDER = "…"

ENGINES_FILE_NAME = "engines.json"
DEFAULT_ENGINES_RESOURCE = "default_engines.json"

# Bundled icons are scaled to fit this box before they are stored
ICON_SIZE = (256, 256)
