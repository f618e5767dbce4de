"""Settings shared by the solver, the loader, and the CLI.

Edit the constants here (or set the matching environment variables) to change
how puzzles are read and how much the solver reports.
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

# ==== Puzzle encoding ======================================================

# Category name -> plural key used for its universe in puzzle JSON.
CATEGORY_KEYS: Dict[str, str] = {
    "Color": "colors",
    "Nationality": "nationalities",
    "Drink": "drinks",
    "Smoke": "smokes",
    "Pet": "pets",
}

# Optional key holding extra categories: {"Music": ["jazz", ...], ...}
EXTRA_CATEGORIES_KEY: str = "categories"

# Written for a category that is not resolved on a house.
UNKNOWN_VALUE: str = "*"

# File types the CLI picks up when given a directory.
PUZZLE_SUFFIXES: Tuple[str, ...] = (".json", ".jsonl", ".parquet")

# ==== Logging / tracing ====================================================

DEFAULT_LOG_LEVEL: str = os.environ.get("ZEBRA_LOG_LEVEL", "INFO")

# Record solver steps in the global tracer ("0" disables it).
TRACE_ENABLED: bool = os.environ.get("ZEBRA_TRACE", "1") != "0"

# ==== Search ===============================================================

# Maximum branching depth; None means unbounded.
MAX_SEARCH_DEPTH: Optional[int] = None
