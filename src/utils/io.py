"""I/O helpers for puzzle files and solver results."""

import json
from pathlib import Path
from typing import Any, Dict

from src.csp.model import PuzzleResult


def load_json(path: Path) -> Any:
    """Load JSON from disk."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def save_json(path: Path, payload: Any) -> None:
    """Write pretty-printed JSON, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
        f.write("\n")


def result_to_dict(result: PuzzleResult) -> Dict[str, Any]:
    """{"houses": [{"position": 1, "color": "red", ...}, ...]} with lower-cased category keys."""
    houses = []
    for house in result.houses:
        record: Dict[str, Any] = {"position": house.position}
        for category, value in house.values.items():
            record[category.lower()] = value
        houses.append(record)
    return {"houses": houses}
