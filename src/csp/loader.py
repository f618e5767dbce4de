import json
import os
from typing import Any, Dict, List

import pandas as pd

from src.utils.logging_utils import get_logger

logger = get_logger()


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads puzzle records from a file. Handles .json, .jsonl and .parquet formats.
    Returns a list of raw puzzle dictionaries, each with an "id".
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    def _plain(value: Any) -> Any:
        # Parquet cells come back as numpy arrays / scalars.
        if isinstance(value, dict):
            return {k: _plain(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [_plain(v) for v in value]
        if hasattr(value, "tolist"):
            return _plain(value.tolist())
        return value

    def _normalize_records(records: List[Any]) -> List[Dict[str, Any]]:
        data = []
        for idx, record in enumerate(records):
            if not isinstance(record, dict):
                continue
            record = _plain(record)
            if not record.get("id"):
                record["id"] = f"row_{idx}"
            data.append(record)
        return data

    def _read_json_lines() -> List[Any]:
        rows = []
        with open(file_path, "r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    rows.append(json.loads(line))
                except json.JSONDecodeError:
                    logger.warning("Skipping malformed line %d in %s", lineno, file_path)
        return rows

    # Case 1: Parquet File (Binary)
    if file_path.endswith(".parquet"):
        df = pd.read_parquet(file_path)
        # Missing cells are NaN; drop them so the parser sees absent keys.
        records = [
            {k: v for k, v in row.items() if not _is_missing(v)}
            for row in df.to_dict(orient="records")
        ]
        return _normalize_records(records)

    # Case 2: JSON File (array or object)
    if file_path.endswith(".json"):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL; fall back to line-delimited parsing.
            return _normalize_records(_read_json_lines())
        if isinstance(payload, list):
            return _normalize_records(payload)
        if isinstance(payload, dict):
            return _normalize_records([payload])
        return []

    # Case 3: JSONL File (Text)
    return _normalize_records(_read_json_lines())


def _is_missing(value: Any) -> bool:
    if isinstance(value, float):
        return pd.isna(value)
    return value is None
