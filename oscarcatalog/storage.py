"""
Persistent storage for parsed catalogs.

A catalog is stored as one JSON file per term:

    data/processed/<term>.json

The file maps course code -> course record (see model.py).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

from oscarcatalog.model import Course, catalog_from_dict, catalog_to_dict


def _default_processed_dir() -> Path:
    """
    Return the default directory of parsed catalogs inside the package.

    A function instead of a constant, so tests can point elsewhere.
    """
    base_dir = Path(__file__).resolve().parent
    return base_dir / "data" / "processed"


def catalog_path(term: str, processed_dir: str | Path | None = None) -> Path:
    base = Path(processed_dir) if processed_dir is not None else _default_processed_dir()
    return base / f"{term}.json"


def save_catalog(catalog: Dict[str, Course], path: str | Path) -> None:
    """
    Write a catalog to JSON. Creates parent directories if needed.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(catalog_to_dict(catalog), indent=2, ensure_ascii=False), encoding="utf-8")


def load_catalog(path: str | Path) -> Dict[str, Course]:
    """
    Load a catalog written by save_catalog.

    Returns an empty catalog if the file does not exist or is not a JSON
    object, or if its records do not have the expected shape,
    so read-only commands still run before the first parse.
    """
    catalog_file = Path(path)
    if not catalog_file.exists():
        return {}

    try:
        data = json.loads(catalog_file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError):
        return {}

    if not isinstance(data, dict):
        return {}

    try:
        return catalog_from_dict(data)
    except (AttributeError, TypeError, ValueError):
        return {}
