from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)


DEFAULT_CATALOG: dict[str, list[str]] = {
    "movies": [
        "The Shawshank Redemption",
        "The Godfather",
        "The Dark Knight",
        "Pulp Fiction",
        "Forrest Gump",
        "Inception",
        "The Matrix",
        "Goodfellas",
        "The Silence of the Lambs",
        "Fight Club",
    ],
    "songs": [
        "Bohemian Rhapsody",
        "Stairway to Heaven",
        "Billie Jean",
        "Sweet Child O' Mine",
        "Smells Like Teen Spirit",
        "Hotel California",
        "Sweet Home Alabama",
        "Sweet Caroline",
        "Don't Stop Believin'",
        "Sweet Dreams",
    ],
    "artists": [
        "Michael Jackson",
        "Elvis Presley",
        "Madonna",
        "Prince",
        "David Bowie",
        "Freddie Mercury",
        "John Lennon",
        "Bob Marley",
        "Miles Davis",
        "Louis Armstrong",
    ],
    "historicalFigures": [
        "Albert Einstein",
        "Mahatma Gandhi",
        "Martin Luther King Jr.",
        "Winston Churchill",
        "Nelson Mandela",
        "Mother Teresa",
        "Leonardo da Vinci",
        "William Shakespeare",
        "Isaac Newton",
        "Marie Curie",
    ],
}


Catalog = Mapping[str, tuple[str, ...]]


def freeze(data: Mapping[str, list[str]]) -> Catalog:
    """Validate a category table and return a read-only copy."""
    if not isinstance(data, Mapping) or not data:
        raise ValueError("catalog must be a non-empty object")

    frozen: dict[str, tuple[str, ...]] = {}
    for category, items in data.items():
        if not isinstance(category, str) or not category.strip():
            raise ValueError("category names must be non-empty strings")
        if not isinstance(items, list) or not items:
            raise ValueError(f"category {category!r} needs a non-empty list of items")
        cleaned = [i.strip() for i in items if isinstance(i, str) and i.strip()]
        if len(cleaned) != len(items):
            raise ValueError(f"category {category!r} contains blank or non-string items")
        frozen[category.strip()] = tuple(cleaned)
    return MappingProxyType(frozen)


def load_catalog(path: str | Path | None = None) -> Catalog:
    if not path:
        return freeze(DEFAULT_CATALOG)

    p = Path(path)
    with p.open(encoding="utf-8") as fh:
        data = json.load(fh)

    catalog = freeze(data)
    logger.info("Loaded %d categories from %s", len(catalog), p)
    return catalog


def describe(catalog: Catalog) -> list[dict]:
    return [{"name": name, "size": len(items)} for name, items in catalog.items()]
