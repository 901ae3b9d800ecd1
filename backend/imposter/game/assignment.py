from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence

from .catalog import Catalog
from .errors import InvalidState


@dataclass(frozen=True)
class Assignment:
    category: str
    majority_item: str
    minority_item: str
    imposter_ids: frozenset[str]

    def item_for(self, player_id: str) -> str:
        if player_id in self.imposter_ids:
            return self.minority_item
        return self.majority_item


def clamp_imposter_count(requested: int, roster_size: int) -> int:
    return max(1, min(requested, roster_size))


def pick_items(pool: Sequence[str], rng: random.Random, distinct: bool = False) -> tuple[str, str]:
    """Return (majority, minority). Independent draws unless ``distinct`` is set."""
    if distinct and len(pool) >= 2:
        first, second = rng.sample(range(len(pool)), 2)
        return pool[first], pool[second]
    return pool[rng.randrange(len(pool))], pool[rng.randrange(len(pool))]


def assign(
    roster_ids: Sequence[str],
    imposter_count: int,
    catalog: Catalog,
    rng: random.Random,
    distinct_items: bool = False,
) -> Assignment:
    if not roster_ids:
        raise InvalidState("Cannot assign roles to an empty roster")
    if not catalog:
        raise InvalidState("Catalog is empty")

    categories = list(catalog.keys())
    category = categories[rng.randrange(len(categories))]
    majority, minority = pick_items(catalog[category], rng, distinct=distinct_items)

    k = clamp_imposter_count(imposter_count, len(roster_ids))
    positions = rng.sample(range(len(roster_ids)), k)

    return Assignment(
        category=category,
        majority_item=majority,
        minority_item=minority,
        imposter_ids=frozenset(roster_ids[i] for i in positions),
    )
