"""Data access layer for the GardenBred API.

Repositories validate commands, raise ``garden_api.errors`` domain errors
and run every mutation inside one ``transaction``.
"""

from garden_api.repositories import (
    action_log,
    catalog,
    coins,
    floor,
    gacha,
    inventory,
    market,
    player,
    plot,
    state,
    visit,
)

__all__ = [
    "action_log",
    "catalog",
    "coins",
    "floor",
    "gacha",
    "inventory",
    "market",
    "player",
    "plot",
    "state",
    "visit",
]
