"""Placeholder map pins for location hints.

Addresses are not geocoded. A pin is dropped near the centre of India with a
random offset so the map has something to show.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

DEFAULT_CENTER = (20.5937, 78.9629)
DEFAULT_ZOOM = 5
PIN_ZOOM = 10
INDIA_BOUNDS = ((6.0, 68.0), (36.0, 98.0))
_JITTER_DEGREES = 8.0


@dataclass(frozen=True)
class MapPin:
    """Approximate pin for an address popup."""

    latitude: float
    longitude: float
    label: str
    zoom: int = PIN_ZOOM


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def approximate_location(address: str, rng: random.Random | None = None) -> MapPin:
    """Return a jittered pin inside :data:`INDIA_BOUNDS` labeled with ``address``."""

    source = rng or random
    (south, west), (north, east) = INDIA_BOUNDS
    latitude = DEFAULT_CENTER[0] + (source.random() - 0.5) * _JITTER_DEGREES
    longitude = DEFAULT_CENTER[1] + (source.random() - 0.5) * _JITTER_DEGREES
    return MapPin(
        latitude=_clamp(latitude, south, north),
        longitude=_clamp(longitude, west, east),
        label=address,
    )
