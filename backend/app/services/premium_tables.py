"""Static rating tables for the illustrative monthly premium.

The factors are placeholders, not actuarial rates.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class Occupation:
    key: str
    label: str
    rating_class: str

    @property
    def display_label(self) -> str:
        return f"{self.label} — {self.rating_class}"


OCCUPATIONS: tuple[Occupation, ...] = (
    Occupation("Cleaner", "Cleaner", "Light Manual"),
    Occupation("Doctor", "Doctor", "Professional"),
    Occupation("Author", "Author", "White Collar"),
    Occupation("Farmer", "Farmer", "Heavy Manual"),
    Occupation("Mechanic", "Mechanic", "Heavy Manual"),
    Occupation("Florist", "Florist", "Light Manual"),
    Occupation("Other", "Other", "Heavy Manual"),
)

OCCUPATION_CATALOG: Mapping[str, Occupation] = MappingProxyType({o.key: o for o in OCCUPATIONS})

RATING_FACTORS: Mapping[str, float] = MappingProxyType(
    {
        "Light Manual": 11.50,
        "Professional": 1.5,
        "White Collar": 2.25,
        "Heavy Manual": 31.75,
    }
)

DEFAULT_OCCUPATION_FACTOR = 1.0

# (inclusive upper bound on age next birthday, factor); ages above the last bound use OLDEST_AGE_FACTOR.
AGE_BANDS: tuple[tuple[int, float], ...] = (
    (30, 0.80),
    (40, 1.00),
    (50, 1.30),
    (60, 1.70),
)
OLDEST_AGE_FACTOR = 2.20

MIN_AGE = 21
MAX_AGE = 120

PREMIUM_DISCLAIMER = (
    "This is an illustration using placeholder rates. "
    "Replace the logic with your official pricing model."
)
