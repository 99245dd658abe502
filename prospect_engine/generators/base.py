"""Base class for the randomized engine components."""

from __future__ import annotations

import random
from abc import ABC
from decimal import ROUND_HALF_UP, Decimal

from faker import Faker

CURRENCY_UNIT = Decimal("1")
CENT = Decimal("0.01")


class BaseGenerator(ABC):
    """Base class for components that draw random values.

    Every component owns its randomness: either an injected
    ``random.Random`` or a private one seeded from ``seed``. The
    module-level generator is never touched, so concurrent analyses do
    not interfere and seeded runs are reproducible.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    rng : random.Random | None
        Shared random source. Takes precedence over ``seed``.
    locale : str
        Faker locale used for identifiers.
    """

    def __init__(
        self,
        seed: int | None = None,
        rng: random.Random | None = None,
        locale: str = "en_US",
    ) -> None:
        self.rng = rng or random.Random(seed)
        self.fake = Faker(locale)
        self.fake.seed_instance(seed if seed is not None and rng is None else self.rng.getrandbits(64))

    def uniform(self, bounds: tuple[float, float], digits: int = 2) -> float:
        """Draw a rounded float within ``bounds``."""
        return round(self.rng.uniform(*bounds), digits)


def to_currency(value: Decimal) -> Decimal:
    """Round half-up to whole currency units."""
    return value.quantize(CURRENCY_UNIT, rounding=ROUND_HALF_UP)


def to_cents(value: Decimal) -> Decimal:
    """Round half-up to cents."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def as_decimal(value: float | int) -> Decimal:
    """Convert a float through its shortest repr to avoid binary noise."""
    return Decimal(str(value))
