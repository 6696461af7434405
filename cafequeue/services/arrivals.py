"""Random draws for customer arrivals. Every function takes its generator explicitly."""

from __future__ import annotations

import math
import random
from typing import Dict, List

from cafequeue.domain.catalog import CustomerType, DrinkType


def exponential_gap(rng: random.Random, rate: float) -> float:
    """Inter-arrival gap for a Poisson process with ``rate`` arrivals per minute."""
    if rate <= 0:
        raise ValueError(f"Arrival rate must be positive, got {rate}")
    return -math.log(1.0 - rng.random()) / rate


def approximate_poisson_count(rng: random.Random, rate: float) -> int:
    """
    Arrivals in one minute as round(-ln(1-U) * rate).

    This is an exponential draw rounded to an integer, not a true Poisson
    sample; its mean is close to ``rate`` but the spread is wider.
    """
    return int(round(-math.log(1.0 - rng.random()) * rate))


def knuth_poisson_count(rng: random.Random, rate: float) -> int:
    """Exact Poisson(rate) draw (Knuth's multiplication method)."""
    limit = math.exp(-rate)
    p = 1.0
    k = 0
    while True:
        k += 1
        p *= rng.random()
        if p <= limit:
            return k - 1


def arrivals_in_minute(rng: random.Random, rate: float, sampler: str = "approximate") -> int:
    if sampler == "knuth":
        return knuth_poisson_count(rng, rate)
    if sampler == "approximate":
        return approximate_poisson_count(rng, rate)
    raise ValueError(f"Unknown arrival sampler: {sampler}")


def random_drink(rng: random.Random) -> DrinkType:
    drinks: List[DrinkType] = list(DrinkType)
    return drinks[rng.randrange(len(drinks))]


def sample_customer_type(rng: random.Random, mix: Dict[str, float]) -> CustomerType:
    """Categorical draw over customer tiers, e.g. {"PREMIUM": 0.2, "REGULAR": 0.5, "NEW": 0.3}."""
    r, cum = rng.random(), 0.0
    last = CustomerType.REGULAR
    for name, share in mix.items():
        last = CustomerType.parse(name)
        cum += float(share)
        if r < cum:
            return last
    return last
