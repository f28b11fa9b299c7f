"""Candidate sampling policy for the auto-trade scheduler."""

import random
from dataclasses import dataclass
from typing import Optional, Sequence

from core.models import Quote


@dataclass(frozen=True)
class SamplingPolicy:
    """Pick one candidate per cycle from the top of the listing."""

    top_n: int = 20
    period_seconds: float = 20.0

    def __post_init__(self) -> None:
        if self.top_n <= 0:
            raise ValueError("top_n must be positive.")
        if self.period_seconds <= 0:
            raise ValueError("period_seconds must be positive.")

    def pick(self, listing: Sequence[Quote], rng: random.Random) -> Optional[Quote]:
        window = min(len(listing), self.top_n)
        if window == 0:
            return None
        return listing[rng.randrange(window)]
