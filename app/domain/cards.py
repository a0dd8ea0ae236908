# app/domain/cards.py
from __future__ import annotations

import random
from typing import List, Optional, Sequence

from app.store.models import Card

DEFAULT_SPECTRUMS: List[Card] = [
    ("Hot", "Cold"),
    ("Overrated", "Underrated"),
    ("Useless", "Useful"),
    ("Bad movie", "Good movie"),
    ("Smells bad", "Smells good"),
    ("Hard to spell", "Easy to spell"),
    ("Normal pet", "Exotic pet"),
    ("Mildly addictive", "Highly addictive"),
    ("Harmless", "Dangerous"),
    ("Cheap", "Expensive"),
    ("Boring hobby", "Exciting hobby"),
    ("Unhealthy food", "Healthy food"),
    ("Sad song", "Happy song"),
    ("Underpaid job", "Overpaid job"),
    ("Round", "Pointy"),
    ("Fantasy", "Sci-fi"),
    ("Forgettable", "Memorable"),
    ("Soft", "Hard"),
    ("Villain", "Hero"),
    ("Quiet place", "Loud place"),
    ("Old fashioned", "Futuristic"),
    ("Casual", "Formal"),
    ("Rare", "Common"),
    ("Weird", "Normal"),
    ("Tastes bad", "Tastes good"),
    ("Easy to make", "Hard to make"),
    ("Ugly word", "Beautiful word"),
    ("Small talk", "Deep conversation"),
    ("Guilty pleasure", "Openly loved"),
    ("Introvert job", "Extrovert job"),
    ("Mainstream", "Niche"),
    ("Safe city", "Dangerous city"),
    ("Worst superpower", "Best superpower"),
    ("Short-lived", "Long-lived"),
    ("Messy", "Tidy"),
    ("Underdressed", "Overdressed"),
    ("Breakfast food", "Dinner food"),
    ("Relaxing", "Stressful"),
    ("Kid movie", "Adult movie"),
    ("Overrated skill", "Underrated skill"),
]


class CardSource:
    """
    A shuffled, finite deck of spectrum label pairs.

    reset() reshuffles the full catalog once per game; draw() hands out
    one pair per round and returns None once the deck is exhausted.
    """

    def __init__(self, catalog: Optional[Sequence[Card]] = None, rng: Optional[random.Random] = None) -> None:
        self._catalog: List[Card] = [tuple(c) for c in (catalog if catalog is not None else DEFAULT_SPECTRUMS)]
        self._rng = rng if rng is not None else random.Random()
        self._deck: List[Card] = []

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self._rng.seed(seed)
        self._deck = list(self._catalog)
        self._rng.shuffle(self._deck)

    def draw(self) -> Optional[Card]:
        if not self._deck:
            return None
        return self._deck.pop()

    @property
    def exhausted(self) -> bool:
        return not self._deck

    def __len__(self) -> int:
        return len(self._deck)
