from __future__ import annotations

import random


class DeterministicRng:
    def __init__(self, seed: int):
        self._seed = seed
        self._random = random.Random(seed)

    def reset(self) -> None:
        self._random.seed(self._seed)

    def next_float(self) -> float:
        return self._random.random()

    def next_int(self, max_value: int) -> int:
        return self._random.randrange(max_value)

    def next_int_inclusive(self, low: int, high: int) -> int:
        return self._random.randint(low, high)

    def next_percent_chance(self, percentage: float) -> bool:
        return self.next_int(100) < percentage

    def next_sign(self) -> float:
        return 1.0 if self.next_percent_chance(50) else -1.0
