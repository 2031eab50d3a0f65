"""
Dice rolls for spawns, edges, intents and Commanding Orders.
Every roll takes an optional random source (a callable returning a float in [0, 1))
so tests and replays can drive the engine deterministically.
"""

import math
import random as _random
from typing import Callable

RandomSource = Callable[[], float]

SUPPORTED_SIDES = (4, 6, 12)


def roll_die(sides: int, random: RandomSource | None = None) -> int:
    """Roll a single die with the given number of sides. Returns 1..sides."""
    if sides not in SUPPORTED_SIDES:
        raise ValueError(f"Unsupported die: d{sides}. Supported: {', '.join(f'd{s}' for s in SUPPORTED_SIDES)}")
    source = random or _random.random
    return math.floor(source() * sides) + 1


def roll_d4(random: RandomSource | None = None) -> int:
    return roll_die(4, random)


def roll_d6(random: RandomSource | None = None) -> int:
    return roll_die(6, random)


def roll_d12(random: RandomSource | None = None) -> int:
    return roll_die(12, random)
