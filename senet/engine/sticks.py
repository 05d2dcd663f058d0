"""Lancer des quatre bâtonnets.

Chaque bâtonnet est un tirage binaire équitable. Le nombre de faces marquées
donne le déplacement (1 à 4), et aucun marquage vaut 5. Les résultats 1, 4 et
5 accordent un tour supplémentaire.

La source aléatoire est injectée : un simple callable sans argument qui
renvoie un booléen. Les tests fournissent des séquences scriptées, le moteur
utilise `random.Random` par défaut.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from fractions import Fraction
from itertools import product
from typing import Callable, Dict, Iterable, Iterator

from senet.engine.rules import EXTRA_TURN_STEPS, NO_MARK_STEPS, STICK_COUNT

BinarySource = Callable[[], bool]


@dataclass(frozen=True)
class StickThrow:
    """Résultat d'un lancer.

    Args:
        steps: nombre de maisons à parcourir (1..5)
        extra_turn: True si le joueur rejoue après son coup
        marked: nombre de bâtonnets tombés face marquée (0..4)
    """

    steps: int
    extra_turn: bool
    marked: int

    def __iter__(self) -> Iterator[object]:
        # Permet `steps, extra = board.throw_sticks()`.
        yield self.steps
        yield self.extra_turn


def steps_for_marks(marked: int) -> int:
    """Convertit un nombre de faces marquées en déplacement."""

    if not 0 <= marked <= STICK_COUNT:
        raise ValueError(f"marked doit être compris entre 0 et {STICK_COUNT} (reçu: {marked})")
    return marked if marked > 0 else NO_MARK_STEPS


def grants_extra_turn(steps: int) -> bool:
    return steps in EXTRA_TURN_STEPS


def throw_from_draws(draws: Iterable[bool]) -> StickThrow:
    """Construit un lancer à partir de tirages déjà effectués."""

    values = list(draws)
    if len(values) != STICK_COUNT:
        raise ValueError(f"Un lancer nécessite {STICK_COUNT} tirages (reçu: {len(values)})")
    marked = sum(1 for value in values if value)
    steps = steps_for_marks(marked)
    return StickThrow(steps=steps, extra_turn=grants_extra_turn(steps), marked=marked)


def throw_sticks(source: BinarySource) -> StickThrow:
    """Effectue un lancer complet en tirant quatre fois dans `source`."""

    return throw_from_draws(bool(source()) for _ in range(STICK_COUNT))


def random_binary_source(
    rng: random.Random | int | None = None,
) -> BinarySource:
    """Adapte un `random.Random` (ou une seed) en source binaire équitable."""

    generator = rng if isinstance(rng, random.Random) else random.Random(rng)

    def draw() -> bool:
        return generator.getrandbits(1) == 1

    return draw


def _enumerate_weights() -> Dict[int, Fraction]:
    counts: Dict[int, int] = {}
    for draws in product((False, True), repeat=STICK_COUNT):
        steps = throw_from_draws(draws).steps
        counts[steps] = counts.get(steps, 0) + 1
    total = 2**STICK_COUNT
    return {steps: Fraction(count, total) for steps, count in sorted(counts.items())}


# Distribution exacte: {1: 4/16, 2: 6/16, 3: 4/16, 4: 1/16, 5: 1/16}
STEP_WEIGHTS: Dict[int, Fraction] = _enumerate_weights()

__all__ = [
    "BinarySource",
    "StickThrow",
    "STEP_WEIGHTS",
    "steps_for_marks",
    "grants_extra_turn",
    "throw_from_draws",
    "throw_sticks",
    "random_binary_source",
]
