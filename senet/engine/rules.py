"""Règles et constantes du plateau Senet.

Ce module expose le contrat minimal utilisé par le moteur et l'IA :
- géométrie du parcours (`BOARD_HOUSES`, `PIECES_PER_PLAYER`)
- maisons spéciales et maisons protégées
- conditions de sortie depuis les maisons 28 à 30
- paramètres du lancer de bâtonnets
"""

from typing import Dict, FrozenSet

# Parcours
BOARD_HOUSES: int = 30
PIECES_PER_PLAYER: int = 5

# Maisons spéciales (numérotation 1..30)
HOUSE_OF_REBIRTH: int = 15
HOUSE_OF_HAPPINESS: int = 26
HOUSE_OF_WATER: int = 27
HOUSE_OF_THREE_TRUTHS: int = 28
HOUSE_OF_RE_ATUM: int = 29
FINAL_HOUSE: int = BOARD_HOUSES

# Un adversaire ne peut jamais occuper ces maisons.
PROTECTED_HOUSES: FrozenSet[int] = frozenset(
    {
        HOUSE_OF_REBIRTH,
        HOUSE_OF_HAPPINESS,
        HOUSE_OF_THREE_TRUTHS,
        HOUSE_OF_RE_ATUM,
        FINAL_HOUSE,
    }
)
SPECIAL_HOUSES: FrozenSet[int] = PROTECTED_HOUSES | {HOUSE_OF_WATER}

# Maisons de sortie: on ne peut les quitter qu'avec le nombre exact.
EXIT_REQUIREMENTS: Dict[int, int] = {
    HOUSE_OF_THREE_TRUTHS: 3,
    HOUSE_OF_RE_ATUM: 2,
    FINAL_HOUSE: 1,
}

# Une rangée de 3 pièces adverses ou plus ne peut pas être sautée.
BARRIER_LENGTH: int = 3

# Bâtonnets
STICK_COUNT: int = 4
NO_MARK_STEPS: int = 5
EXTRA_TURN_STEPS: FrozenSet[int] = frozenset({1, 4, 5})

HOUSE_NAMES: Dict[int, str] = {
    HOUSE_OF_REBIRTH: "House of Rebirth",
    HOUSE_OF_HAPPINESS: "House of Happiness",
    HOUSE_OF_WATER: "House of Water",
    HOUSE_OF_THREE_TRUTHS: "House of Three Truths",
    HOUSE_OF_RE_ATUM: "House of Re-Atum",
    FINAL_HOUSE: "Final House",
}

__all__ = [
    "BOARD_HOUSES",
    "PIECES_PER_PLAYER",
    "HOUSE_OF_REBIRTH",
    "HOUSE_OF_HAPPINESS",
    "HOUSE_OF_WATER",
    "HOUSE_OF_THREE_TRUTHS",
    "HOUSE_OF_RE_ATUM",
    "FINAL_HOUSE",
    "PROTECTED_HOUSES",
    "SPECIAL_HOUSES",
    "EXIT_REQUIREMENTS",
    "BARRIER_LENGTH",
    "STICK_COUNT",
    "NO_MARK_STEPS",
    "EXTRA_TURN_STEPS",
    "HOUSE_NAMES",
]
