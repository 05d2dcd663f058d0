"""Statistiques sur les lancers de bâtonnets observés en simulation."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from senet.engine.rules import NO_MARK_STEPS
from senet.engine.sticks import STEP_WEIGHTS

# Index i de l'histogramme = déplacement i + 1.
STEP_VALUES = np.arange(1, NO_MARK_STEPS + 1)


def step_histogram(steps: Iterable[int]) -> np.ndarray:
    """Compte les lancers par déplacement (1..5).

    Raises:
        ValueError: un déplacement hors de 1..5
    """

    values = np.fromiter((int(step) for step in steps), dtype=np.int64)
    if values.size and (values.min() < 1 or values.max() > NO_MARK_STEPS):
        raise ValueError(f"Déplacement hors de 1..{NO_MARK_STEPS}")
    return np.bincount(values - 1, minlength=NO_MARK_STEPS).astype(np.int64)


def empirical_distribution(histogram: np.ndarray) -> np.ndarray:
    histogram = np.asarray(histogram, dtype=np.float64)
    total = histogram.sum()
    if total == 0:
        return np.zeros_like(histogram)
    return histogram / total


def expected_distribution() -> np.ndarray:
    """Distribution théorique {4, 6, 4, 1, 1}/16."""

    return np.array([float(STEP_WEIGHTS[int(step)]) for step in STEP_VALUES], dtype=np.float64)


def max_abs_deviation(histogram: np.ndarray) -> float:
    """Écart absolu maximal entre fréquences observées et théoriques."""

    return float(np.max(np.abs(empirical_distribution(histogram) - expected_distribution())))


__all__ = [
    "STEP_VALUES",
    "step_histogram",
    "empirical_distribution",
    "expected_distribution",
    "max_abs_deviation",
]
