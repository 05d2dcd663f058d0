"""Moteur Senet : règles, adversaire heuristique et orchestration de partie."""

__version__ = "1.0.0"
