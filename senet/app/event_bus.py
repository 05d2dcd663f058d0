"""Bus d'évènements synchrone reliant `GameService` à ses observateurs."""

from __future__ import annotations

from typing import Callable, List, Tuple, Type

Subscriber = Callable[[object], None]


class EventBus:
    """Publie les évènements de partie (lancers, coups, passes, fin).

    Chaque publication appelle immédiatement les abonnés dans l'ordre
    d'enregistrement. Une exception levée par un abonné interrompt la
    diffusion et remonte à l'appelant.
    """

    __slots__ = ("_subscribers",)

    def __init__(self) -> None:
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber, *event_types: Type[object]) -> Callable[[], None]:
        """Enregistre un abonné et retourne une fonction de désinscription.

        Args:
            callback: appelé avec chaque évènement publié
            event_types: si fournis, seuls les évènements de ces types sont
                transmis (ex. `SticksThrownEvent` pour compter les lancers)
        """

        listener = _filtered(callback, tuple(event_types)) if event_types else callback
        self._subscribers.append(listener)

        def unsubscribe() -> None:
            if listener in self._subscribers:
                self._subscribers.remove(listener)

        return unsubscribe

    def publish(self, event: object) -> None:
        """Diffuse l'évènement à tous les abonnés courants."""

        # Un abonné peut se désinscrire pendant la diffusion.
        for callback in list(self._subscribers):
            callback(event)

    def __len__(self) -> int:
        return len(self._subscribers)


def _filtered(callback: Subscriber, event_types: Tuple[Type[object], ...]) -> Subscriber:
    def listener(event: object) -> None:
        if isinstance(event, event_types):
            callback(event)

    return listener


__all__ = ["EventBus", "Subscriber"]
