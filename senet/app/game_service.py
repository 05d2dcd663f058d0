"""Service d'orchestration pour une partie de Senet."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, List, Optional, Sequence

from loguru import logger

from senet.ai.policies import AgentPolicy, select_move
from senet.app.event_bus import EventBus
from senet.app.events import (
    GameEndedEvent,
    GameStartedEvent,
    ModeChangedEvent,
    MoveAppliedEvent,
    MoveRejectedEvent,
    SticksThrownEvent,
    TurnChangedEvent,
    TurnPassedEvent,
)
from senet.app.messages import (
    GAME_OVER_TEXT,
    NOT_YOUR_TURN_TEXT,
    ROLL_PENDING_TEXT,
    THROW_FIRST_TEXT,
)
from senet.app.settings import GameMode, GameSettings
from senet.app.storage import SnapshotStore
from senet.engine.actions import LegalMove, MoveOutcome
from senet.engine.state import Board
from senet.engine.sticks import BinarySource, StickThrow

MoveChooser = Callable[[Board, Sequence[LegalMove]], Optional[LegalMove]]


class TurnError(ValueError):
    """Action hors séquence (lancer en double, coup sans lancer, partie finie)."""


class GameService:
    """Wrappe `Board` et enchaîne les tours en publiant les évènements.

    Le service porte l'état de tour que le plateau ignore : le lancer en
    attente et le droit à un tour supplémentaire.
    """

    def __init__(
        self,
        *,
        settings: GameSettings | None = None,
        event_bus: EventBus | None = None,
        store: SnapshotStore | None = None,
        binary_source: BinarySource | None = None,
    ) -> None:
        self._event_bus = event_bus or EventBus()
        self._settings = settings or GameSettings()
        self._store = store
        self._board = Board() if binary_source is None else Board(binary_source=binary_source)
        self._pending_steps: int | None = None
        self._extra_turn = False

    @property
    def event_bus(self) -> EventBus:
        """Retourne le bus d'évènements utilisé par le service."""

        return self._event_bus

    @property
    def board(self) -> Board:
        return self._board

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def pending_steps(self) -> int | None:
        """Lancer en attente d'un coup, None si le joueur doit lancer."""

        return self._pending_steps

    @property
    def extra_turn(self) -> bool:
        return self._extra_turn

    # -- Cycle de vie ----------------------------------------------------------

    def start_new_game(self) -> Board:
        """Remet le plateau à l'ouverture et publie l'évènement associé."""

        self._board.reset()
        self._pending_steps = None
        self._extra_turn = False
        logger.info(f"Nouvelle partie ({self._settings.mode.value})")
        self._event_bus.publish(GameStartedEvent(snapshot=self._board.serialize()))
        self._autosave()
        return self._board

    def resume(self) -> bool:
        """Recharge la partie sauvegardée; False si aucune n'est exploitable."""

        if self._store is None:
            return False
        snapshot = self._store.load()
        if snapshot is None:
            return False
        try:
            self._board.load(snapshot)
        except ValueError as exc:
            logger.error(f"Sauvegarde incohérente ignorée: {exc}")
            return False

        stored_settings = self._store.load_settings()
        if stored_settings:
            self._settings = GameSettings.from_mapping(stored_settings)
        self._pending_steps = None
        self._extra_turn = False
        logger.info(f"Partie reprise, trait à {self._board.current_player.name}")
        self._event_bus.publish(
            GameStartedEvent(snapshot=self._board.serialize(), resumed=True)
        )
        return True

    def set_mode(self, mode: GameMode | str) -> GameSettings:
        """Change le mode de jeu; un changement effectif relance la partie."""

        new_mode = GameMode.parse(mode)
        if new_mode is self._settings.mode:
            return self._settings
        self._settings = replace(self._settings, mode=new_mode)
        logger.info(f"Mode de jeu: {new_mode.value}")
        self._event_bus.publish(ModeChangedEvent(mode=new_mode))
        self.start_new_game()
        return self._settings

    # -- Tour ------------------------------------------------------------------

    def throw(self) -> StickThrow:
        """Lance les bâtonnets pour le joueur au trait.

        Si le lancer n'offre aucun coup légal, le tour passe immédiatement.

        Raises:
            TurnError: partie terminée ou lancer déjà en attente
        """

        board = self._board
        if board.is_game_over():
            raise TurnError(GAME_OVER_TEXT)
        if self._pending_steps is not None:
            raise TurnError(ROLL_PENDING_TEXT)

        player = board.current_player
        result = board.throw_sticks()
        self._extra_turn = result.extra_turn
        moves = board.legal_moves(result.steps)
        logger.debug(f"{player.name} lance {result.steps} ({len(moves)} coup(s) légal(aux))")
        self._event_bus.publish(
            SticksThrownEvent(player=player, throw=result, legal_move_count=len(moves))
        )

        if not moves:
            self._pass_turn(result.steps)
            return result

        self._pending_steps = result.steps
        self._autosave()
        return result

    def legal_moves(self) -> List[LegalMove]:
        """Coups légaux pour le lancer en attente (vide sans lancer)."""

        if self._pending_steps is None:
            return []
        return self._board.legal_moves(self._pending_steps)

    def play(self, start: int) -> MoveOutcome:
        """Joue la pièce de `start` avec le lancer en attente.

        Un coup refusé n'est pas une exception : l'issue est retournée et un
        `MoveRejectedEvent` est publié. Si le lancer n'offre plus aucun coup,
        le tour passe.

        Raises:
            TurnError: partie terminée ou aucun lancer en attente
        """

        board = self._board
        if board.is_game_over():
            raise TurnError(GAME_OVER_TEXT)
        if self._pending_steps is None:
            raise TurnError(THROW_FIRST_TEXT)

        steps = self._pending_steps
        player = board.current_player
        outcome = board.move(start, steps)

        if not outcome.ok:
            assert outcome.reason is not None
            logger.debug(f"Coup refusé pour {player.name} depuis {start}: {outcome.reason.value}")
            self._event_bus.publish(
                MoveRejectedEvent(player=player, start=start, steps=steps, reason=outcome.reason)
            )
            if not board.legal_moves(steps):
                self._pass_turn(steps)
            return outcome

        assert outcome.info is not None
        self._pending_steps = None
        self._event_bus.publish(
            MoveAppliedEvent(
                player=player,
                steps=steps,
                info=outcome.info,
                snapshot=board.serialize(),
            )
        )

        if board.is_game_over():
            self._extra_turn = False
            logger.info(f"Victoire de {board.winner.name if board.winner else '?'}")
            self._event_bus.publish(
                GameEndedEvent(winner=board.winner, snapshot=board.serialize())
            )
            self._autosave()
            return outcome

        self._end_turn()
        return outcome

    # -- Adversaire automatique ------------------------------------------------

    def is_ai_turn(self) -> bool:
        return (
            self._settings.has_ai
            and not self._board.is_game_over()
            and self._board.current_player is self._settings.ai_player
        )

    def play_ai_turn(self) -> Optional[LegalMove]:
        """Lance et joue pour l'ordinateur; None si le tour est passé.

        Raises:
            TurnError: ce n'est pas au tour de l'ordinateur
        """

        if not self.is_ai_turn():
            raise TurnError(NOT_YOUR_TURN_TEXT)
        difficulty = self._settings.difficulty
        assert difficulty is not None
        return self._play_turn_with(
            lambda board, moves: select_move(difficulty, moves, board)
        )

    def play_policy_turn(self, policy: AgentPolicy) -> Optional[LegalMove]:
        """Joue un tour complet pour le joueur au trait avec `policy`."""

        if self._board.is_game_over():
            raise TurnError(GAME_OVER_TEXT)
        return self._play_turn_with(policy.select_move)

    def _play_turn_with(self, chooser: MoveChooser) -> Optional[LegalMove]:
        if self._pending_steps is None:
            self.throw()
            if self._pending_steps is None:
                return None

        steps = self._pending_steps
        moves = self.legal_moves()
        move = chooser(self._board, moves) or moves[0]
        outcome = self.play(move.from_house)
        if not outcome.ok:
            # Coup choisi devenu invalide: on traite comme une absence de coup.
            if self._pending_steps is not None:
                self._pass_turn(steps)
            return None
        return move

    # -- Helpers internes ------------------------------------------------------

    def _end_turn(self) -> None:
        board = self._board
        if self._extra_turn:
            self._extra_turn = False
            self._event_bus.publish(
                TurnChangedEvent(player=board.current_player, extra_turn=True)
            )
        else:
            board.switch_player()
            self._event_bus.publish(
                TurnChangedEvent(player=board.current_player, extra_turn=False)
            )
        self._autosave()

    def _pass_turn(self, steps: int) -> None:
        board = self._board
        player = board.current_player
        # Le trait change avant la notification; le tour bonus est perdu.
        self._pending_steps = None
        self._extra_turn = False
        if not board.is_game_over():
            board.switch_player()
        self._autosave()
        logger.debug(f"{player.name} passe son tour avec {steps}")
        self._event_bus.publish(
            TurnPassedEvent(player=player, steps=steps, next_player=board.current_player)
        )

    def _autosave(self) -> None:
        if self._store is None:
            return
        try:
            self._store.save(self._board.serialize(), settings=self._settings.to_mapping())
        except OSError as exc:
            logger.error(f"Échec de la sauvegarde automatique: {exc}")


__all__ = ["GameService", "TurnError"]
