"""État du plateau Senet et logique de transition.

`Board` est l'unique agrégat mutable d'une partie : il valide les coups,
applique leurs effets, énumère les coups légaux et détecte la victoire.
L'hôte (service, simulateur, tests) détient une instance par partie et la
passe explicitement ; aucun singleton global.

Les appels sur une même instance doivent être sérialisés par l'appelant.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from senet.engine.actions import LegalMove, MoveInfo, MoveOutcome, MoveRejectReason
from senet.engine.rules import (
    BARRIER_LENGTH,
    BOARD_HOUSES,
    EXIT_REQUIREMENTS,
    FINAL_HOUSE,
    HOUSE_OF_HAPPINESS,
    HOUSE_OF_RE_ATUM,
    HOUSE_OF_REBIRTH,
    HOUSE_OF_THREE_TRUTHS,
    HOUSE_OF_WATER,
    PIECES_PER_PLAYER,
    PROTECTED_HOUSES,
)
from senet.engine.sticks import BinarySource, StickThrow, random_binary_source, throw_sticks

_EXIT_REJECTIONS: Dict[int, MoveRejectReason] = {
    HOUSE_OF_THREE_TRUTHS: MoveRejectReason.NEED_THREE_FROM_28,
    HOUSE_OF_RE_ATUM: MoveRejectReason.NEED_TWO_FROM_29,
    FINAL_HOUSE: MoveRejectReason.NEED_ONE_FROM_30,
}


class Player(Enum):
    """Les deux camps."""

    PLAYER1 = 1
    PLAYER2 = 2

    @property
    def opponent(self) -> "Player":
        return Player.PLAYER2 if self is Player.PLAYER1 else Player.PLAYER1


Cell = Optional[Player]


def opening_cells() -> List[Cell]:
    cells: List[Cell] = [None] * BOARD_HOUSES
    for house in range(1, 10, 2):
        cells[house - 1] = Player.PLAYER1
    for house in range(2, 11, 2):
        cells[house - 1] = Player.PLAYER2
    return cells


@dataclass
class Board:
    """Plateau de 30 maisons.

    Toutes les mutations passent par `move()`, `switch_player()` et
    `throw_sticks()` (qui n'enregistre que le dernier lancer).
    """

    cells: List[Cell] = field(default_factory=opening_cells)
    current_player: Player = Player.PLAYER1
    pieces_off: Dict[Player, int] = field(
        default_factory=lambda: {player: 0 for player in Player}
    )
    game_over: bool = False
    winner: Player | None = None
    # Dernier lancer, pour affichage/rejeu uniquement.
    last_roll: int | None = None
    last_extra_turn: bool = False
    binary_source: BinarySource = field(
        default_factory=random_binary_source, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if len(self.cells) != BOARD_HOUSES:
            raise ValueError(f"Le plateau doit compter {BOARD_HOUSES} maisons (reçu: {len(self.cells)})")

    @classmethod
    def from_layout(
        cls,
        *,
        player1: Iterable[int] = (),
        player2: Iterable[int] = (),
        current_player: Player = Player.PLAYER1,
        binary_source: BinarySource | None = None,
    ) -> "Board":
        """Construit une position arbitraire.

        Les pièces absentes du plateau sont comptées comme sorties, ce qui
        préserve l'invariant de cinq pièces par camp.

        Args:
            player1: maisons occupées par PLAYER1
            player2: maisons occupées par PLAYER2
            current_player: joueur au trait
            binary_source: source de tirages pour les lancers (optionnel)

        Returns:
            Plateau prêt à jouer (partie terminée si un camp a tout sorti)
        """

        cells: List[Cell] = [None] * BOARD_HOUSES
        for player, houses in ((Player.PLAYER1, player1), (Player.PLAYER2, player2)):
            for house in houses:
                if not 1 <= house <= BOARD_HOUSES:
                    raise ValueError(f"Maison hors plateau: {house}")
                if cells[house - 1] is not None:
                    raise ValueError(f"Maison {house} occupée deux fois")
                cells[house - 1] = player

        pieces_off: Dict[Player, int] = {}
        for player in Player:
            on_board = sum(1 for cell in cells if cell is player)
            if on_board > PIECES_PER_PLAYER:
                raise ValueError(f"{player.name} a plus de {PIECES_PER_PLAYER} pièces")
            pieces_off[player] = PIECES_PER_PLAYER - on_board

        board = cls(cells=cells, current_player=current_player, pieces_off=pieces_off)
        if binary_source is not None:
            board.binary_source = binary_source
        board._settle_victory()
        return board

    # -- Accès -----------------------------------------------------------------

    def reset(self) -> None:
        """Remet le plateau dans la disposition d'ouverture."""

        self.cells = opening_cells()
        self.current_player = Player.PLAYER1
        self.pieces_off = {player: 0 for player in Player}
        self.game_over = False
        self.winner = None
        self.last_roll = None
        self.last_extra_turn = False

    def get_cell(self, house: int) -> Cell:
        """Occupant de la maison `house` (1..30), None si vide ou hors plateau."""

        if not 1 <= house <= BOARD_HOUSES:
            return None
        return self.cells[house - 1]

    def get_current_player(self) -> Player:
        return self.current_player

    def get_pieces_off(self, player: Player) -> int:
        return self.pieces_off.get(player, 0)

    def is_game_over(self) -> bool:
        return self.game_over

    def pieces_on_board(self, player: Player) -> List[int]:
        """Maisons occupées par `player`, en ordre croissant."""

        return [house for house in range(1, BOARD_HOUSES + 1) if self.cells[house - 1] is player]

    def switch_player(self) -> None:
        self.current_player = self.current_player.opponent

    def copy(self) -> "Board":
        """Copie indépendante (partage la source aléatoire)."""

        return Board(
            cells=list(self.cells),
            current_player=self.current_player,
            pieces_off=dict(self.pieces_off),
            game_over=self.game_over,
            winner=self.winner,
            last_roll=self.last_roll,
            last_extra_turn=self.last_extra_turn,
            binary_source=self.binary_source,
        )

    # -- Lancer ----------------------------------------------------------------

    def throw_sticks(self) -> StickThrow:
        """Lance les bâtonnets et mémorise le résultat pour l'affichage."""

        result = throw_sticks(self.binary_source)
        self.last_roll = result.steps
        self.last_extra_turn = result.extra_turn
        return result

    # -- Validation ------------------------------------------------------------

    def can_move(self, start: int, steps: int, player: Player | None = None) -> MoveOutcome:
        """Vérifie si `player` peut déplacer la pièce de `start` de `steps` maisons.

        Les règles sont évaluées dans un ordre strict ; la première règle
        violée détermine le motif de refus.

        Args:
            start: maison de départ (1..30)
            steps: résultat du lancer
            player: joueur concerné (par défaut le joueur au trait)

        Returns:
            MoveOutcome portant un MoveInfo ou une MoveRejectReason
        """

        player = player or self.current_player

        if self.game_over:
            return MoveOutcome.reject(MoveRejectReason.GAME_OVER)
        if steps <= 0:
            return MoveOutcome.reject(MoveRejectReason.NO_STEPS)
        if not 1 <= start <= BOARD_HOUSES:
            return MoveOutcome.reject(MoveRejectReason.INVALID_START)
        if self._cell(start) is not player:
            return MoveOutcome.reject(MoveRejectReason.NOT_YOUR_PIECE)

        # Une pièce dans l'eau attend que la Renaissance se libère.
        if start == HOUSE_OF_WATER and self._cell(HOUSE_OF_REBIRTH) is not None:
            return MoveOutcome.reject(MoveRejectReason.WATER_WAIT)

        raw_dest = start + steps

        # Les barrages bloquent avant toute règle liée à la destination.
        for run_start, run_end in self._barriers(player.opponent):
            if start < run_start and raw_dest > run_end:
                return MoveOutcome.reject(MoveRejectReason.BLOCKED_BY_BARRIER)

        if start in EXIT_REQUIREMENTS:
            if steps == EXIT_REQUIREMENTS[start]:
                return MoveOutcome.accept(MoveInfo(offboard=True, start=start))
            return MoveOutcome.reject(_EXIT_REJECTIONS[start])

        # Passage obligé par 26, sauf chute directe dans l'eau.
        if start < HOUSE_OF_HAPPINESS and raw_dest > HOUSE_OF_HAPPINESS and raw_dest != HOUSE_OF_WATER:
            return MoveOutcome.reject(MoveRejectReason.CANNOT_JUMP_OVER_26)

        if start == HOUSE_OF_HAPPINESS and raw_dest > BOARD_HOUSES:
            return MoveOutcome.reject(MoveRejectReason.CANNOT_EXIT_FROM_26)

        if raw_dest > BOARD_HOUSES:
            return MoveOutcome.reject(MoveRejectReason.CANNOT_EXIT_FROM_HERE)

        if raw_dest == HOUSE_OF_WATER:
            if self._cell(HOUSE_OF_REBIRTH) is not None:
                if self._cell(HOUSE_OF_WATER) is not None:
                    return MoveOutcome.reject(MoveRejectReason.WATER_BLOCKED)
                final_dest = HOUSE_OF_WATER
            else:
                final_dest = HOUSE_OF_REBIRTH
        else:
            final_dest = raw_dest

        if not 1 <= final_dest <= BOARD_HOUSES:
            return MoveOutcome.reject(MoveRejectReason.INVALID_DEST)

        occupant = self._cell(final_dest)

        if final_dest in PROTECTED_HOUSES and occupant is not None and occupant is not player:
            return MoveOutcome.reject(MoveRejectReason.PROTECTED_HOUSE)

        if occupant is player:
            return MoveOutcome.reject(MoveRejectReason.OWN_PIECE_BLOCK)

        capture = False
        if occupant is not None:
            if self._is_adjacency_protected(final_dest):
                return MoveOutcome.reject(MoveRejectReason.PROTECTED_PIECE)
            capture = True

        return MoveOutcome.accept(
            MoveInfo(
                offboard=False,
                start=start,
                destination=final_dest,
                capture=capture,
                captured_house=final_dest if capture else None,
            )
        )

    def is_move_legal(self, start: int, steps: int, player: Player | None = None) -> bool:
        return self.can_move(start, steps, player).ok

    # -- Application -----------------------------------------------------------

    def move(self, start: int, steps: int) -> MoveOutcome:
        """Valide puis applique le coup du joueur au trait.

        Une capture échange les pièces : la pièce capturée revient sur la
        maison libérée par l'attaquant.
        """

        player = self.current_player
        outcome = self.can_move(start, steps, player)
        if not outcome.ok:
            return outcome
        info = outcome.info
        assert info is not None

        self._set_cell(start, None)

        if info.offboard:
            self.pieces_off[player] = self.pieces_off.get(player, 0) + 1
        else:
            destination = info.destination
            assert destination is not None
            previous = self._cell(destination)
            if previous is not None and previous is not player:
                self._set_cell(start, previous)
            self._set_cell(destination, player)

        self._post_move_triggers()
        self._settle_victory()
        self._check_piece_conservation()
        return outcome

    def legal_moves(self, steps: int) -> List[LegalMove]:
        """Coups légaux du joueur au trait, par maison de départ croissante."""

        player = self.current_player
        moves: List[LegalMove] = []
        for house in range(1, BOARD_HOUSES + 1):
            if self.cells[house - 1] is not player:
                continue
            outcome = self.can_move(house, steps, player)
            if not outcome.ok:
                continue
            info = outcome.info
            assert info is not None
            moves.append(
                LegalMove(
                    from_house=house,
                    to_house=None if info.offboard else info.destination,
                    offboard=info.offboard,
                )
            )
        return moves

    # -- Sérialisation ---------------------------------------------------------

    def serialize(self) -> Dict[str, Any]:
        """Snapshot JSON-friendly (voir `senet.engine.serialize`)."""

        from senet.engine.serialize import board_to_snapshot

        return board_to_snapshot(self)

    def load(self, snapshot: Mapping[str, Any] | None) -> None:
        """Recharge en place l'état décrit par `snapshot` (ignoré si vide)."""

        if not snapshot:
            return

        from senet.engine.serialize import snapshot_to_board

        restored = snapshot_to_board(snapshot)
        self.cells = restored.cells
        self.current_player = restored.current_player
        self.pieces_off = restored.pieces_off
        self.game_over = restored.game_over
        self.winner = restored.winner
        self.last_roll = restored.last_roll
        self.last_extra_turn = restored.last_extra_turn

    # -- Helpers internes ------------------------------------------------------

    def _cell(self, house: int) -> Cell:
        return self.cells[house - 1]

    def _set_cell(self, house: int, value: Cell) -> None:
        self.cells[house - 1] = value

    def _barriers(self, owner: Player) -> List[Tuple[int, int]]:
        """Rangées maximales d'au moins trois pièces de `owner` (début, fin)."""

        runs: List[Tuple[int, int]] = []
        run_start: int | None = None
        for house in range(1, BOARD_HOUSES + 2):
            occupied = house <= BOARD_HOUSES and self._cell(house) is owner
            if occupied:
                if run_start is None:
                    run_start = house
                continue
            if run_start is not None and house - run_start >= BARRIER_LENGTH:
                runs.append((run_start, house - 1))
            run_start = None
        return runs

    def _is_adjacency_protected(self, house: int) -> bool:
        owner = self._cell(house)
        if owner is None:
            return False
        left = self._cell(house - 1) if house > 1 else None
        right = self._cell(house + 1) if house < BOARD_HOUSES else None
        return left is owner or right is owner

    def _post_move_triggers(self) -> None:
        # Eau → Renaissance dès que la maison 15 est libre.
        water_piece = self._cell(HOUSE_OF_WATER)
        if water_piece is not None and self._cell(HOUSE_OF_REBIRTH) is None:
            self._set_cell(HOUSE_OF_WATER, None)
            self._set_cell(HOUSE_OF_REBIRTH, water_piece)

    def _settle_victory(self) -> None:
        if self.game_over:
            return
        for player in Player:
            if self.pieces_off.get(player, 0) >= PIECES_PER_PLAYER:
                self.game_over = True
                self.winner = player
                return

    def _check_piece_conservation(self) -> None:
        for player in Player:
            on_board = sum(1 for cell in self.cells if cell is player)
            assert on_board + self.pieces_off.get(player, 0) == PIECES_PER_PLAYER, (
                f"Dérive du nombre de pièces pour {player.name}"
            )


__all__ = ["Player", "Board", "Cell", "opening_cells"]
