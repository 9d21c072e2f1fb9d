"""Immutable Hive game state and one-ply successor generation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Set

from hive.encoding import encode_state
from hive.hive_board import HiveBoard
from hive.hive_cell import HiveCell
from hive.hive_piece import HiveInventory, Player
from hive.stateless_logic import (
    STANDARD_RULES,
    RulesConfig,
    movement_candidates,
    placement_candidates,
)
from hive.utils.player_utils import format_player_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HiveState:
    """A position plus the bookkeeping needed to continue from it.

    Attributes:
        turn: Full rounds played; increases after player 2 moves
        active: Player to move
        p1_queen: Cell of player 1's queen, None until placed
        p2_queen: Cell of player 2's queen, None until placed
        unplaced: Pieces not yet on the board (ordered per player)
        board: Occupied cells

    States are never modified. ``next_turn`` and ``get_moves`` build new ones,
    so states can be shared, hashed into sets and used as search-tree keys.
    """

    turn: int = 0
    active: Player = Player.P1
    p1_queen: Optional[HiveCell] = None
    p2_queen: Optional[HiveCell] = None
    unplaced: HiveInventory = field(default_factory=STANDARD_RULES.initial_inventory)
    board: HiveBoard = field(default_factory=HiveBoard)

    @classmethod
    def initial(cls, config: RulesConfig = STANDARD_RULES) -> "HiveState":
        """Turn 0, player 1 to move, full bags, empty board."""
        return cls(unplaced=config.initial_inventory())

    def __str__(self) -> str:
        return (
            f"Turn {self.turn}, {format_player_name(self.active)} to move, "
            f"{self.board.piece_count()} pieces on the board"
        )

    def sort_key(self) -> tuple:
        return (
            self.turn,
            int(self.active),
            self.p1_queen.abc if self.p1_queen is not None else (),
            self.p2_queen.abc if self.p2_queen is not None else (),
            self.unplaced.sort_key(),
            self.board.sort_key(),
        )

    def __lt__(self, other: "HiveState") -> bool:
        if not isinstance(other, HiveState):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def queen_of(self, player: Player) -> Optional[HiveCell]:
        return self.p1_queen if player == Player.P1 else self.p2_queen

    def next_turn(
        self,
        queen: Optional[HiveCell] = None,
        unplaced: Optional[HiveInventory] = None,
        board: Optional[HiveBoard] = None,
    ) -> "HiveState":
        """Return the state after the active player's ply.

        Args:
            queen: New location of the mover's queen, None if it did not change
            unplaced: Inventory after the ply, None to carry it over
            board: Board after the ply

        Returns:
            HiveState with the other player to move
        """
        mover = self.active
        return HiveState(
            turn=self.turn + 1 if mover == Player.P2 else self.turn,
            active=mover.opponent,
            p1_queen=queen if mover == Player.P1 and queen is not None else self.p1_queen,
            p2_queen=queen if mover == Player.P2 and queen is not None else self.p2_queen,
            unplaced=unplaced if unplaced is not None else self.unplaced,
            board=board if board is not None else self.board,
        )

    def validate(self, config: RulesConfig = STANDARD_RULES) -> bool:
        """Check the one-hive rule and the queen deadline.

        After the deadline turn both queens must be on the board. On the
        deadline turn itself, with player 2 to move, player 1's queen must be.
        """
        if not self.board.is_connected():
            return False

        deadline = config.queen_deadline_turn
        if self.turn > deadline:
            return self.p1_queen is not None and self.p2_queen is not None
        if self.turn == deadline and self.active == Player.P2:
            return self.p1_queen is not None
        return True

    def get_moves(self, config: RulesConfig = STANDARD_RULES) -> Set["HiveState"]:
        """Return every legal state one ply from this one.

        Placements and movements of the active player's pieces are wrapped with
        ``next_turn``, collapsed into a set and filtered with ``validate``. An
        empty set means the active player has no legal move.
        """
        candidates: Set[HiveState] = set()
        for queen, unplaced, board in placement_candidates(self, config):
            candidates.add(self.next_turn(queen, unplaced, board))
        placements = len(candidates)

        for queen, board in movement_candidates(self.board, self.active, config):
            candidates.add(self.next_turn(queen, None, board))

        moves = {state for state in candidates if state.validate(config)}
        logger.debug(
            f"{self}: {placements} placement and {len(candidates) - placements} movement "
            f"candidates, {len(moves)} legal"
        )
        return moves

    def get_current_state(self):
        """Returns the observation tensors for ML (see hive.encoding.encode_state)."""
        return encode_state(self)


def get_moves(state: HiveState, config: RulesConfig = STANDARD_RULES) -> Set[HiveState]:
    """Legal one-ply successors of ``state``."""
    return state.get_moves(config)


def validate(state: HiveState, config: RulesConfig = STANDARD_RULES) -> bool:
    """True if ``state`` is a legal position."""
    return state.validate(config)
