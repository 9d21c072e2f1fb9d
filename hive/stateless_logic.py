"""Stateless move generation for Hive.

All functions are pure: same inputs -> same outputs.
No side effects, no mutations, no hidden state.

This enables:
- Sharing one board snapshot across every piece search
- Hashing and deduplicating candidate positions
- Search-tree exploration without aliasing

Architecture:
    RulesConfig: Immutable configuration (opening cells, piece bag, deadlines)
    Pure functions: Take (board, ..., config) -> return candidate boards

Usage:
    config = RulesConfig.standard()
    cells = placement_cells(board, Player.P1, config)
    for queen, new_board in piece_moves(board, cell, config):
        ...
"""

import logging
from typing import TYPE_CHECKING, Iterator, List, NamedTuple, Optional, Set, Tuple

from hive.constants import (
    FIRST_CELL,
    QUEEN_DEADLINE_TURN,
    SECOND_CELL,
    SPIDER_STEPS,
    STANDARD_PIECES,
)
from hive.errors import InvariantViolation
from hive.hive_board import HiveBoard
from hive.hive_cell import DIRECTIONS, HiveCell
from hive.hive_piece import HiveInventory, Piece, PieceKind, Player

if TYPE_CHECKING:  # pragma: no cover
    from hive.hive_state import HiveState

logger = logging.getLogger(__name__)

# (queen location update or None, resulting board)
MoveCandidate = Tuple[Optional[HiveCell], HiveBoard]


class RulesConfig(NamedTuple):
    """Immutable rules configuration.

    Contains all constants needed by the stateless move generator.
    Shared across every state of a game - only created once.
    """
    # Opening cells
    first_cell: HiveCell  # (0, 0, 0)
    second_cell: HiveCell  # (0, 0, 1), a neighbour of first_cell

    # Unplaced bag per player, in inventory order
    pieces: Tuple[Tuple[PieceKind, int], ...]  # ((QUEEN, 1), (BEETLE, 2), ...)

    # Queen rule and spider range
    queen_deadline_turn: int  # 4
    spider_steps: int  # 3

    @classmethod
    def standard(cls, pieces=None, queen_deadline_turn=QUEEN_DEADLINE_TURN, spider_steps=SPIDER_STEPS):
        """Create the standard RulesConfig.

        Args:
            pieces: Optional mapping of piece name -> count (default: STANDARD_PIECES)
            queen_deadline_turn: Turn by which player 1's queen must be placed
            spider_steps: Exact number of slides a spider makes

        Returns:
            RulesConfig instance
        """
        if pieces is None:
            pieces = STANDARD_PIECES
        bag = tuple((PieceKind.from_name(name), int(count)) for name, count in pieces.items())
        if any(count < 0 for _, count in bag):
            raise ValueError(f"Piece counts must be non-negative: {dict(pieces)}")
        if spider_steps < 1:
            raise ValueError(f"Spider must make at least one slide, got {spider_steps}")

        first = HiveCell(*FIRST_CELL)
        second = HiveCell(*SECOND_CELL)
        if second not in first.neighbors():
            raise ValueError(f"Opening cells {first!r} and {second!r} are not adjacent")

        return cls(
            first_cell=first,
            second_cell=second,
            pieces=bag,
            queen_deadline_turn=queen_deadline_turn,
            spider_steps=spider_steps,
        )

    def initial_inventory(self) -> HiveInventory:
        return HiveInventory.standard(self.pieces)


STANDARD_RULES = RulesConfig.standard()


# ============================================================================
# PLACEMENT
# ============================================================================

def placement_cells(board: HiveBoard, active: Player, config: RulesConfig = STANDARD_RULES) -> List[HiveCell]:
    """Cells where ``active`` may put a new piece.

    The first piece of the game goes on ``config.first_cell`` and the second on
    ``config.second_cell``. After that a new piece must touch the hive and may
    only touch pieces of its own colour.

    The opening is keyed on pieces placed, not cells occupied: a beetle that
    climbs on turn 1 leaves one occupied cell holding two pieces.
    """
    placed = board.piece_count()
    if placed < 2:
        opening = config.first_cell if placed == 0 else config.second_cell
        return [] if opening in board else [opening]

    candidates: Set[HiveCell] = set()
    for cell, _ in board.pieces_of(active):
        candidates.update(n for n in cell.neighbors() if n not in board)

    return sorted(
        cell for cell in candidates
        if all(board[n].player == active for n in board.occupied_neighbors(cell))
    )


def placement_candidates(
    state: "HiveState", config: RulesConfig = STANDARD_RULES
) -> Iterator[Tuple[Optional[HiveCell], HiveInventory, HiveBoard]]:
    """Yield ``(queen update, inventory, board)`` for every placement.

    Every unplaced index is tried on every placement cell; identical pieces
    give identical results, which the caller deduplicates.
    """
    cells = placement_cells(state.board, state.active, config)
    bag_size = len(state.unplaced.for_player(state.active))
    for index in range(bag_size):
        piece, inventory = state.unplaced.remove(state.active, index)
        for cell in cells:
            queen = cell if piece.kind == PieceKind.QUEEN else None
            yield queen, inventory, state.board.with_piece(cell, piece)


# ============================================================================
# MOVEMENT
# ============================================================================

def queen_moves(board: HiveBoard, cell: HiveCell) -> List[MoveCandidate]:
    """One sliding step; the queen location follows the queen."""
    return [(target, board.moved(cell, target)) for target in cell.movable_neighbors(board)]


def beetle_moves(board: HiveBoard, cell: HiveCell) -> List[MoveCandidate]:
    """One step in any direction, climbing on or off the hive.

    The beetle is not held by the sliding gate. Whatever it was carrying is
    left behind on ``cell``; whatever occupies the target ends up beneath it.
    """
    beetle, left_behind = board[cell].climb_off()
    lifted = board.without_piece(cell)
    if left_behind is not None:
        lifted = lifted.with_piece(cell, left_behind)

    moves = []
    for target in cell.neighbors():
        moves.append((None, lifted.with_piece(target, beetle.climb_onto(lifted.get(target)))))
    return moves


def grasshopper_moves(board: HiveBoard, cell: HiveCell) -> List[MoveCandidate]:
    """Jump in a straight line over at least one piece to the first gap."""
    moves = []
    for axis, direction in DIRECTIONS:
        target = cell.step(axis, direction)
        if target not in board:
            # Nothing to jump over in this direction
            continue
        while target in board:
            target = target.step(axis, direction)
        moves.append((None, board.moved(cell, target)))
    return moves


def _slide_targets(board: HiveBoard, lifted: HiveBoard, position: HiveCell) -> List[HiveCell]:
    """Gated slides from ``position`` that keep perimeter contact.

    The gate is judged on ``lifted`` (the board without the moving piece, the
    piece standing on ``position``). Contact is judged on the original
    ``board``, so the mover's starting cell counts as part of the hive.
    """
    return [
        target for target in position.movable_neighbors(lifted)
        if board.touches_hive(target)
    ]


def ant_moves(board: HiveBoard, cell: HiveCell) -> List[MoveCandidate]:
    """Any number of slides around the outside of the hive.

    One visited set is shared by the whole search and starts empty, so the
    origin is a destination once the ant slides back onto it. Every cell
    reached is a destination.
    """
    ant = board[cell]
    lifted = board.without_piece(cell)
    visited: Set[HiveCell] = set()
    frontier = [cell]
    moves = []
    while frontier:
        position = frontier.pop()
        for target in _slide_targets(board, lifted, position):
            if target in visited:
                continue
            visited.add(target)
            frontier.append(target)
            moves.append((None, lifted.with_piece(target, ant)))
    logger.debug(f"Ant at {cell!r}: {len(moves)} destinations")
    return moves


def spider_moves(board: HiveBoard, cell: HiveCell, steps: int = SPIDER_STEPS) -> List[MoveCandidate]:
    """Exactly ``steps`` slides, never revisiting a cell along the way.

    Each slide keeps the same perimeter contact as the ant. Shorter paths are
    not moves: only cells reached by a path of full length are destinations,
    each listed once.
    """
    spider = board[cell]
    lifted = board.without_piece(cell)
    destinations: Set[HiveCell] = set()
    frontier = [(cell, (cell,))]
    while frontier:
        position, path = frontier.pop()
        for target in _slide_targets(board, lifted, position):
            if target in path:
                continue
            if len(path) == steps:
                destinations.add(target)
            else:
                frontier.append((target, path + (target,)))
    logger.debug(f"Spider at {cell!r}: {len(destinations)} destinations")
    return [(None, lifted.with_piece(target, spider)) for target in sorted(destinations)]


def piece_moves(board: HiveBoard, cell: HiveCell, config: RulesConfig = STANDARD_RULES) -> List[MoveCandidate]:
    """Candidate ``(queen update, board)`` pairs for the top piece on ``cell``.

    Candidates are not yet checked against the one-hive rule.
    """
    piece: Optional[Piece] = board.get(cell)
    if piece is None:
        raise InvariantViolation(f"No piece at {cell!r} to move")

    if piece.kind == PieceKind.QUEEN:
        return queen_moves(board, cell)
    if piece.kind == PieceKind.BEETLE:
        return beetle_moves(board, cell)
    if piece.kind == PieceKind.GRASSHOPPER:
        return grasshopper_moves(board, cell)
    if piece.kind == PieceKind.ANT:
        return ant_moves(board, cell)
    if piece.kind == PieceKind.SPIDER:
        return spider_moves(board, cell, config.spider_steps)
    raise InvariantViolation(f"Unknown piece kind {piece.kind!r}")


def movement_candidates(board: HiveBoard, active: Player, config: RulesConfig = STANDARD_RULES) -> Iterator[MoveCandidate]:
    """Yield movement candidates for every top piece owned by ``active``."""
    for cell, _ in board.pieces_of(active):
        yield from piece_moves(board, cell, config)
