"""
Unit tests for the stateless move generator.

Each piece kind is checked on small hand-built positions: the sliding gate,
beetle stacking, the grasshopper's straight jump, the ant's perimeter search
and the spider's exact three-slide rule. Placement cells are covered too.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from hive.errors import InvariantViolation
from hive.hive_board import HiveBoard
from hive.hive_cell import HiveCell
from hive.hive_piece import Piece, PieceKind, Player
from hive.stateless_logic import (
    STANDARD_RULES,
    RulesConfig,
    ant_moves,
    beetle_moves,
    grasshopper_moves,
    piece_moves,
    placement_cells,
    queen_moves,
    spider_moves,
)


def cell(q, r):
    """Cell at axial (q, r)."""
    return HiveCell(q, 0, r)


def piece(kind, player=Player.P1):
    return Piece(kind, player)


def destinations(moves, kind):
    """Cells holding a piece of ``kind`` owned by P1 in each candidate board."""
    found = []
    for _, board in moves:
        for c, p in board.items():
            if p.kind == kind and p.player == Player.P1:
                found.append(c)
    return found


# Five pieces around (0, 0), leaving (0, 1) open
POCKET = cell(0, 0)
POCKET_MOUTH = cell(0, 1)
POCKET_WALL = [cell(-1, 0), cell(-1, -1), cell(0, -1), cell(1, 0), cell(1, 1)]
POCKET_PERIMETER = {
    cell(-2, 0), cell(-2, -1), cell(0, 1), cell(-1, 1), cell(-2, -2), cell(-1, -2),
    cell(0, -2), cell(1, -1), cell(2, 0), cell(2, 1), cell(2, 2), cell(1, 2),
}


@pytest.fixture
def pocket_board():
    return HiveBoard({c: piece(PieceKind.GRASSHOPPER, Player.P2) for c in POCKET_WALL})


# ============================================================================
# Configuration
# ============================================================================


class TestRulesConfig:

    def test_standard(self):
        config = RulesConfig.standard()
        assert config.first_cell == HiveCell(0, 0, 0)
        assert config.second_cell == HiveCell(0, 0, 1)
        assert config.queen_deadline_turn == 4
        assert config.spider_steps == 3
        assert sum(n for _, n in config.pieces) == 11

    def test_bad_values(self):
        with pytest.raises(ValueError, match="non-negative"):
            RulesConfig.standard(pieces={"queen": -1})
        with pytest.raises(ValueError, match="Unknown piece kind"):
            RulesConfig.standard(pieces={"ladybug": 1})
        with pytest.raises(ValueError, match="at least one slide"):
            RulesConfig.standard(spider_steps=0)

    def test_custom_bag(self):
        config = RulesConfig.standard(pieces={"queen": 1, "ant": 1})
        inventory = config.initial_inventory()
        assert [p.kind for p in inventory.p1] == [PieceKind.QUEEN, PieceKind.ANT]


# ============================================================================
# Placement
# ============================================================================


class TestPlacementCells:

    def test_opening_cells(self):
        assert placement_cells(HiveBoard(), Player.P1) == [STANDARD_RULES.first_cell]
        one = HiveBoard({STANDARD_RULES.first_cell: piece(PieceKind.ANT)})
        assert placement_cells(one, Player.P2) == [STANDARD_RULES.second_cell]

    def test_never_next_to_opponent(self):
        board = HiveBoard({
            STANDARD_RULES.first_cell: piece(PieceKind.QUEEN, Player.P1),
            STANDARD_RULES.second_cell: piece(PieceKind.QUEEN, Player.P2),
        })
        assert set(placement_cells(board, Player.P1)) == {cell(-1, -1), cell(0, -1), cell(1, 0)}
        for c in placement_cells(board, Player.P2):
            assert c not in board
            assert all(board[n].player == Player.P2 for n in board.occupied_neighbors(c))

    def test_beetle_on_top_decides_colour(self):
        covered = piece(PieceKind.BEETLE, Player.P2).climb_onto(piece(PieceKind.QUEEN, Player.P1))
        board = HiveBoard({cell(0, 0): covered, cell(1, 0): piece(PieceKind.ANT, Player.P1)})
        cells = placement_cells(board, Player.P1)
        assert all(cell(0, 0) not in c.neighbors() for c in cells)
        assert cell(2, 0) in cells

    def test_no_own_pieces(self):
        board = HiveBoard({cell(0, 0): piece(PieceKind.ANT), cell(1, 0): piece(PieceKind.ANT)})
        assert placement_cells(board, Player.P2) == []

    def test_climbed_opening_is_not_overwritten(self):
        # P1's beetle climbed onto P2's first piece: one cell, two pieces
        stack = piece(PieceKind.BEETLE, Player.P1).climb_onto(piece(PieceKind.SPIDER, Player.P2))
        board = HiveBoard({STANDARD_RULES.second_cell: stack})
        assert placement_cells(board, Player.P2) == []
        assert placement_cells(board, Player.P1) == sorted(STANDARD_RULES.second_cell.neighbors())

    def test_climbed_origin_keeps_opponent_rule(self):
        stack = piece(PieceKind.BEETLE, Player.P2).climb_onto(piece(PieceKind.ANT, Player.P1))
        board = HiveBoard({STANDARD_RULES.first_cell: stack})
        assert STANDARD_RULES.second_cell not in placement_cells(board, Player.P1)
        assert placement_cells(board, Player.P1) == []

    def test_opening_cell_never_occupied(self):
        board = HiveBoard({STANDARD_RULES.second_cell: piece(PieceKind.ANT, Player.P1)})
        assert placement_cells(board, Player.P2) == []


# ============================================================================
# Queen
# ============================================================================


class TestQueenMoves:

    def test_single_slide(self):
        board = HiveBoard({cell(0, 0): piece(PieceKind.QUEEN), cell(1, 0): piece(PieceKind.ANT, Player.P2)})
        moves = queen_moves(board, cell(0, 0))
        assert len(moves) == 5
        assert all(queen == target for queen, target in zip((m[0] for m in moves), destinations(moves, PieceKind.QUEEN)))
        connected = {q for q, b in moves if b.is_connected()}
        assert connected == {cell(0, -1), cell(1, 1)}

    def test_gate_blocks_queen(self):
        board = HiveBoard({
            cell(0, 0): piece(PieceKind.QUEEN),
            cell(-1, 0): piece(PieceKind.ANT, Player.P2),
            cell(0, -1): piece(PieceKind.ANT, Player.P2),
        })
        targets = {q for q, _ in queen_moves(board, cell(0, 0))}
        assert cell(-1, -1) not in targets


# ============================================================================
# Beetle
# ============================================================================


class TestBeetleMoves:

    def test_six_targets_ignoring_gate(self):
        board = HiveBoard({
            cell(0, 0): piece(PieceKind.BEETLE),
            cell(-1, 0): piece(PieceKind.ANT, Player.P2),
            cell(0, -1): piece(PieceKind.ANT, Player.P2),
        })
        moves = beetle_moves(board, cell(0, 0))
        assert len(moves) == 6
        assert all(queen is None for queen, _ in moves)
        assert any(b.get(cell(-1, -1)) == piece(PieceKind.BEETLE) for _, b in moves)

    def test_climb_on(self):
        queen = piece(PieceKind.QUEEN, Player.P2)
        board = HiveBoard({cell(0, 0): piece(PieceKind.BEETLE), cell(1, 0): queen})
        climbed = [b for _, b in beetle_moves(board, cell(0, 0)) if len(b) == 1]
        assert climbed == [HiveBoard({cell(1, 0): piece(PieceKind.BEETLE).climb_onto(queen)})]
        assert climbed[0].piece_count() == 2

    def test_climb_off_restores_piece_beneath(self):
        queen = piece(PieceKind.QUEEN, Player.P2)
        board = HiveBoard({
            cell(1, 0): piece(PieceKind.BEETLE).climb_onto(queen),
            cell(2, 0): piece(PieceKind.ANT, Player.P2),
        })
        moves = beetle_moves(board, cell(1, 0))
        for _, b in moves:
            assert b[cell(1, 0)] == queen
        back = HiveBoard({
            cell(0, 0): piece(PieceKind.BEETLE),
            cell(1, 0): queen,
            cell(2, 0): piece(PieceKind.ANT, Player.P2),
        })
        assert back in [b for _, b in moves]

    def test_beetle_onto_beetle_stack(self):
        bottom = piece(PieceKind.QUEEN, Player.P1)
        middle = piece(PieceKind.BEETLE, Player.P2).climb_onto(bottom)
        board = HiveBoard({cell(0, 0): piece(PieceKind.BEETLE), cell(1, 0): middle})
        climbed = [b for _, b in beetle_moves(board, cell(0, 0)) if len(b) == 1][0]
        top = climbed[cell(1, 0)]
        assert top.height == 3
        assert [(p.kind, p.player) for p in top.stack()] == [
            (PieceKind.BEETLE, Player.P1),
            (PieceKind.BEETLE, Player.P2),
            (PieceKind.QUEEN, Player.P1),
        ]

        moves = beetle_moves(climbed, cell(1, 0))
        assert all(b[cell(1, 0)] == middle for _, b in moves)


# ============================================================================
# Grasshopper
# ============================================================================


class TestGrasshopperMoves:

    def test_jumps_over_line(self):
        board = HiveBoard({
            cell(0, 0): piece(PieceKind.GRASSHOPPER),
            cell(1, 0): piece(PieceKind.ANT, Player.P2),
            cell(2, 0): piece(PieceKind.ANT, Player.P2),
        })
        moves = grasshopper_moves(board, cell(0, 0))
        assert destinations(moves, PieceKind.GRASSHOPPER) == [cell(3, 0)]

    def test_no_zero_hop_jump(self):
        board = HiveBoard({
            cell(0, 0): piece(PieceKind.GRASSHOPPER),
            cell(0, 1): piece(PieceKind.ANT, Player.P2),
        })
        landed = destinations(grasshopper_moves(board, cell(0, 0)), PieceKind.GRASSHOPPER)
        assert landed == [cell(0, 2)]
        assert not any(c in cell(0, 0).neighbors() for c in landed)

    def test_isolated_grasshopper_cannot_move(self):
        board = HiveBoard({cell(0, 0): piece(PieceKind.GRASSHOPPER)})
        assert grasshopper_moves(board, cell(0, 0)) == []

    def test_jumps_in_every_blocked_direction(self):
        board = HiveBoard({cell(0, 0): piece(PieceKind.GRASSHOPPER)})
        for n in cell(0, 0).neighbors():
            board = board.with_piece(n, piece(PieceKind.ANT, Player.P2))
        landed = destinations(grasshopper_moves(board, cell(0, 0)), PieceKind.GRASSHOPPER)
        assert len(landed) == 6
        assert all(cell(0, 0).distance(c) == 2 for c in landed)


# ============================================================================
# Ant
# ============================================================================


class TestAntMoves:

    def test_walks_around_single_piece(self):
        board = HiveBoard({cell(0, 0): piece(PieceKind.QUEEN, Player.P2), cell(1, 0): piece(PieceKind.ANT)})
        reached = destinations(ant_moves(board, cell(1, 0)), PieceKind.ANT)
        # Cells touching only the ant's own cell are stops too
        assert set(reached) == set(cell(0, 0).neighbors()) | {cell(1, -1), cell(2, 0), cell(2, 1)}
        assert len(reached) == len(set(reached))

    def test_perimeter_but_not_pocket(self, pocket_board):
        board = pocket_board.with_piece(cell(2, 1), piece(PieceKind.ANT))
        reached = set(destinations(ant_moves(board, cell(2, 1)), PieceKind.ANT))
        assert POCKET not in reached
        assert POCKET_MOUTH in reached
        assert reached == POCKET_PERIMETER | {cell(3, 1), cell(3, 2)}

    def test_can_come_back_to_origin(self):
        board = HiveBoard({cell(-1, 0): piece(PieceKind.QUEEN, Player.P2), cell(0, 0): piece(PieceKind.ANT)})
        moves = ant_moves(board, cell(0, 0))
        assert cell(0, 0) in destinations(moves, PieceKind.ANT)
        assert (None, board) in moves

    def test_boards_keep_other_pieces(self, pocket_board):
        board = pocket_board.with_piece(cell(2, 1), piece(PieceKind.ANT))
        for _, b in ant_moves(board, cell(2, 1)):
            assert len(b) == len(board)
            assert all(b[c] == board[c] for c in POCKET_WALL)


# ============================================================================
# Spider
# ============================================================================


class TestSpiderMoves:

    def test_exactly_three_slides(self):
        board = HiveBoard({cell(0, 0): piece(PieceKind.QUEEN, Player.P2), cell(1, 0): piece(PieceKind.SPIDER)})
        reached = destinations(spider_moves(board, cell(1, 0)), PieceKind.SPIDER)
        assert len(reached) == len(set(reached))
        assert set(reached) == (set(cell(0, 0).neighbors()) - {cell(1, 0)}) | {cell(1, -1), cell(2, 0), cell(2, 1)}

    def test_depth_decides_destinations(self):
        board = HiveBoard({cell(0, 0): piece(PieceKind.QUEEN, Player.P2), cell(1, 0): piece(PieceKind.SPIDER)})
        two = set(destinations(spider_moves(board, cell(1, 0), steps=2), PieceKind.SPIDER))
        three = set(destinations(spider_moves(board, cell(1, 0), steps=3), PieceKind.SPIDER))
        assert cell(-1, 0) not in two
        assert cell(-1, 0) in three
        assert cell(1, 0) not in two | three

    def test_pocket_perimeter(self, pocket_board):
        board = pocket_board.with_piece(cell(2, 1), piece(PieceKind.SPIDER))
        reached = set(destinations(spider_moves(board, cell(2, 1)), PieceKind.SPIDER))
        assert POCKET not in reached
        assert reached == {
            cell(0, 1), cell(1, 2), cell(2, 2), cell(3, 2),
            cell(0, -2), cell(1, -1), cell(2, 0), cell(3, 1),
        }

    def test_configurable_steps(self):
        board = HiveBoard({cell(0, 0): piece(PieceKind.QUEEN, Player.P2), cell(1, 0): piece(PieceKind.SPIDER)})
        reached = set(destinations(spider_moves(board, cell(1, 0), steps=1), PieceKind.SPIDER))
        assert reached == {cell(1, 1), cell(0, -1), cell(1, -1), cell(2, 0), cell(2, 1)}


# ============================================================================
# Dispatch
# ============================================================================


class TestPieceMoves:

    def test_empty_cell_is_fatal(self):
        with pytest.raises(InvariantViolation, match="No piece"):
            piece_moves(HiveBoard(), cell(0, 0))

    @pytest.mark.parametrize("kind, expected", [
        (PieceKind.QUEEN, queen_moves),
        (PieceKind.BEETLE, beetle_moves),
        (PieceKind.GRASSHOPPER, grasshopper_moves),
        (PieceKind.ANT, ant_moves),
        (PieceKind.SPIDER, spider_moves),
    ])
    def test_dispatch(self, kind, expected):
        board = HiveBoard({cell(0, 0): piece(PieceKind.QUEEN, Player.P2), cell(1, 0): piece(kind)})
        assert piece_moves(board, cell(1, 0)) == expected(board, cell(1, 0))
