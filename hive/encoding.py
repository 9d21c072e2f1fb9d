"""Observation tensors for ML consumers of the engine.

The board is unbounded, so the spatial tensor covers the axial bounding box of
the occupied cells plus one ring of padding (every placement or move target is
inside it). ``origin`` gives the axial coordinate of ``spatial[:, 0, 0]``.

Spatial layout (float32, shape (11, H, W)):
    Layers 0-4:  Player 1 top pieces (queen, beetle, ant, grasshopper, spider)
    Layers 5-9:  Player 2 top pieces (same order)
    Layer 10:    Stack height (0 = empty)

Global layout (float32, shape (14,)):
    [0-4]:   Player 1 unplaced counts (queen, beetle, ant, grasshopper, spider)
    [5-9]:   Player 2 unplaced counts
    [10]:    Turn
    [11]:    Active player (0 = Player 1, 1 = Player 2)
    [12-13]: Queen placed flags (Player 1, Player 2)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from hive.hive_piece import PieceKind, Player

if TYPE_CHECKING:  # pragma: no cover
    from hive.hive_state import HiveState

NUM_KINDS = len(PieceKind)
HEIGHT_LAYER = 2 * NUM_KINDS
SPATIAL_LAYERS = HEIGHT_LAYER + 1

P1_UNPLACED_SLICE = slice(0, NUM_KINDS)
P2_UNPLACED_SLICE = slice(NUM_KINDS, 2 * NUM_KINDS)
TURN = 2 * NUM_KINDS
CUR_PLAYER = TURN + 1
P1_QUEEN_PLACED = TURN + 2
P2_QUEEN_PLACED = TURN + 3
GLOBAL_SIZE = TURN + 4


def piece_layer(kind: PieceKind, player: Player) -> int:
    """Spatial layer index for a top piece of ``kind`` owned by ``player``."""
    offset = 0 if player == Player.P1 else NUM_KINDS
    return offset + int(kind) - 1


def encode_state(state: "HiveState") -> dict:
    """Returns complete observable game state for ML.

    Returns:
        dict: Complete state with keys:
            - 'spatial': (11, H, W) ndarray - top pieces and stack heights
            - 'global': (14,) ndarray - unplaced counts, turn, current player, queen flags
            - 'player': int - 1 for Player 1, -1 for Player 2 (perspective value)
            - 'origin': (q, r) axial coordinate of spatial[:, 0, 0]
    """
    board = state.board
    if len(board) == 0:
        q_min = r_min = 0
        height = width = 1
    else:
        axials = np.array([cell.axial for cell in board], dtype=np.int64)
        q_min, r_min = (axials.min(axis=0) - 1).tolist()
        q_max, r_max = (axials.max(axis=0) + 1).tolist()
        height = r_max - r_min + 1
        width = q_max - q_min + 1

    spatial = np.zeros((SPATIAL_LAYERS, height, width), dtype=np.float32)
    for cell, piece in board.items():
        q, r = cell.axial
        y, x = r - r_min, q - q_min
        spatial[piece_layer(piece.kind, piece.player), y, x] = 1
        spatial[HEIGHT_LAYER, y, x] = piece.height

    global_state = np.zeros(GLOBAL_SIZE, dtype=np.float32)
    for player, slot in ((Player.P1, P1_UNPLACED_SLICE), (Player.P2, P2_UNPLACED_SLICE)):
        global_state[slot] = [state.unplaced.count(player, kind) for kind in PieceKind]
    global_state[TURN] = state.turn
    global_state[CUR_PLAYER] = 0 if state.active == Player.P1 else 1
    global_state[P1_QUEEN_PLACED] = state.p1_queen is not None
    global_state[P2_QUEEN_PLACED] = state.p2_queen is not None

    return {
        "spatial": spatial,
        "global": global_state,
        "player": 1 if state.active == Player.P1 else -1,
        "origin": (int(q_min), int(r_min)),
    }
