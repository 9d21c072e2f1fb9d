"""Hive move generation engine."""

from .errors import InvariantViolation  # noqa: F401
from .hive_board import HiveBoard  # noqa: F401
from .hive_cell import HiveCell, canonicalize  # noqa: F401
from .hive_piece import HiveInventory, Piece, PieceKind, Player  # noqa: F401
from .hive_state import HiveState, get_moves, validate  # noqa: F401
from .stateless_logic import STANDARD_RULES, RulesConfig  # noqa: F401
