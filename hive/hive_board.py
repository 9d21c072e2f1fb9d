"""Immutable Hive board: a mapping from cell to the piece on top of it."""

from __future__ import annotations

from collections import deque
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from hive.errors import InvariantViolation
from hive.hive_cell import HiveCell
from hive.hive_piece import Piece, Player


class HiveBoard:
    """Occupied cells of the hive.

    Each occupied cell maps to its top piece; a beetle carries whatever it sits
    on. Empty cells have no entry. Storage order is irrelevant: equality,
    hashing and ordering all use the entries sorted by cell, so two boards
    holding the same pieces are equal whatever order they were built in.

    Boards are never changed in place. ``with_piece``, ``without_piece`` and
    ``moved`` return new boards.
    """

    __slots__ = ("_cells", "_sorted_items", "_hash")

    def __init__(self, cells: Optional[Mapping[HiveCell, Piece]] = None):
        self._cells: Dict[HiveCell, Piece] = dict(cells) if cells else {}
        self._sorted_items: Optional[Tuple[Tuple[HiveCell, Piece], ...]] = None
        self._hash: Optional[int] = None

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, cell: object) -> bool:
        return cell in self._cells

    def __iter__(self) -> Iterator[HiveCell]:
        return iter(self._cells)

    def __getitem__(self, cell: HiveCell) -> Piece:
        return self._cells[cell]

    def get(self, cell: HiveCell, default: Optional[Piece] = None) -> Optional[Piece]:
        return self._cells.get(cell, default)

    def items(self):
        return self._cells.items()

    def cells(self) -> List[HiveCell]:
        return list(self._cells)

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def sorted_items(self) -> Tuple[Tuple[HiveCell, Piece], ...]:
        if self._sorted_items is None:
            self._sorted_items = tuple(sorted(self._cells.items(), key=lambda item: item[0]))
        return self._sorted_items

    def sort_key(self) -> tuple:
        return tuple((cell.abc, piece.sort_key()) for cell, piece in self.sorted_items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HiveBoard):
            return NotImplemented
        return self.sorted_items() == other.sorted_items()

    def __lt__(self, other: "HiveBoard") -> bool:
        if not isinstance(other, HiveBoard):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self.sorted_items())
        return self._hash

    def __repr__(self) -> str:
        entries = ", ".join(f"{cell!r}: {piece!r}" for cell, piece in self.sorted_items())
        return f"HiveBoard({{{entries}}})"

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def with_piece(self, cell: HiveCell, piece: Piece) -> "HiveBoard":
        """Return a board with ``piece`` as the top of ``cell``."""
        cells = dict(self._cells)
        cells[cell] = piece
        return HiveBoard(cells)

    def without_piece(self, cell: HiveCell) -> "HiveBoard":
        """Return a board with the entry at ``cell`` removed."""
        if cell not in self._cells:
            raise InvariantViolation(f"No piece at {cell!r} to remove")
        cells = dict(self._cells)
        del cells[cell]
        return HiveBoard(cells)

    def moved(self, src: HiveCell, dst: HiveCell) -> "HiveBoard":
        """Return a board with the entry at ``src`` relocated to ``dst``."""
        if src not in self._cells:
            raise InvariantViolation(f"No piece at {src!r} to move")
        cells = dict(self._cells)
        cells[dst] = cells.pop(src)
        return HiveBoard(cells)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def occupied_neighbors(self, cell: HiveCell) -> List[HiveCell]:
        return [n for n in cell.neighbors() if n in self._cells]

    def touches_hive(self, cell: HiveCell) -> bool:
        """True if any neighbour of ``cell`` is occupied."""
        return any(n in self._cells for n in cell.neighbors())

    def pieces_of(self, player: Player) -> List[Tuple[HiveCell, Piece]]:
        """Cells whose top piece belongs to ``player``, sorted by cell."""
        return [(cell, piece) for cell, piece in self.sorted_items() if piece.player == player]

    def piece_count(self) -> int:
        """Number of pieces on the board, stacked pieces included."""
        return sum(piece.height for piece in self._cells.values())

    def all_cells_canonical(self) -> bool:
        return all(cell.is_canonical() for cell in self._cells)

    def component_size(self, start: Optional[HiveCell]) -> int:
        """Count occupied cells reachable from ``start`` (0 when start is None)."""
        if start is None:
            return 0
        visited = {start}
        queue = deque([start])
        while queue:
            cell = queue.popleft()
            for neighbor in cell.neighbors():
                if neighbor in self._cells and neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)
        return len(visited)

    def is_connected(self) -> bool:
        """One-hive rule: every occupied cell belongs to a single group."""
        start = next(iter(self._cells), None)
        return self.component_size(start) == len(self._cells)
