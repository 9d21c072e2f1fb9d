"""Three-axis hex cell coordinates.

A cell is written as three signed integers ``(a, b, c)``. Stepping +/-1 along
any single axis reaches one of the six neighbours, so the encoding is
over-complete: only two of the axes are independent and

    (a, b, c) == (a + 1, b - 1, c + 1)

names the same physical cell. Every ``HiveCell`` is canonicalized when it is
built, so two cells compare and hash equal iff they are the same hex.

Canonical form:
    The transform ``(a + 1, b - 1, c + 1)`` is applied while ``b > 0 and c < 0``
    and undone while the undone cell still avoids that condition. In closed
    form, with ``k = min(b, -c)`` the canonical cell is ``(a + k, b - k, c + k)``.
    It always has ``b == 0 and c <= 0`` or ``c == 0 and b > 0``.

Geometry:
    With unit vectors e_a at 0 degrees, e_b at 60 and e_c at 120 (e_b = e_a + e_c)
    the neighbour ring ``-a, -b, -c, +a, +b, +c`` walks the six directions in
    order (180, 240, 300, 0, 60, 120 degrees).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List, Tuple

from hive.errors import InvariantViolation

if TYPE_CHECKING:  # pragma: no cover
    from hive.hive_board import HiveBoard


# (axis, delta) pairs in ring order
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, -1), (1, -1), (2, -1), (0, 1), (1, 1), (2, 1))


def canonicalize(a: int, b: int, c: int) -> Tuple[int, int, int]:
    """Return the canonical ``(a, b, c)`` triple for a cell."""
    k = min(b, -c)
    return a + k, b - k, c + k


@dataclass(frozen=True, order=True)
class HiveCell:
    """A single hexagonal position in canonical three-axis form."""

    a: int
    b: int
    c: int

    def __post_init__(self) -> None:
        a, b, c = canonicalize(int(self.a), int(self.b), int(self.c))
        object.__setattr__(self, "a", a)
        object.__setattr__(self, "b", b)
        object.__setattr__(self, "c", c)

    def __getitem__(self, axis: int) -> int:
        if axis == 0:
            return self.a
        if axis == 1:
            return self.b
        if axis == 2:
            return self.c
        raise InvariantViolation(f"HiveCell has 3 axes but the index was {axis}")

    def __iter__(self) -> Iterator[int]:
        return iter((self.a, self.b, self.c))

    def __repr__(self) -> str:
        return f"HiveCell({self.a}, {self.b}, {self.c})"

    @property
    def abc(self) -> Tuple[int, int, int]:
        return self.a, self.b, self.c

    @property
    def axial(self) -> Tuple[int, int]:
        """Independent 2-D coordinate ``(a + b, b + c)`` (e_a, e_c basis)."""
        return self.a + self.b, self.b + self.c

    def is_canonical(self) -> bool:
        return canonicalize(self.a, self.b, self.c) == self.abc

    def step(self, axis: int, direction: int) -> "HiveCell":
        """Return the cell one unit along ``axis`` in ``direction`` (+1 or -1)."""
        if direction not in (-1, 1):
            raise InvariantViolation(f"Step direction must be -1 or 1, got {direction}")
        values = [self.a, self.b, self.c]
        values[axis] = self[axis] + direction
        return HiveCell(*values)

    def neighbors(self) -> List["HiveCell"]:
        """Return the six adjacent cells in ring order."""
        return [self.step(axis, direction) for axis, direction in DIRECTIONS]

    def movable_neighbors(self, board: "HiveBoard") -> List["HiveCell"]:
        """Return the empty neighbours a piece on this cell can slide into.

        Sliding gate: walking the ring, every cyclically adjacent pair of empty
        neighbours makes both of them targets. A neighbour flanked by two
        occupied cells is never reached, the piece cannot squeeze through.
        """
        ring = self.neighbors()
        empty = [cell not in board for cell in ring]
        targets: List[HiveCell] = []
        for i, cell in enumerate(ring):
            j = (i + 1) % len(ring)
            if empty[i] and empty[j]:
                for target in (cell, ring[j]):
                    if target not in targets:
                        targets.append(target)
        return targets

    def distance(self, other: "HiveCell") -> int:
        """Number of single steps between two cells."""
        dq = other.a + other.b - self.a - self.b
        dr = other.b + other.c - self.b - self.c
        return max(dq, dr, 0) - min(dq, dr, 0)
