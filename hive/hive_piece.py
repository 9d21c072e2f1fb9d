"""Hive pieces, players and the unplaced piece inventory."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Iterable, Optional, Tuple

from hive.constants import PLAYER_1, PLAYER_2, STANDARD_PIECES
from hive.errors import InvariantViolation


class Player(IntEnum):
    P1 = PLAYER_1
    P2 = PLAYER_2

    @property
    def opponent(self) -> "Player":
        return Player.P2 if self is Player.P1 else Player.P1


class PieceKind(IntEnum):
    QUEEN = 1
    BEETLE = 2
    ANT = 3
    GRASSHOPPER = 4
    SPIDER = 5

    @classmethod
    def from_name(cls, name: str) -> "PieceKind":
        try:
            return cls[name.upper()]
        except KeyError as exc:
            raise ValueError(f"Unknown piece kind: {name!r}") from exc


@dataclass(frozen=True)
class Piece:
    """A piece on (or off) the board.

    Only a beetle may sit on top of another piece. The piece beneath is held in
    ``under`` for as long as the beetle stays there; beetles can stack on
    beetles, so ``under`` can itself carry a piece, to any depth.
    """

    kind: PieceKind
    player: Player
    under: Optional["Piece"] = None
    _key: tuple = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.under is not None and self.kind != PieceKind.BEETLE:
            raise ValueError(f"Only a beetle can sit on another piece, got {self.kind.name}")
        below = self.under.sort_key() if self.under is not None else ()
        object.__setattr__(self, "_key", (int(self.kind), int(self.player), below))

    def __repr__(self) -> str:
        name = f"{self.kind.name.title()}({self.player.name})"
        if self.under is not None:
            return f"{name}/{self.under!r}"
        return name

    def sort_key(self) -> tuple:
        """Total ordering key (kind, player, key of the piece beneath)."""
        return self._key

    def __lt__(self, other: "Piece") -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return self._key < other._key

    @property
    def is_beetle(self) -> bool:
        return self.kind == PieceKind.BEETLE

    def stack(self) -> Tuple["Piece", ...]:
        """Pieces on this cell, top first."""
        pieces = []
        piece: Optional[Piece] = self
        while piece is not None:
            pieces.append(piece)
            piece = piece.under
        return tuple(pieces)

    @property
    def height(self) -> int:
        return len(self.stack())

    def climb_onto(self, piece: Optional["Piece"]) -> "Piece":
        """Return this beetle sitting on ``piece`` (or on the ground for None)."""
        return replace(self, under=piece)

    def climb_off(self) -> Tuple["Piece", Optional["Piece"]]:
        """Return ``(beetle without a load, piece it was sitting on)``."""
        return replace(self, under=None), self.under


def standard_bag(player: Player, counts: Optional[Iterable[Tuple[PieceKind, int]]] = None) -> Tuple[Piece, ...]:
    """Build a player's full unplaced bag in inventory order."""
    if counts is None:
        counts = [(PieceKind.from_name(name), n) for name, n in STANDARD_PIECES.items()]
    return tuple(Piece(kind, player) for kind, n in counts for _ in range(n))


@dataclass(frozen=True)
class HiveInventory:
    """Unplaced pieces for both players, as ordered tuples.

    Two inventories are equal only if both sequences are equal element by
    element, so every removal keeps the relative order of what is left.
    """

    p1: Tuple[Piece, ...]
    p2: Tuple[Piece, ...]

    @classmethod
    def standard(cls, counts: Optional[Iterable[Tuple[PieceKind, int]]] = None) -> "HiveInventory":
        counts = list(counts) if counts is not None else None
        return cls(standard_bag(Player.P1, counts), standard_bag(Player.P2, counts))

    def for_player(self, player: Player) -> Tuple[Piece, ...]:
        return self.p1 if player == Player.P1 else self.p2

    def remove(self, player: Player, index: int) -> Tuple[Piece, "HiveInventory"]:
        """Take the piece at ``index`` from ``player``'s bag.

        Returns:
            (piece, new inventory) - the remaining pieces keep their order
        """
        bag = self.for_player(player)
        if not 0 <= index < len(bag):
            raise InvariantViolation(f"{player.name} has {len(bag)} unplaced pieces but the index was {index}")
        piece = bag[index]
        rest = bag[:index] + bag[index + 1:]
        if player == Player.P1:
            return piece, HiveInventory(rest, self.p2)
        return piece, HiveInventory(self.p1, rest)

    def count(self, player: Player, kind: PieceKind) -> int:
        return sum(1 for piece in self.for_player(player) if piece.kind == kind)

    def sort_key(self) -> tuple:
        return tuple(p.sort_key() for p in self.p1), tuple(p.sort_key() for p in self.p2)
