from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Literal, Union

Outcome = Literal["Win", "Lose", "Draw"]

MIN_MOVES = 3


class GameError(Exception):
    """Base class for every error a round can surface to its caller."""


class InvalidMoveSet(GameError):
    pass


class UnknownMove(GameError):
    pass


class EntropyUnavailable(GameError):
    pass


class IntegrityViolation(GameError):
    """The revealed key and move do not reproduce the published commitment."""


@dataclass(frozen=True)
class MoveSet:
    """Ordered, duplicate-free move names. A move's index is its identity."""

    names: tuple[str, ...]

    def __post_init__(self) -> None:
        if isinstance(self.names, str):
            raise InvalidMoveSet("moves must be a sequence of names, not a single string")
        names = tuple(self.names)
        object.__setattr__(self, "names", names)
        if len(names) < MIN_MOVES:
            raise InvalidMoveSet(f"need at least {MIN_MOVES} moves, got {len(names)}")
        if len(names) % 2 == 0:
            raise InvalidMoveSet(f"number of moves must be odd, got {len(names)}")
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise InvalidMoveSet(f"moves must be unique, duplicated: {', '.join(dupes)}")

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "MoveSet":
        if isinstance(names, str):
            raise InvalidMoveSet("moves must be a sequence of names, not a single string")
        return cls(tuple(names))

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self) -> Iterator["Move"]:
        return (Move(self, i) for i in range(len(self.names)))

    @property
    def half(self) -> int:
        return len(self.names) // 2

    def move(self, name: str) -> "Move":
        try:
            return Move(self, self.names.index(name))
        except ValueError:
            raise UnknownMove(f"unknown move {name!r}; valid moves: {', '.join(self.names)}") from None

    def move_at(self, index: int) -> "Move":
        if not 0 <= index < len(self.names):
            raise UnknownMove(f"move index {index} out of range 0..{len(self.names) - 1}")
        return Move(self, index)

    def resolve(self, value: "MoveLike") -> "Move":
        if isinstance(value, Move):
            # Identity is tied to the owning set, not just the name.
            if value.move_set != self:
                raise UnknownMove(f"move {value.name!r} belongs to a different move set")
            return value
        return self.move(value)


@dataclass(frozen=True)
class Move:
    move_set: MoveSet
    index: int

    @property
    def name(self) -> str:
        return self.move_set.names[self.index]

    def __str__(self) -> str:
        return self.name


MoveLike = Union[Move, str]


def determine_outcome(move_set: MoveSet, row: MoveLike, column: MoveLike) -> Outcome:
    """Outcome of ``row`` played against ``column``.

    Each move beats the ``half`` moves that follow it in the set's order
    (wrapping around) and loses to the ``half`` moves before it, so the only
    draw is a move against itself. The result depends only on input order,
    not on any conventional meaning of the names.
    """
    idx_row = move_set.resolve(row).index
    idx_col = move_set.resolve(column).index

    distance = circular_distance(len(move_set), idx_row, idx_col)
    if distance == 0:
        return "Draw"
    if distance <= move_set.half:
        return "Win"
    return "Lose"


def circular_distance(n: int, start: int, end: int) -> int:
    """Steps forward from ``start`` to ``end`` around a cycle of length ``n``."""
    return (end - start) % n
