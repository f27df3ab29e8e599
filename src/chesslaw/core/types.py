"""Square value type and coordinate helpers.

Squares are addressed by ``(file, rank)`` with both indexes in 0-7:
    a1 = (0, 0), h1 = (7, 0), a8 = (0, 7), h8 = (7, 7)

A :class:`Square` may lie off the board (e.g. produced by an offset or a
raw UI coordinate); callers check :meth:`Square.is_on_board` before use.
"""

from __future__ import annotations

from dataclasses import dataclass

from chesslaw.core.errors import OutOfBoundsError

BOARD_SIZE = 8
FILES = "abcdefgh"


@dataclass(frozen=True, slots=True, order=True)
class Square:
    """Immutable board coordinate."""

    file: int
    rank: int

    def is_on_board(self) -> bool:
        return 0 <= self.file < BOARD_SIZE and 0 <= self.rank < BOARD_SIZE

    def offset(self, df: int, dr: int) -> Square:
        return Square(self.file + df, self.rank + dr)

    @property
    def name(self) -> str:
        """Algebraic name, e.g. ``Square(4, 3).name == 'e4'``."""
        if not self.is_on_board():
            raise OutOfBoundsError(f"Square off board: ({self.file}, {self.rank})")
        return FILES[self.file] + str(self.rank + 1)

    def __str__(self) -> str:
        return self.name


def make_square(file: int, rank: int) -> Square:
    """Create square from file (0-7) and rank (0-7)."""
    return Square(file, rank)


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (0, 0) -> 'a1'."""
    return sq.name


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' -> Square(4, 3)."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in "12345678":
        raise OutOfBoundsError(f"Invalid square name: {name!r}")
    return Square(FILES.index(name[0]), int(name[1]) - 1)


def all_squares() -> list[Square]:
    """Every square on the board, a1 to h8 rank by rank."""
    return [Square(f, r) for r in range(BOARD_SIZE) for f in range(BOARD_SIZE)]


def step_toward(start: int, end: int) -> int:
    """Unit step (-1, 0 or 1) from *start* toward *end*."""
    return (end > start) - (end < start)


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (Square(f, 0) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(f, 1) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(f, 2) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(f, 3) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(f, 4) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(f, 5) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(f, 6) for f in range(8))
A8, B8, C8, D8, E8, F8, G8, H8 = (Square(f, 7) for f in range(8))
