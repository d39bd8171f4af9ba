from collections import deque
from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    LEFT = "L"
    RIGHT = "R"
    STAY = "S"


@dataclass(frozen=True)
class FrozenTape:
    """Read-only view of a tape: its non-blank window, head and external range."""

    tape: str
    head: int
    range: tuple

    def to_dict(self):
        return {"tape": self.tape, "head": self.head, "range": list(self.range)}


class Tape:
    """
    Single-track tape, infinite in both directions.
    Cells hold a symbol or None (blank). The head always sits on an
    existing cell; external index = internal index + offset.
    """

    def __init__(self, initial=""):
        self.cells = deque(initial) if initial else deque([None])
        self.head = 0
        self.offset = 0

    def read(self):
        return self.cells[self.head]

    def write(self, symbol):
        self.cells[self.head] = symbol

    def write_blank(self):
        self.cells[self.head] = None

    def move_left(self):
        if self.head == 0:
            self.cells.appendleft(None)
            self.offset -= 1
        else:
            self.head -= 1

    def move_right(self):
        if self.head == len(self.cells) - 1:
            self.cells.append(None)
        self.head += 1

    def move_to(self, direction):
        if direction is Direction.LEFT:
            self.move_left()
        elif direction is Direction.RIGHT:
            self.move_right()

    @property
    def position(self):
        """Head position as an external index."""
        return self.head + self.offset

    def freeze(self, blank_char="_"):
        cells = list(self.cells)
        visible = [
            i for i, symbol in enumerate(cells)
            if symbol is not None and symbol != blank_char
        ]
        if not visible:
            return FrozenTape("", self.position, (self.position, self.position))

        start, end = visible[0], visible[-1] + 1
        window = "".join(
            blank_char if symbol is None else symbol
            for symbol in cells[start:end]
        )
        return FrozenTape(window, self.position, (start + self.offset, end + self.offset))

    def __len__(self):
        return len(self.cells)

    def __repr__(self):
        return f"Tape({self.freeze()!r})"
