#!/usr/bin/env python3
import random
from typing import Dict, List, Tuple

# =========================
# Board generation
# =========================


class Board:
    def __init__(self, letters: List[str], width: int):
        if len(letters) != width * width:
            raise ValueError(f"A {width}x{width} board needs {width * width} letters, got {len(letters)}")
        self.letters = letters
        self.width = width

    def value_at(self, x: int, y: int) -> str:
        return self.letters[x + y * self.width]

    def neighbours(self, index: int):
        """Indices of the up to 8 cells touching `index`."""
        x, y = index % self.width, index // self.width
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                nx, ny = x + dx, y + dy
                if 0 <= nx < self.width and 0 <= ny < self.width:
                    yield nx + ny * self.width

    def __len__(self):
        return len(self.letters)

    def __str__(self):
        return render_board(self)


def render_board(board: Board) -> str:
    out = []
    for y in range(board.width):
        for x in range(board.width):
            out.append(board.value_at(x, y) + "\t")
        out.append("\n\n")
    return "".join(out)


def parse_distribution(text: str) -> List[Tuple[str, Tuple[int, ...]]]:
    """
    Parse `letter count1 count2 ...` lines. Blank lines and `#` comments are skipped.
    Order is preserved.
    """
    entries = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split()
        try:
            counts = tuple(int(p) for p in parts[1:])
        except ValueError:
            raise ValueError(f"Bad distribution line {line_no}: {line!r}") from None
        if not counts:
            raise ValueError(f"Distribution line {line_no} has no counts: {line!r}")
        entries.append((parts[0], counts))
    return entries


class BoardGenerator:
    """
    Draws random boards from a letter distribution.

    The k-th copy of a letter on one board is drawn with weight counts[k];
    a letter that already appears len(counts) times can no longer be drawn.
    """

    def __init__(self, distribution: Dict[str, Tuple[int, ...]]):
        self.distribution = dict(distribution)

    @classmethod
    def from_text(cls, text: str) -> "BoardGenerator":
        return cls(dict(parse_distribution(text)))

    def generate(self, width: int = 4, rng=None) -> Board:
        rng = rng or random
        used = {letter: 0 for letter in self.distribution}
        letters = []
        for _ in range(width * width):
            candidates = []
            weights = []
            for letter, counts in self.distribution.items():
                k = used[letter]
                if k < len(counts) and counts[k] > 0:
                    candidates.append(letter)
                    weights.append(counts[k])
            if not candidates:
                raise ValueError(f"Distribution runs out of letters before filling a {width}x{width} board")

            letter = rng.choices(candidates, weights=weights, k=1)[0]
            used[letter] += 1
            letters.append(letter)

        return Board(letters, width)
