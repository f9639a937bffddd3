# crucible/core/grid_io.py
#!/usr/bin/env python3
"""
Grid loading.

A map is a block of text, one line per row, each character a single digit
giving the cost to enter that cell.
"""

from pathlib import Path
from typing import List, Tuple, Union

from crucible.core.errors import MalformedInput
from crucible.core.types import Grid


def parse_grid(text: str) -> Grid:
    lines = text.strip().splitlines()
    if not lines:
        raise MalformedInput("empty grid")

    rows: List[Tuple[int, ...]] = []
    width = len(lines[0].rstrip())
    for r, line in enumerate(lines):
        line = line.rstrip()
        if len(line) != width:
            raise MalformedInput(f"row {r} has {len(line)} cells, expected {width}")
        row = []
        for c, ch in enumerate(line):
            # ASCII digits only
            if ch not in "0123456789":
                raise MalformedInput(f"invalid cost {ch!r} at row {r}, col {c}")
            row.append(int(ch))
        rows.append(tuple(row))
    return Grid(tuple(rows))


def load_map(path: Union[str, Path]) -> Grid:
    with open(path, "r", encoding="utf-8") as f:
        try:
            text = f.read()
        except UnicodeDecodeError as ex:
            raise MalformedInput(f"{path} is not UTF-8 text: {ex.reason} at byte {ex.start}") from ex
    return parse_grid(text)
