"""
Texture rectangle packer.

Textures are laid out on horizontal shelves inside a square atlas whose side
is a power of two. The atlas starts at the smallest side that could hold the
total area (and the largest texture) and doubles until everything fits.
"""

import math
from dataclasses import dataclass
from typing import Any, Hashable, List, Optional, Sequence, Tuple

MIN_ATLAS_SIZE = 16
MAX_ATLAS_SIZE = 8192


def next_power_of_2(n: int) -> int:
    """Return the next power of 2 >= n."""
    if n <= 0:
        return 1
    return 1 << (n - 1).bit_length()


@dataclass(frozen=True)
class Placement:
    """Where one texture landed in the atlas."""
    id: Hashable
    x: int
    y: int
    width: int
    height: int


@dataclass
class Shelf:
    y: int
    height: int
    cursor: int = 0


class ShelfPacker:
    """
    Greedy shelf layout for one square atlas side.

    Each shelf is as tall as the first texture placed on it; later textures
    go on the first shelf with enough height and remaining width.
    """

    def __init__(self, size: int, padding: int = 0):
        self.size = size
        self.padding = padding
        self.shelves: List[Shelf] = []
        self.top = 0

    def insert(self, width: int, height: int) -> Optional[Tuple[int, int]]:
        """Reserve a width x height cell. Returns its (x, y) or None when full."""
        if width > self.size:
            return None

        for shelf in self.shelves:
            if height + self.padding <= shelf.height and shelf.cursor + width <= self.size:
                x = shelf.cursor
                shelf.cursor += width + self.padding
                return x, shelf.y

        if self.top + height > self.size:
            return None
        shelf = Shelf(y=self.top, height=height + self.padding, cursor=width + self.padding)
        self.shelves.append(shelf)
        self.top += shelf.height
        return 0, shelf.y


def _starting_size(rects: Sequence[Tuple[int, int, Any]], padding: int, min_size: int) -> int:
    area = sum((w + padding) * (h + padding) for w, h, _ in rects)
    longest_side = max(max(w, h) for w, h, _ in rects)
    return max(
        min_size,
        next_power_of_2(math.ceil(math.sqrt(area))),
        next_power_of_2(longest_side),
    )


def pack_rectangles(
    rects: Sequence[Tuple[int, int, Hashable]],
    padding: int = 0,
    min_size: int = MIN_ATLAS_SIZE,
    max_size: int = MAX_ATLAS_SIZE
) -> Tuple[List[Placement], int]:
    """
    Pack (width, height, id) rects into the smallest power-of-2 square.

    Tall textures are placed first; equal sizes keep their input order.
    `padding` leaves empty pixels right of and below each texture.

    Returns:
        (placements, atlas_size)

    Raises:
        RuntimeError: If the rects don't fit into max_size x max_size
    """
    if not rects:
        return [], min_size

    ordered = sorted(rects, key=lambda r: (r[1], r[0]), reverse=True)
    size = _starting_size(rects, padding, min_size)

    while size <= max_size:
        packer = ShelfPacker(size, padding)
        placements: List[Placement] = []
        for width, height, rect_id in ordered:
            position = packer.insert(width, height)
            if position is None:
                break
            placements.append(Placement(rect_id, position[0], position[1], width, height))
        else:
            return placements, size
        size *= 2

    raise RuntimeError(f"Could not pack {len(rects)} textures into a {max_size}x{max_size} atlas")
