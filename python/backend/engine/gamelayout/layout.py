"""Maps board cells and tile labels to grid positions and pixel boxes.

Frontends draw cell ``index`` at :func:`tile_rect` and, for picture
puzzles, fill it with the part of the image given by :func:`crop_box`
for the label it holds. A label's crop never changes; only the cell it
is drawn into does.
"""

from __future__ import annotations

Rect = tuple[int, int, int, int]


def grid_position(index: int, size: int) -> tuple[int, int]:
    """Row and column of cell *index* on a *size*-wide board."""
    if not 0 <= index < size * size:
        raise IndexError(f"Cell index {index} out of range for size {size}.")
    return divmod(index, size)


def home_position(label: int, size: int) -> tuple[int, int]:
    """Row and column where *label* sits in the solved board."""
    if not 1 <= label < size * size:
        raise ValueError(f"Label {label} does not exist on a {size}×{size} board.")
    return divmod(label - 1, size)


def tile_rect(
    index: int,
    size: int,
    tile_px: int,
    gap: int = 0,
    origin: tuple[int, int] = (0, 0),
) -> Rect:
    """``(x, y, w, h)`` of cell *index* with *gap* px between tiles."""
    r, c = grid_position(index, size)
    ox, oy = origin
    return (ox + c * (tile_px + gap), oy + r * (tile_px + gap), tile_px, tile_px)


def crop_box(label: int, size: int, image_px: int) -> Rect:
    """``(x, y, w, h)`` of the square image piece belonging to *label*.

    *image_px* is the side of the (square, already scaled) picture.
    """
    piece = image_px // size
    r, c = home_position(label, size)
    return (c * piece, r * piece, piece, piece)


def index_at(
    point: tuple[int, int],
    size: int,
    tile_px: int,
    gap: int = 0,
    origin: tuple[int, int] = (0, 0),
) -> int | None:
    """Cell under *point*, or None when it falls in a gap or off the board."""
    x, y = point[0] - origin[0], point[1] - origin[1]
    if x < 0 or y < 0:
        return None
    step = tile_px + gap
    c, cx = divmod(x, step)
    r, cy = divmod(y, step)
    if r >= size or c >= size or cx >= tile_px or cy >= tile_px:
        return None
    return r * size + c
