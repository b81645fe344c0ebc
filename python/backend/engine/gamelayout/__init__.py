from backend.engine.gamelayout.layout import (
    crop_box,
    grid_position,
    home_position,
    index_at,
    tile_rect,
)

__all__ = ["crop_box", "grid_position", "home_position", "index_at", "tile_rect"]
