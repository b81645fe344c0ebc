from backend.engine.gameplay.game import (
    GameSession,
    apply_move,
    can_move,
    is_solved,
    neighbor_for,
)

__all__ = ["GameSession", "apply_move", "can_move", "is_solved", "neighbor_for"]
