from backend.engine.gamestate.state import GamePhase, GameState, GameTimer

__all__ = ["GamePhase", "GameState", "GameTimer"]
