from backend.engine.gamegenerator.generator import MAX_ATTEMPTS, GameGenerator

__all__ = ["GameGenerator", "MAX_ATTEMPTS"]
