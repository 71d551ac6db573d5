"""A small space-invaders style arcade game with a display-free game model."""

__version__ = "0.1.0"
__all__ = ["linalg", "entities", "assets", "game", "app"]